"""
Exit codes for taskpad.

Commands exit with a semantic code so scripts can tell a rejected input
from a network outage or a missing sign-in.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error (empty or duplicate task text)
ERROR_INVALID_ARGS = 2

# Not signed in, or sign-in rejected
ERROR_AUTH_FAILURE = 3

# Network or API error (server unreachable, non-2xx response)
ERROR_NETWORK = 4

# Resource not found
ERROR_NOT_FOUND = 5


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_AUTH_FAILURE: "ERROR_AUTH_FAILURE",
        ERROR_NETWORK: "ERROR_NETWORK",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
    }
    return code_names.get(code, f"UNKNOWN({code})")
