"""Decorators for command functions."""

import asyncio
import functools
import time
import traceback
from collections.abc import Callable

import typer

from taskpad_cli.models.exceptions import TaskpadError, ValidationError
from taskpad_cli.services.auth_service import AuthError, AuthService
from taskpad_cli.utils import exit_codes
from taskpad_cli.utils.logger import get_logger
from taskpad_cli.utils.ui.formatters import format_error


def _require_auth() -> None:
    """Require a signed-in user; the task list is only reachable when signed in."""
    if not AuthService().is_authenticated():
        format_error("Not signed in. Use 'taskpad login' to authenticate.")
        raise typer.Exit(exit_codes.ERROR_AUTH_FAILURE)


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = exit_codes.ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def exit_code_for(error: TaskpadError) -> int:
    """Map a store or boundary error to a process exit code."""
    if isinstance(error, ValidationError):
        if error.reason == ValidationError.NOT_FOUND:
            return exit_codes.ERROR_NOT_FOUND
        return exit_codes.ERROR_INVALID_ARGS
    if isinstance(error, AuthError):
        return exit_codes.ERROR_AUTH_FAILURE
    return exit_codes.ERROR_NETWORK


def command_wrapper(_func: Callable | None = None, *, auth_required: bool = True):
    """Decorator to wrap command functions with common functionality."""

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            cmd = func.__name__
            start = time.monotonic()
            logger.info("command started: %s", cmd)
            try:
                # 1. Handle Auth
                if auth_required:
                    _require_auth()

                # 2. Run Sync or Async
                if asyncio.iscoroutinefunction(func):
                    result = asyncio.run(func(*args, **kwargs))
                else:
                    result = func(*args, **kwargs)

                elapsed = time.monotonic() - start
                logger.info("command completed: %s (%.3fs)", cmd, elapsed)
                return result

            except AppError as e:
                elapsed = time.monotonic() - start
                logger.error("command failed: %s (%.3fs) - %s", cmd, elapsed, str(e))
                format_error(str(e))
                raise typer.Exit(code=e.exit_code) from e

            except AuthError as e:
                elapsed = time.monotonic() - start
                logger.error("command failed: %s (%.3fs) - %s", cmd, elapsed, str(e))
                format_error(str(e))
                raise typer.Exit(code=exit_codes.ERROR_AUTH_FAILURE) from e

            except TaskpadError as e:
                # Already reported to the user through a notification
                code = exit_code_for(e)
                elapsed = time.monotonic() - start
                logger.error(
                    "command failed: %s (%.3fs) - %s [%s]",
                    cmd,
                    elapsed,
                    str(e),
                    exit_codes.get_exit_code_name(code),
                )
                raise typer.Exit(code=code) from e

            except typer.Exit:
                # Re-raise Typer's own exits (like --help or explicit Exit(0))
                raise

            except Exception as e:
                elapsed = time.monotonic() - start
                logger.error(
                    "command failed: %s (%.3fs) - %s\n%s",
                    cmd,
                    elapsed,
                    str(e),
                    traceback.format_exc(),
                )
                format_error(f"An unexpected error occurred: {str(e)}")
                raise typer.Exit(code=exit_codes.ERROR_GENERAL) from e

        return wrapper

    if _func is None:
        return decorator
    return decorator(_func)
