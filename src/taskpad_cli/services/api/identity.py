"""Identity provider endpoints (Firebase-compatible REST API)."""

from __future__ import annotations

from taskpad_cli.services.api.client import APIClient


class IdentityAPI:
    """Email/password accounts against the identity provider."""

    def __init__(self, client: APIClient, api_key: str):
        self.client = client
        self.api_key = api_key

    async def sign_in(self, email: str, password: str) -> dict:
        """Sign in with email and password."""
        response = await self.client.post(
            "/accounts:signInWithPassword",
            json={"email": email, "password": password, "returnSecureToken": True},
            params={"key": self.api_key},
            skip_auth=True,
        )
        return response.json()

    async def sign_up(self, email: str, password: str) -> dict:
        """Create a new account."""
        response = await self.client.post(
            "/accounts:signUp",
            json={"email": email, "password": password, "returnSecureToken": True},
            params={"key": self.api_key},
            skip_auth=True,
        )
        return response.json()
