"""API client for the remote task service."""

from __future__ import annotations

from typing import Any

import httpx

from taskpad_cli.models.exceptions import NetworkError
from taskpad_cli.services.config_service import ConfigService, get_config_service
from taskpad_cli.utils.logger import get_logger


class APIClient:
    """HTTP client for a JSON API.

    Every request is a single round trip: there are no retries. Non-2xx
    responses and transport failures are raised as :class:`NetworkError`.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        config_service: ConfigService | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config_manager = config_service or get_config_service()
        self.config = self.config_manager.config
        self.base_url = (base_url or self.config_manager.api_endpoint).rstrip("/")
        self.timeout = self.config.api.timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self.logger = get_logger()

    async def __aenter__(self) -> "APIClient":
        """Enter the async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit the async context manager and ensure the client is closed."""
        await self.close()

    def _get_headers(self, skip_auth: bool = False) -> dict[str, str]:
        """Get HTTP headers with authentication."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        if not skip_auth:
            credentials = self.config_manager.load_credentials()
            if credentials and credentials.get("id_token"):
                headers["Authorization"] = f"Bearer {credentials['id_token']}"

        return headers

    async def _get_client(self, skip_auth: bool = False) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        # Always update headers to include latest auth token
        self._client.headers.update(self._get_headers(skip_auth=skip_auth))
        if skip_auth:
            self._client.headers.pop("Authorization", None)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        skip_auth: bool = False,
    ) -> httpx.Response:
        """Make an HTTP request to the API."""
        client = await self._get_client(skip_auth=skip_auth)
        url = f"{path}" if path.startswith("/") else f"/{path}"

        try:
            response = await client.request(
                method=method,
                url=url,
                json=json,
                params=params,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            self.logger.warning("%s %s -> %s", method, url, status)
            raise NetworkError(
                f"{method} {url} failed with status {status}",
                status_code=status,
                detail=_error_detail(e.response),
            ) from e
        except httpx.RequestError as e:
            self.logger.warning("%s %s -> transport error: %s", method, url, e)
            raise NetworkError(f"{method} {url} failed: {e}") from e

        self.logger.debug("%s %s -> %s", method, url, response.status_code)
        return response

    async def get(
        self, path: str, *, params: dict[str, Any] | None = None
    ) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        skip_auth: bool = False,
    ) -> httpx.Response:
        """Make a POST request."""
        return await self.request(
            "POST", path, json=json, params=params, skip_auth=skip_auth
        )

    async def put(
        self, path: str, *, json: dict[str, Any] | None = None
    ) -> httpx.Response:
        """Make a PUT request."""
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request("DELETE", path)


def _error_detail(response: httpx.Response) -> str | None:
    """Pull a human-readable message out of an error response body."""
    try:
        data = response.json()
    except ValueError:
        return None

    if isinstance(data, dict):
        error = data.get("error")
        # Identity provider errors nest the message
        if isinstance(error, dict):
            return error.get("message")
        detail = data.get("message") or error
        return str(detail) if detail else None
    return None


def get_client(base_url: str | None = None) -> APIClient:
    """Get an API client instance."""
    return APIClient(base_url)
