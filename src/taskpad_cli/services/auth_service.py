"""Service for handling authentication-related operations.

The identity provider is an external collaborator. This service signs
users in and out, persists the resulting credentials through
:class:`ConfigService`, and publishes a current-user signal that gates
whether a task session may be mounted.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from pydantic import ValidationError as PydanticValidationError

from taskpad_cli.models.exceptions import TaskpadError
from taskpad_cli.models.user import CurrentUser
from taskpad_cli.services.api.client import APIClient
from taskpad_cli.services.api.identity import IdentityAPI
from taskpad_cli.services.config_service import ConfigService, get_config_service
from taskpad_cli.utils.logger import get_logger

_EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
MIN_PASSWORD_LENGTH = 6

UserListener = Callable[[CurrentUser | None], None]


class AuthError(TaskpadError):
    """Raised when sign-in, sign-up or sign-out is rejected."""


class AuthService:
    """Sign-in state for the identity provider."""

    def __init__(
        self,
        config_service: ConfigService | None = None,
        identity_api: IdentityAPI | None = None,
    ):
        self.config_service = config_service or get_config_service()
        self._identity_api = identity_api
        self._listeners: list[UserListener] = []
        self.logger = get_logger()

    @property
    def identity_api(self) -> IdentityAPI:
        if self._identity_api is None:
            client = APIClient(
                self.config_service.config.auth.endpoint,
                config_service=self.config_service,
            )
            self._identity_api = IdentityAPI(client, self.config_service.auth_api_key)
        return self._identity_api

    def current_user(self) -> CurrentUser | None:
        """Return the signed-in user, or None."""
        credentials = self.config_service.load_credentials()
        if not credentials:
            return None
        try:
            return CurrentUser.model_validate(credentials)
        except PydanticValidationError:
            self.logger.warning("ignoring malformed stored credentials")
            return None

    def is_authenticated(self) -> bool:
        return self.current_user() is not None

    def subscribe(self, listener: UserListener) -> Callable[[], None]:
        """Call *listener* now and on every sign-in or sign-out."""
        self._listeners.append(listener)
        listener(self.current_user())

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def sign_in(self, email: str, password: str) -> CurrentUser:
        if not email or not password:
            raise AuthError("Email and password are required")

        try:
            result = await self.identity_api.sign_in(email, password)
        except TaskpadError as e:
            detail = getattr(e, "detail", None) or str(e)
            self.logger.error("sign-in failed for %s: %s", email, detail)
            raise AuthError(f"Sign-in failed: {detail}") from e

        user = CurrentUser(
            uid=result.get("localId", ""),
            email=result.get("email", email),
            display_name=result.get("displayName") or None,
            id_token=result.get("idToken"),
            refresh_token=result.get("refreshToken"),
        )
        self.config_service.save_credentials(user.model_dump())
        self.logger.info("signed in as %s", user.email)
        self._emit(user)
        return user

    async def sign_up(self, email: str, password: str) -> str:
        """Register an account; the caller must sign in afterwards."""
        if not _EMAIL_PATTERN.search(email or ""):
            raise AuthError("Please enter a valid email address.")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise AuthError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
            )

        try:
            result = await self.identity_api.sign_up(email, password)
        except TaskpadError as e:
            detail = getattr(e, "detail", None) or str(e)
            self.logger.error("sign-up failed for %s: %s", email, detail)
            raise AuthError(f"Failed to register: {detail}") from e

        self.logger.info("registered %s", email)
        return result.get("localId", "")

    def sign_out(self) -> None:
        self.config_service.clear_credentials()
        self.logger.info("signed out")
        self._emit(None)

    async def close(self) -> None:
        if self._identity_api is not None:
            await self._identity_api.client.close()

    def _emit(self, user: CurrentUser | None) -> None:
        for listener in list(self._listeners):
            listener(user)
