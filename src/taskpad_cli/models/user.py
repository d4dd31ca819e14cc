"""User data models."""

from __future__ import annotations

from pydantic import BaseModel


class CurrentUser(BaseModel):
    """The signed-in user as reported by the identity provider."""

    uid: str
    email: str
    display_name: str | None = None
    id_token: str | None = None
    refresh_token: str | None = None

    @property
    def greeting_name(self) -> str:
        return self.display_name or self.email
