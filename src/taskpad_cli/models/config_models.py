"""Configuration models for taskpad."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class APIConfig(BaseModel):
    """Remote task API configuration."""

    endpoint: str = Field(default="http://localhost:5000")
    timeout: int = Field(default=30)

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("endpoint cannot be empty")
        return v.strip().rstrip("/")


class AuthConfig(BaseModel):
    """Identity provider configuration."""

    endpoint: str = Field(default="https://identitytoolkit.googleapis.com/v1")
    api_key: str = Field(default="")


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = Field(default="pretty")
    color: bool = Field(default=True)


class UIConfig(BaseModel):
    """UI configuration."""

    page_size: int = Field(default=4, ge=1)
    notification_duration_ms: int = Field(default=3000, ge=0)


class AppConfig(BaseModel):
    """Main taskpad configuration"""

    api: APIConfig = Field(default_factory=APIConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
