"""Environment-driven configuration for the API client."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiClientSettings(BaseSettings):
    """Settings read from `WITSMLEXPLORER_*` environment variables or `.env`."""

    model_config = SettingsConfigDict(
        env_prefix="WITSMLEXPLORER_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    api_url: str | None = Field(
        default=None,
        description="Absolute URL of the backend API. Overrides page_location.",
    )
    page_location: str | None = Field(
        default=None,
        description="URL the frontend is served from, used to derive the origin.",
    )
    auth_enabled: bool = Field(
        default=False,
        description="Send bearer tokens and refuse to send requests without one.",
    )
    api_scope: str | None = Field(
        default=None,
        description="Scope requested from the token provider.",
    )

    @property
    def scopes(self) -> list[str]:
        return [self.api_scope] if self.api_scope else []
