"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking
  them into the CLI.
- Adapters read endpoints, timeouts and the credential from one contract.

Note: `AUTH_HEADER` keeps its bare name for compatibility with existing
scripts; every other variable carries the `SCREENSHOTS_PDF_` prefix.
"""

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_API_BASE_URL = "https://mobile-api.lambdatest.com/mobile-automation/api/v1/sessions"


class AppSettings(BaseSettings):
    """Central application settings.

    `auth_header` keeps the historical `AUTH_HEADER` variable name; every other
    field is read with the `SCREENSHOTS_PDF_` prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCREENSHOTS_PDF_",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    auth_header: str = Field(
        default="",
        validation_alias=AliasChoices("AUTH_HEADER", "SCREENSHOTS_PDF_AUTH_HEADER"),
        description="Full HTTP Authorization header value (e.g. 'Basic <encoded>').",
    )
    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        min_length=8,
        description="Base URL of the sessions API (without trailing session id).",
    )
    api_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for the screenshots metadata request (seconds).",
    )
    download_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout for the archive download (seconds).",
    )
    download_chunk_size: int = Field(
        default=64 * 1024,
        ge=1024,
        description="Chunk size used when streaming the archive to disk (bytes).",
    )
    user_agent: str = Field(
        default="screenshots-pdf/0.1",
        min_length=1,
        description="User-Agent sent with every request.",
    )
