"""
core/config.py
----------------

Client configuration module.

Defines strongly-typed settings loaded from the environment using
``pydantic-settings``.  These settings control the store credentials
used by the entry points, the HTTP timeout, the retry bounds and the
pagination guard.  Library callers can ignore them entirely and pass
explicit values to :class:`~vend_api.clients.http_client.VendHTTPClient`
and :class:`~vend_api.clients.vend_client.VendClient`.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Marks "not given" for limits where ``None`` already means unbounded.
FROM_SETTINGS: Any = object()

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Settings loaded from environment variables.

    The settings structure is flat and uses environment variables
    prefixed with ``VEND_``.  For example, to bound the retry loop to
    five attempts set ``VEND_HTTP_MAX_ATTEMPTS=5``.
    """

    # Store credentials (used by the CLI and the HTTP facade)
    token: str = Field("", description="Personal API access token, generated from Setup -> API Access.")
    domain_prefix: str = Field("", description="Store name, the prefix of xxxx.vendhq.com.")
    timezone: str = Field("Local", description="Store timezone in zoneinfo format.")

    # HTTP client settings
    user_agent: str = Field("vend-api-python", description="User-Agent sent with every request.")
    http_timeout: float = Field(30.0, gt=0, description="Timeout for a single HTTP request in seconds.")
    http_max_attempts: Optional[int] = Field(
        8, ge=1, description="Maximum attempts per request including the first; unset for no limit."
    )
    http_max_retry_duration: Optional[float] = Field(
        None, gt=0, description="Maximum seconds spent retrying a single request; unset for no limit."
    )

    # Pagination guard
    max_pages: Optional[int] = Field(None, ge=1, description="Maximum number of pages requested per resource.")

    log_level: str = Field("INFO", description="Level of the vend logger for the CLI and HTTP facade.")

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {v!r}")
        return v

    model_config = SettingsConfigDict(env_prefix="VEND_", env_file=None, case_sensitive=False)


@lru_cache()
def get_settings() -> Settings:
    """Return a cached instance of the settings.

    Using a cache prevents parsing the environment on every call.
    Tests that change the environment call ``get_settings.cache_clear()``.
    """
    return Settings()
