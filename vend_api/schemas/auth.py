"""
schemas/auth.py
----------------

Store credentials shared by every call of a client.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vend_api.core.auth import get_base_url, is_valid_domain_prefix, normalize_domain_prefix
from vend_api.utils.dates import load_timezone, parse_vend_datetime


class VendCredentials(BaseModel):
    """Personal API token, store domain prefix and store timezone.

    Instances are immutable and safe to share between clients.  The
    token is left out of the model's repr.
    """

    token: str = Field(repr=False)
    domain_prefix: str
    timezone: str = "Local"

    model_config = ConfigDict(frozen=True)

    @field_validator("token")
    @classmethod
    def check_token(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("The API token cannot be empty")
        return v

    @field_validator("domain_prefix")
    @classmethod
    def check_domain_prefix(cls, v: str) -> str:
        v = normalize_domain_prefix(v)
        if not v:
            raise ValueError("The domain prefix cannot be empty")
        if not is_valid_domain_prefix(v):
            raise ValueError(f"The domain prefix {v!r} is not a valid store name")
        return v

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, v: str) -> str:
        v = v.strip()
        load_timezone(v)
        return v

    @property
    def base_url(self) -> str:
        return get_base_url(self.domain_prefix)

    def localize(self, value: str) -> datetime:
        """Parse a Vend timestamp into the store's timezone."""
        return parse_vend_datetime(value, self.timezone)
