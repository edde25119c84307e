"""Site configuration model."""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator

_APP_PASSWORD_RE = re.compile(r"^[A-Za-z0-9]{24}$")


def is_valid_application_password(password: str) -> bool:
    """WordPress application passwords are 24 alphanumerics, usually grouped
    as ``xxxx xxxx xxxx xxxx xxxx xxxx``."""
    return bool(_APP_PASSWORD_RE.match(re.sub(r"\s", "", password)))


class RateLimitPolicy(BaseModel):
    """Client-side request budget."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    requests_per_minute: int = Field(default=60, gt=0)
    burst_limit: int = Field(default=10, gt=0)


class WordPressConfig(BaseModel):
    """Validated connection settings for one WordPress site.

    Immutable: re-configuration builds a new instance.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    site_url: str = Field(..., min_length=1, description="Absolute site URL.")
    username: str = Field(..., min_length=1)
    app_password: str = Field(..., min_length=1, repr=False)
    verify_ssl: bool = True
    timeout: int = Field(default=30000, gt=0, description="Request timeout in ms.")
    rate_limit: RateLimitPolicy | None = None

    @field_validator("site_url")
    @classmethod
    def validate_site_url(cls, v: str) -> str:
        parts = urlsplit(v)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError("site_url must be an absolute http(s) URL")
        return v.rstrip("/")

    @field_validator("app_password")
    @classmethod
    def validate_app_password(cls, v: str) -> str:
        if not is_valid_application_password(v):
            raise ValueError(
                "Application password format is invalid. "
                "Should be in format: xxxx xxxx xxxx xxxx xxxx xxxx"
            )
        return v

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000

    def public_dict(self) -> dict:
        """Configuration without the application password."""
        return self.model_dump(exclude={"app_password"})
