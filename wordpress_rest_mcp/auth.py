"""WordPress Application Password authentication and credential hygiene."""

from __future__ import annotations

import base64
import re
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any
from urllib.parse import urlsplit

from .config import API_PREFIX, AUTH_CACHE_SECONDS, HIGH_TIMEOUT_MS, logger
from .errors import AuthErrorType, WordPressError
from .models import (
    ConnectionDetails,
    ConnectionErrorInfo,
    ConnectionTestResult,
    SecurityValidationResult,
    WordPressConfig,
    is_valid_application_password,
)

LOOPBACK_HOSTS = {"localhost", "127.0.0.1", "::1"}

# "user:password" encodes to at least 16 characters for any real credential
_BASIC_TOKEN_RE = re.compile(r"Basic\s+[A-Za-z0-9+/]{16,}={0,2}", re.IGNORECASE)
_PLACEHOLDER_RE = re.compile(r"(\[(?:CREDENTIALS|PASSWORD|USERNAME)\])")


def basic_auth_header(username: str, password: str) -> str:
    """Return the HTTP Basic Authorization header value for the credentials."""
    token = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
    return f"Basic {token}"


def check_security(config: WordPressConfig) -> SecurityValidationResult:
    """Check a configuration against the security policy.

    Non-HTTPS URLs are issues (hard failures); loopback hosts, disabled
    SSL verification and timeouts over 60 seconds are warnings.
    """
    issues: list[str] = []
    warnings: list[str] = []

    parts = urlsplit(config.site_url)
    if not parts.scheme or not parts.hostname:
        issues.append("Invalid site URL format")
    else:
        if parts.scheme != "https":
            issues.append("Site URL must use HTTPS")
        if parts.hostname in LOOPBACK_HOSTS:
            warnings.append("Using localhost - ensure this is for development only")

    if not config.verify_ssl:
        warnings.append("SSL verification is disabled - this reduces security")
    if config.timeout > HIGH_TIMEOUT_MS:
        warnings.append(
            "Timeout is set very high - consider reducing for better user experience"
        )

    return SecurityValidationResult(is_secure=not issues, issues=issues, warnings=warnings)


@dataclass(frozen=True)
class Credentials:
    username: str
    encoded: str  # base64 of "username:password"


@dataclass(frozen=True)
class AuthState:
    is_authenticated: bool = False
    last_verified: datetime | None = None
    credentials: Credentials | None = None


class AuthenticationManager:
    """Holds one site's configuration and derived authentication state.

    ``authenticate()`` is local only: it derives the Basic credentials and
    marks the state authenticated. The server verifies them on the first real
    request; a 401 there leads the HTTP client to call ``invalidate_auth()``.

    Args:
        config: Validated site configuration.
        clock: Monotonic clock in seconds, used for the freshness cache.

    Raises:
        WordPressError: INVALID_URL for a non-HTTPS or malformed site URL,
            INVALID_CREDENTIALS for a malformed application password.
    """

    def __init__(
        self,
        config: WordPressConfig,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self._config = config
        self._state = AuthState()
        self._last_check: float | None = None
        self._validate_configuration()

    # -- configuration -----------------------------------------------------

    def _validate_configuration(self) -> None:
        validation = self.validate_security()
        if not validation.is_secure:
            raise WordPressError(
                AuthErrorType.INVALID_URL,
                f"Security validation failed: {', '.join(validation.issues)}",
            )
        for warning in validation.warnings:
            logger.warning("Security warning: %s", warning)

        if not is_valid_application_password(self._config.app_password):
            raise WordPressError(
                AuthErrorType.INVALID_CREDENTIALS,
                "Application password format is invalid. "
                "Should be in format: xxxx xxxx xxxx xxxx xxxx xxxx",
            )

    def validate_security(self) -> SecurityValidationResult:
        return check_security(self._config)

    @property
    def config(self) -> WordPressConfig:
        return self._config

    @property
    def site_url(self) -> str:
        return self._config.site_url

    @property
    def api_base_url(self) -> str:
        return f"{self._config.site_url.rstrip('/')}{API_PREFIX}"

    def public_config(self) -> dict[str, Any]:
        """The configuration without the application password."""
        return self._config.public_dict()

    def update_config(self, new_config: WordPressConfig) -> None:
        """Replace the configuration, re-validate and re-authenticate.

        On validation failure the previous configuration stays in place.
        """
        previous = self._config
        self._config = new_config
        try:
            self._validate_configuration()
        except WordPressError:
            self._config = previous
            raise
        self.invalidate_auth()
        self.authenticate()

    # -- authentication state ----------------------------------------------

    def generate_auth_header(self) -> str:
        return basic_auth_header(self._config.username, self._config.app_password)

    def authenticate(self) -> None:
        """Derive and store the Basic credentials. No network call."""
        encoded = self.generate_auth_header().removeprefix("Basic ")
        self._state = AuthState(
            is_authenticated=True,
            last_verified=datetime.now(timezone.utc),
            credentials=Credentials(username=self._config.username, encoded=encoded),
        )
        self._last_check = self._clock()
        logger.debug("Credentials prepared for %s", self._config.site_url)

    def is_authenticated(self) -> bool:
        """Whether credentials are held.

        Within the freshness window this is answered from the cache; after it
        the flag alone decides. Only invalidate_auth() clears it, so a revoked
        remote credential surfaces on the next failing request.
        """
        if not self._state.is_authenticated:
            return False
        if self._last_check is not None and not self._cache_expired():
            return True
        return self._state.is_authenticated

    def needs_reauth(self) -> bool:
        """True when not authenticated or the freshness window has elapsed."""
        if not self._state.is_authenticated or self._last_check is None:
            return True
        return self._cache_expired()

    def _cache_expired(self) -> bool:
        return self._clock() - self._last_check > AUTH_CACHE_SECONDS

    def invalidate_auth(self) -> None:
        self._state = AuthState()
        self._last_check = None

    @property
    def auth_state(self) -> AuthState:
        return replace(self._state)

    def get_authorization_header(self) -> str:
        if self._state.credentials is None:
            raise WordPressError(
                AuthErrorType.UNAUTHORIZED, "No authentication credentials available"
            )
        return f"Basic {self._state.credentials.encoded}"

    # -- error hygiene -------------------------------------------------------

    def sanitize_error_message(self, error: str | BaseException) -> str:
        """Redact credentials from an error message.

        Replaces ``Basic <token>`` values, the configured application password
        (with or without its spaces) and the username, case-insensitively.
        Existing placeholders are never rewritten, so sanitizing twice gives
        the same text.
        """
        message = str(error)
        for pattern, placeholder in self._redaction_rules():
            parts = _PLACEHOLDER_RE.split(message)
            # Odd indices are the captured placeholders
            message = "".join(
                part if index % 2 else pattern.sub(placeholder, part)
                for index, part in enumerate(parts)
            )
        return message

    def _redaction_rules(self) -> list[tuple[re.Pattern[str], str]]:
        rules = [(_BASIC_TOKEN_RE, "Basic [CREDENTIALS]")]
        password = self._config.app_password
        for secret in sorted({password, re.sub(r"\s", "", password)}, key=len, reverse=True):
            if secret:
                rules.append((re.compile(re.escape(secret), re.IGNORECASE), "[PASSWORD]"))
        if self._config.username:
            rules.append(
                (re.compile(re.escape(self._config.username), re.IGNORECASE), "[USERNAME]")
            )
        return rules

    def create_connection_test_result(
        self,
        success: bool,
        message: str,
        error: BaseException | None = None,
    ) -> ConnectionTestResult:
        """Build a ConnectionTestResult, sanitizing any attached error."""
        result = ConnectionTestResult(
            success=success,
            message=self.sanitize_error_message(message),
            details=ConnectionDetails(site_url=self._config.site_url),
        )
        if error is not None:
            if isinstance(error, WordPressError):
                code = error.error_type.value
                status = error.http_status
            else:
                code = AuthErrorType.UNKNOWN_ERROR.value
                status = None
            result.error = ConnectionErrorInfo(
                code=code,
                message=self.sanitize_error_message(error),
                http_status=status,
            )
        return result
