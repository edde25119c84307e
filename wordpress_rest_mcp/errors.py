"""Error taxonomy for WordPress authentication and REST API failures.

Errors are classified once, where the transport meets application code
(see http_client.py), and carried up as WordPressError with a fixed
AuthErrorType. The helpers below turn an error into user-facing text,
recovery suggestions and a log level; they never re-classify.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models.results import ConnectionTestResult

logger = logging.getLogger("wordpress_rest_mcp")


class AuthErrorType(str, Enum):
    """Classification of a failed WordPress operation."""

    INVALID_CONFIG = "INVALID_CONFIG"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"
    INVALID_URL = "INVALID_URL"
    SSL_ERROR = "SSL_ERROR"
    RATE_LIMITED = "RATE_LIMITED"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class WordPressError(Exception):
    """A classified WordPress failure.

    Attributes:
        error_type: Taxonomy bucket.
        message: Sanitized human-readable message.
        http_status: HTTP status of the failing response, if any.
        code: WordPress error code (e.g. ``rest_invalid_param``) or the
            error type value when WordPress did not supply one.
        params: WordPress ``data.params`` mapping, if supplied.
    """

    def __init__(
        self,
        error_type: AuthErrorType,
        message: str,
        http_status: int | None = None,
        code: str | None = None,
        params: dict[str, Any] | None = None,
    ) -> None:
        self.error_type = error_type
        self.message = message
        self.http_status = http_status
        self.code = code or error_type.value
        self.params = params
        super().__init__(message)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(error_type={self.error_type.value!r}, "
            f"message={self.message!r}, http_status={self.http_status!r})"
        )

    @property
    def recoverable(self) -> bool:
        return is_recoverable(self)

    def to_dict(self) -> dict[str, Any]:
        """Convert the error to a dictionary for serialization."""
        data: dict[str, Any] = {
            "type": self.error_type.value,
            "code": self.code,
            "message": self.message,
        }
        if self.http_status is not None:
            data["http_status"] = self.http_status
        if self.params:
            data["params"] = self.params
        return data


class ConfigurationError(WordPressError):
    """Raised when configuration is missing or invalid. Never retryable."""

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        super().__init__(AuthErrorType.INVALID_CONFIG, message)
        self.fields = fields or []


# ---------------------------------------------------------------------------
# Classification metadata
# ---------------------------------------------------------------------------

_RECOVERABLE = {
    AuthErrorType.TIMEOUT,
    AuthErrorType.NETWORK_ERROR,
    AuthErrorType.RATE_LIMITED,
    AuthErrorType.UNAUTHORIZED,
}

_BASE_MESSAGES = {
    AuthErrorType.INVALID_CONFIG: "WordPress configuration is missing or invalid.",
    AuthErrorType.INVALID_CREDENTIALS: "Authentication failed - invalid credentials.",
    AuthErrorType.UNAUTHORIZED: "Access denied - authentication required.",
    AuthErrorType.FORBIDDEN: "Access forbidden - insufficient permissions.",
    AuthErrorType.NOT_FOUND: "The requested resource was not found.",
    AuthErrorType.TIMEOUT: "Request timed out.",
    AuthErrorType.NETWORK_ERROR: "Network connection failed.",
    AuthErrorType.SSL_ERROR: "SSL/TLS connection error.",
    AuthErrorType.RATE_LIMITED: "Rate limit exceeded.",
    AuthErrorType.INVALID_URL: "Invalid WordPress site URL.",
    AuthErrorType.UNKNOWN_ERROR: "An unexpected error occurred.",
}

_RECOVERY_ACTIONS = {
    AuthErrorType.INVALID_CONFIG: [
        "Set WORDPRESS_SITE_URL, WORDPRESS_USERNAME and WORDPRESS_APP_PASSWORD",
        "Or point WORDPRESS_CONFIG at a JSON configuration file",
        "Restart the server after correcting the configuration",
    ],
    AuthErrorType.INVALID_CREDENTIALS: [
        "Verify your WordPress username",
        "Check your Application Password",
        "Ensure the Application Password hasn't been revoked",
        "Try generating a new Application Password",
    ],
    AuthErrorType.UNAUTHORIZED: [
        "Try refreshing your authentication",
        "Check if your Application Password is still valid",
        "Verify your user account is still active",
    ],
    AuthErrorType.FORBIDDEN: [
        "Contact your site administrator for proper permissions",
        "Ensure your user has Administrator or Editor role",
        "Check if specific capabilities are required",
    ],
    AuthErrorType.NOT_FOUND: [
        "Check the ID or slug you requested",
        "Verify the item has not been deleted",
    ],
    AuthErrorType.TIMEOUT: [
        "Try again in a few moments",
        "Check your internet connection",
        "Verify the WordPress site is responding",
    ],
    AuthErrorType.NETWORK_ERROR: [
        "Check your internet connection",
        "Verify the WordPress site URL is correct",
        "Ensure the site is accessible from your location",
    ],
    AuthErrorType.SSL_ERROR: [
        "Contact your site administrator about SSL certificate issues",
        "Verify the SSL certificate is valid and not expired",
        "Check if the site uses a self-signed certificate",
    ],
    AuthErrorType.RATE_LIMITED: [
        "Wait before making additional requests",
        "Reduce request frequency",
        "Check site rate limiting configuration",
    ],
    AuthErrorType.INVALID_URL: [
        "Verify the WordPress site URL is correct",
        "Ensure the URL uses HTTPS",
        "Check that the site is accessible",
    ],
}

_LOG_LEVELS = {
    AuthErrorType.INVALID_CONFIG: logging.ERROR,
    AuthErrorType.INVALID_CREDENTIALS: logging.ERROR,
    AuthErrorType.FORBIDDEN: logging.ERROR,
    AuthErrorType.SSL_ERROR: logging.ERROR,
    AuthErrorType.UNAUTHORIZED: logging.WARNING,
    AuthErrorType.INVALID_URL: logging.WARNING,
    AuthErrorType.TIMEOUT: logging.INFO,
    AuthErrorType.NETWORK_ERROR: logging.INFO,
    AuthErrorType.RATE_LIMITED: logging.INFO,
    AuthErrorType.NOT_FOUND: logging.INFO,
}


def is_recoverable(error: WordPressError) -> bool:
    """Whether the failure may clear without administrator action."""
    return error.error_type in _RECOVERABLE


def recovery_actions(error: WordPressError) -> list[str]:
    """Suggested next steps for the given error."""
    return list(_RECOVERY_ACTIONS.get(error.error_type, []))


def log_level_for(error_type: AuthErrorType) -> int:
    return _LOG_LEVELS.get(error_type, logging.DEBUG)


def log_error(error: WordPressError, operation: str | None = None) -> None:
    """Log an error at the level that matches its type."""
    logger.log(
        log_level_for(error.error_type),
        "WordPress error during %s: type=%s status=%s message=%s",
        operation or "request",
        error.error_type.value,
        error.http_status,
        error.message,
    )


def user_friendly_message(error: WordPressError, operation: str | None = None) -> str:
    """Render an error as text for a tool response.

    Args:
        error: The classified error.
        operation: Name of the operation that failed, if known.

    Returns:
        Base message, the specific error text, technical details and
        suggested recovery actions.
    """
    lines = [_BASE_MESSAGES[error.error_type]]
    if error.message and error.message != lines[0]:
        lines.append("")
        lines.append(error.message)

    details = []
    if operation:
        details.append(f"Operation: {operation}")
    if error.http_status is not None:
        details.append(f"HTTP Status: {error.http_status}")
    if error.code != error.error_type.value:
        details.append(f"WordPress code: {error.code}")
    if details:
        lines.append("")
        lines.append("Technical details:")
        lines.extend(details)

    actions = recovery_actions(error)
    if actions:
        lines.append("")
        lines.append("Suggested actions:")
        lines.extend(f"- {action}" for action in actions)

    return "\n".join(lines)


def troubleshooting_guide(result: ConnectionTestResult) -> str:
    """Build a troubleshooting guide for a failed connection test."""
    if result.success:
        return "Connection successful! No troubleshooting needed."

    guide = ["WordPress Connection Troubleshooting Guide", ""]

    if result.error is not None:
        guide.append(f"Error: {result.error.message}")
        guide.append("")
        code = result.error.code
        if code == AuthErrorType.NETWORK_ERROR.value:
            guide += [
                "DNS/Connection Issues:",
                "- Verify the WordPress site URL is correct",
                "- Check if the site is accessible in a web browser",
                "- Ensure your internet connection is working",
            ]
        elif code == AuthErrorType.TIMEOUT.value:
            guide += [
                "Timeout Issues:",
                "- The WordPress site may be slow or overloaded",
                "- Try increasing the timeout setting",
                "- Contact the site administrator if issues persist",
            ]
        elif code == AuthErrorType.SSL_ERROR.value:
            guide += [
                "SSL Certificate Issues:",
                "- The site's SSL certificate has problems",
                "- Contact the site administrator to fix the certificate",
                "- Do not disable SSL verification unless absolutely necessary",
            ]
        elif code in (
            AuthErrorType.UNAUTHORIZED.value,
            AuthErrorType.INVALID_CREDENTIALS.value,
        ):
            guide += [
                "Authentication Issues:",
                "- Check the username matches the Application Password owner",
                "- Regenerate the Application Password in the user profile",
            ]
        else:
            guide += [
                "General Troubleshooting:",
                "- Check your WordPress site configuration",
                "- Verify your authentication credentials",
                "- Ensure the WordPress REST API is enabled",
            ]

    guide += [
        "",
        "Common Solutions:",
        "- Regenerate your WordPress Application Password",
        "- Check if your WordPress user has sufficient permissions",
        "- Verify the WordPress site supports REST API",
        "- Ensure the site URL uses HTTPS",
    ]
    return "\n".join(guide)
