"""Utility functions for text rendering and tool error handling."""

from __future__ import annotations

import html
import re
from datetime import datetime

from pydantic import ValidationError

from .config import (
    DEFAULT_CONFIG_FILE,
    MAX_CONTENT_PREVIEW,
    environment_setup_instructions,
    logger,
    sample_config,
)
from .errors import ConfigurationError, WordPressError, log_error, user_friendly_message

_TAG_RE = re.compile(r"<[^>]*>")


def strip_html(value: str) -> str:
    """Drop tags and decode entities from rendered WordPress HTML."""
    return html.unescape(_TAG_RE.sub("", value)).strip()


def truncate(value: str, limit: int = MAX_CONTENT_PREVIEW) -> str:
    if len(value) <= limit:
        return value
    return value[:limit].rstrip() + "..."


def format_date(value: str | None) -> str:
    """Render a WordPress ISO timestamp as YYYY-MM-DD, or the raw value."""
    if not value:
        return "unknown"
    try:
        return datetime.fromisoformat(value).date().isoformat()
    except ValueError:
        return value


def format_validation_error(e: ValidationError) -> str:
    """Turn a pydantic error into one line per offending field."""
    lines = []
    for err in e.errors():
        location = ".".join(str(p) for p in err["loc"])
        message = err["msg"].removeprefix("Value error, ")
        lines.append(f"- {location}: {message}" if location else f"- {message}")
    return "Invalid arguments:\n" + "\n".join(lines)


def handle_tool_exception(e: Exception, operation: str) -> str:
    """Handle exceptions raised inside a tool.

    Logs detailed information while returning a sanitized, user-facing text.

    Args:
        e: The exception to handle.
        operation: Human-readable name of the failed operation.

    Returns:
        Text for the tool response.
    """
    if isinstance(e, ValidationError):
        return f"Failed to {operation}. {format_validation_error(e)}"
    if isinstance(e, ConfigurationError):
        log_error(e, operation)
        return (
            f"Failed to {operation}.\n\n{user_friendly_message(e)}\n\n"
            f"Environment setup:\n{environment_setup_instructions()}\n\n"
            f"Or create {DEFAULT_CONFIG_FILE}:\n{sample_config()}"
        )
    if isinstance(e, WordPressError):
        log_error(e, operation)
        return f"Failed to {operation}.\n\n{user_friendly_message(e, operation)}"
    # Unknown exception - log full details, return generic message
    logger.exception("Unexpected error during %s", operation)
    return f"Failed to {operation}: an unexpected error occurred."
