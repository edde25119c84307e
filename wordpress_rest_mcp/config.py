"""Configuration, constants and logging for the WordPress REST MCP Server."""

from __future__ import annotations

import json
import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import ConfigurationError
from .models.config import WordPressConfig

# ---------------------------------------------------------------------------
# Server-level settings from environment variables
# ---------------------------------------------------------------------------

LOG_LEVEL = os.getenv("WORDPRESS_LOG_LEVEL", "INFO").upper()
CONFIG_FILE_ENV = "WORDPRESS_CONFIG"
DEFAULT_CONFIG_FILE = "wordpress-config.json"

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

API_PREFIX = "/wp-json/wp/v2"
USER_AGENT = "wordpress-rest-mcp/1.0.0"

DEFAULT_TIMEOUT_MS = 30000
HIGH_TIMEOUT_MS = 60000  # above this validate_security() warns
AUTH_CACHE_SECONDS = 5 * 60
RATE_LIMIT_WINDOW_SECONDS = 60

MAX_CONTENT_PREVIEW = 2000

# Alternative names, first match wins
ENV_NAMES: dict[str, tuple[str, ...]] = {
    "site_url": ("WORDPRESS_SITE_URL", "WP_SITE_URL"),
    "username": ("WORDPRESS_USERNAME", "WP_USERNAME"),
    "app_password": ("WORDPRESS_APP_PASSWORD", "WP_APP_PASSWORD"),
    "verify_ssl": ("WORDPRESS_VERIFY_SSL", "WP_VERIFY_SSL"),
    "timeout": ("WORDPRESS_TIMEOUT", "WP_TIMEOUT"),
    "requests_per_minute": ("WORDPRESS_RATE_LIMIT_RPM",),
    "burst_limit": ("WORDPRESS_RATE_LIMIT_BURST",),
}

REQUIRED_FIELDS = ("site_url", "username", "app_password")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

# stdout carries the MCP stdio transport, so logs go to stderr
logger = logging.getLogger("wordpress_rest_mcp")
logging.basicConfig(level=LOG_LEVEL, stream=sys.stderr)

# ---------------------------------------------------------------------------
# Configuration loading
# ---------------------------------------------------------------------------


def _env(environ: Mapping[str, str], field: str) -> str | None:
    for name in ENV_NAMES[field]:
        value = environ.get(name)
        if value is not None and value.strip():
            return value
    return None


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("true", "1", "yes", "on")


def _parse_int(value: str | None, field: str) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid value for {field}: expected an integer, got {value!r}",
            fields=[field],
        ) from e


def _raw_from_environment(environ: Mapping[str, str]) -> dict[str, Any] | None:
    """Collect configuration fields from environment variables.

    Returns None unless all required fields are present, so that a partially
    configured environment falls through to the JSON file.
    """
    required = {field: _env(environ, field) for field in REQUIRED_FIELDS}
    if not all(required.values()):
        return None

    raw: dict[str, Any] = dict(required)
    raw["verify_ssl"] = _parse_bool(_env(environ, "verify_ssl"), True)

    timeout = _parse_int(_env(environ, "timeout"), "timeout")
    if timeout is not None:
        raw["timeout"] = timeout

    rpm = _parse_int(_env(environ, "requests_per_minute"), "requests_per_minute")
    burst = _parse_int(_env(environ, "burst_limit"), "burst_limit")
    if rpm is not None or burst is not None:
        rate_limit: dict[str, int] = {}
        if rpm is not None:
            rate_limit["requests_per_minute"] = rpm
        if burst is not None:
            rate_limit["burst_limit"] = burst
        raw["rate_limit"] = rate_limit

    return raw


def _raw_from_file(path: Path) -> dict[str, Any]:
    """Read a JSON configuration document, unwrapping a "wordpress" key."""
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Config file {path} is not valid JSON: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

    if not isinstance(document, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object.")
    section = document.get("wordpress", document)
    if not isinstance(section, dict):
        raise ConfigurationError(f"'wordpress' section in {path} must be an object.")
    return section


def validate_config(raw: Mapping[str, Any]) -> WordPressConfig:
    """Validate raw configuration fields into a WordPressConfig.

    Raises:
        ConfigurationError: Naming every missing or invalid field.
    """
    try:
        config = WordPressConfig.model_validate(dict(raw))
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigurationError(
            f"Configuration validation failed: {details}", fields=fields
        ) from e

    if not config.site_url.lower().startswith("https://"):
        raise ConfigurationError(
            "Configuration validation failed: site_url must use HTTPS",
            fields=["site_url"],
        )
    return config


def load_config(
    environ: Mapping[str, str] | None = None,
    config_file: str | os.PathLike[str] | None = None,
) -> WordPressConfig:
    """Load the WordPress configuration.

    Sources, in order: environment variables, the JSON file given as
    ``config_file`` (or named by WORDPRESS_CONFIG), then ./wordpress-config.json.

    Args:
        environ: Environment mapping (defaults to os.environ).
        config_file: Explicit path to a JSON configuration file.

    Returns:
        The validated configuration.

    Raises:
        ConfigurationError: If no source is available or validation fails.
    """
    environ = os.environ if environ is None else environ

    raw = _raw_from_environment(environ)
    if raw is not None:
        logger.debug("Loaded configuration from environment variables")
        return validate_config(raw)

    path_value = config_file or environ.get(CONFIG_FILE_ENV)
    if path_value:
        path = Path(path_value)
        if not path.is_file():
            raise ConfigurationError(f"Config file not found: {path}")
    else:
        path = Path(DEFAULT_CONFIG_FILE)
        if not path.is_file():
            missing = [f for f in REQUIRED_FIELDS if _env(environ, f) is None]
            raise ConfigurationError(
                "No WordPress configuration found. Missing environment "
                f"variables for: {', '.join(missing)}. Set them or create "
                f"{DEFAULT_CONFIG_FILE}.",
                fields=missing,
            )

    logger.debug("Loading configuration from %s", path)
    return validate_config(_raw_from_file(path))


def sample_config() -> str:
    """Return an example JSON configuration document."""
    return json.dumps(
        {
            "wordpress": {
                "site_url": "https://your-wordpress-site.com",
                "username": "your-username",
                "app_password": "xxxx xxxx xxxx xxxx xxxx xxxx",
                "verify_ssl": True,
                "timeout": DEFAULT_TIMEOUT_MS,
                "rate_limit": {"requests_per_minute": 60, "burst_limit": 10},
            }
        },
        indent=2,
    )


def environment_setup_instructions() -> str:
    """Return setup instructions for the environment variables."""
    return (
        "Required:\n"
        "  WORDPRESS_SITE_URL=https://your-wordpress-site.com\n"
        "  WORDPRESS_USERNAME=your-username\n"
        '  WORDPRESS_APP_PASSWORD="xxxx xxxx xxxx xxxx xxxx xxxx"\n'
        "\n"
        "Optional:\n"
        "  WORDPRESS_VERIFY_SSL=true\n"
        f"  WORDPRESS_TIMEOUT={DEFAULT_TIMEOUT_MS}\n"
        "  WORDPRESS_RATE_LIMIT_RPM=60\n"
        "  WORDPRESS_RATE_LIMIT_BURST=10\n"
        f"  {CONFIG_FILE_ENV}=/path/to/{DEFAULT_CONFIG_FILE}\n"
        "\n"
        "Alternative names: WP_SITE_URL, WP_USERNAME, WP_APP_PASSWORD, "
        "WP_VERIFY_SSL, WP_TIMEOUT"
    )
