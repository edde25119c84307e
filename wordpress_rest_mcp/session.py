"""Server lifespan: configuration loading and the WordPress service."""

from __future__ import annotations

from contextlib import asynccontextmanager

from .config import environment_setup_instructions, load_config, logger
from .errors import ConfigurationError, WordPressError
from .service import WordPressService

# Global state (set during lifespan)
_service: WordPressService | None = None
_startup_error: WordPressError | None = None


def get_service() -> WordPressService:
    """Get the WordPress service, raising if it is not available.

    Raises:
        WordPressError: The configuration error recorded at startup, or a
            ConfigurationError if the server has not started yet.
    """
    if _startup_error is not None:
        raise _startup_error
    if _service is None:
        raise ConfigurationError(
            "WordPress service not initialized. Server may still be starting up."
        )
    return _service


def set_service(service: WordPressService | None) -> None:
    """Install a service directly (embedding and tests)."""
    global _service, _startup_error
    _service = service
    _startup_error = None


@asynccontextmanager
async def app_lifespan(app):
    """Load configuration and build the WordPress service.

    A configuration problem does not stop the server: it is logged and every
    tool reports it until the configuration is corrected and the server
    restarted. No tool reaches the network in that state.

    Args:
        app: The FastMCP application instance (required by lifespan protocol).
    """
    global _service, _startup_error

    _startup_error = None
    try:
        config = load_config()
        _service = WordPressService(config)
        _service.initialize()
    except WordPressError as e:
        _startup_error = e
        logger.error("WordPress configuration error: %s", e.message)
        logger.error("Setup instructions:\n%s", environment_setup_instructions())

    try:
        yield {"service": _service}
    finally:
        if _service is not None:
            await _service.aclose()
            logger.info("WordPress HTTP client closed")
        _service = None
