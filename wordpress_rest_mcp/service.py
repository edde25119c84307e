"""Per-site service: wires configuration, auth, HTTP, client and tester."""

from __future__ import annotations

from typing import Any

import httpx

from .auth import AuthenticationManager
from .client import WordPressClient
from .config import logger
from .connection import ConnectionTester
from .http_client import WordPressHttpClient
from .models import SecurityValidationResult, WordPressConfig


class WordPressService:
    """Owns the component graph for one configured WordPress site.

    Each site gets its own instance; nothing mutable is shared between
    instances. Re-configuration builds a fresh graph and swaps it in whole.

    Args:
        config: Validated site configuration.
        transport: Optional httpx transport passed to the HTTP client.
    """

    def __init__(
        self,
        config: WordPressConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._transport = transport
        self._build(config)

    def _build(self, config: WordPressConfig) -> None:
        auth = AuthenticationManager(config)
        http = WordPressHttpClient(auth, transport=self._transport)
        self.config = config
        self.auth = auth
        self.http = http
        self.client = WordPressClient(http)
        self.tester = ConnectionTester(auth, http)

    def initialize(self) -> None:
        """Prepare credentials. Network verification happens on first use."""
        self.auth.authenticate()
        logger.info(
            "WordPress service ready for %s as %s", self.config.site_url, self.config.username
        )

    async def update_config(self, new_config: WordPressConfig) -> None:
        """Replace the configuration and every component derived from it.

        Raises:
            WordPressError: If the new configuration fails validation; the
                current components stay in place.
        """
        old_http = self.http
        self._build(new_config)
        self.initialize()
        await old_http.aclose()

    def is_authenticated(self) -> bool:
        return self.auth.is_authenticated()

    def invalidate_auth(self) -> None:
        self.auth.invalidate_auth()

    def security_validation(self) -> SecurityValidationResult:
        return self.auth.validate_security()

    def public_config(self) -> dict[str, Any]:
        return self.auth.public_config()

    async def aclose(self) -> None:
        self.auth.invalidate_auth()
        await self.http.aclose()
