"""Tests for the per-site service and the server lifespan."""

import asyncio

import httpx
import pytest

from wordpress_rest_mcp import session
from wordpress_rest_mcp.errors import AuthErrorType, ConfigurationError, WordPressError
from wordpress_rest_mcp.server import mcp
from wordpress_rest_mcp.service import WordPressService

from conftest import APP_PASSWORD, SITE_URL, USERNAME


class TestWordPressService:
    """Tests for WordPressService."""

    def test_initialize_authenticates(self, config):
        """initialize() should prepare credentials without a request."""
        service = WordPressService(config)
        assert not service.is_authenticated()
        service.initialize()
        assert service.is_authenticated()
        service.invalidate_auth()
        assert not service.is_authenticated()

    def test_components_share_auth(self, config):
        """The HTTP client and tester should use the service's manager."""
        service = WordPressService(config)
        assert service.http.auth_manager is service.auth
        assert service.client.http is service.http

    def test_update_config_rebuilds(self, config):
        """A new configuration should replace every component."""
        service = WordPressService(config)
        old_http = service.http
        new_config = config.model_copy(update={"username": "editor"})
        asyncio.run(service.update_config(new_config))
        assert service.http is not old_http
        assert service.public_config()["username"] == "editor"
        assert service.is_authenticated()

    def test_update_config_rejects_insecure(self, config):
        """An insecure configuration should leave the service unchanged."""
        service = WordPressService(config)
        with pytest.raises(WordPressError) as exc_info:
            asyncio.run(
                service.update_config(config.model_copy(update={"site_url": "http://example.com"}))
            )
        assert exc_info.value.error_type is AuthErrorType.INVALID_URL
        assert service.config.site_url == SITE_URL

    def test_security_validation(self, config):
        """security_validation() should report a secure default setup."""
        assert WordPressService(config).security_validation().is_secure


class TestLifespan:
    """Tests for the server lifespan."""

    def test_builds_service_from_environment(self, monkeypatch):
        """A configured environment should yield a ready service."""
        monkeypatch.setenv("WORDPRESS_SITE_URL", SITE_URL)
        monkeypatch.setenv("WORDPRESS_USERNAME", USERNAME)
        monkeypatch.setenv("WORDPRESS_APP_PASSWORD", APP_PASSWORD)

        async def scenario():
            async with session.app_lifespan(mcp) as state:
                service = session.get_service()
                assert state["service"] is service
                return service.is_authenticated()

        try:
            assert asyncio.run(scenario()) is True
        finally:
            session.set_service(None)

    def test_get_service_before_start(self):
        """get_service() should raise before the lifespan has run."""
        session.set_service(None)
        with pytest.raises(ConfigurationError, match="not initialized"):
            session.get_service()

    def test_set_service(self, config):
        """An installed service should be returned."""
        service = WordPressService(config, transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        session.set_service(service)
        try:
            assert session.get_service() is service
        finally:
            session.set_service(None)
