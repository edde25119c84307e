"""Tests for the authentication manager and credential sanitization."""

import pytest

from wordpress_rest_mcp.auth import AuthenticationManager, basic_auth_header, check_security
from wordpress_rest_mcp.errors import AuthErrorType, WordPressError
from wordpress_rest_mcp.models import WordPressConfig

from conftest import APP_PASSWORD, SITE_URL, USERNAME


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def _config(**overrides):
    values = {"site_url": SITE_URL, "username": USERNAME, "app_password": APP_PASSWORD}
    values.update(overrides)
    return WordPressConfig(**values)


class TestBasicAuthHeader:
    """Tests for Basic header generation."""

    def test_known_encoding(self):
        """admin:abc123 should encode to the well-known value."""
        assert basic_auth_header("admin", "abc123") == "Basic YWRtaW46YWJjMTIz"

    def test_manager_header_uses_configured_credentials(self, auth_manager):
        """The manager should encode the configured username and password."""
        assert auth_manager.generate_auth_header() == basic_auth_header(USERNAME, APP_PASSWORD)


class TestSecurityValidation:
    """Tests for the security policy check."""

    def test_https_is_secure(self, config):
        """An HTTPS site with defaults should pass without warnings."""
        result = check_security(config)
        assert result.is_secure
        assert result.issues == []
        assert result.warnings == []

    def test_http_is_an_issue(self):
        """Plain HTTP should be a hard issue."""
        result = check_security(_config(site_url="http://example.com"))
        assert not result.is_secure
        assert "Site URL must use HTTPS" in result.issues

    def test_localhost_warns(self):
        """Loopback hosts should only warn."""
        result = check_security(_config(site_url="https://localhost:8443"))
        assert result.is_secure
        assert any("localhost" in w for w in result.warnings)

    def test_ssl_disabled_warns(self):
        """Disabling SSL verification should warn."""
        result = check_security(_config(verify_ssl=False))
        assert result.is_secure
        assert any("SSL verification is disabled" in w for w in result.warnings)

    def test_high_timeout_warns(self):
        """Timeouts over 60 seconds should warn."""
        result = check_security(_config(timeout=90000))
        assert any("Timeout" in w for w in result.warnings)

    def test_manager_rejects_http(self):
        """Constructing a manager for an HTTP site should fail with INVALID_URL."""
        with pytest.raises(WordPressError) as exc_info:
            AuthenticationManager(_config(site_url="http://example.com"))
        assert exc_info.value.error_type is AuthErrorType.INVALID_URL

    def test_manager_rejects_malformed_password(self):
        """A password that bypassed model validation should still be rejected."""
        config = WordPressConfig.model_construct(
            site_url=SITE_URL,
            username=USERNAME,
            app_password="short",
            verify_ssl=True,
            timeout=30000,
            rate_limit=None,
        )
        with pytest.raises(WordPressError) as exc_info:
            AuthenticationManager(config)
        assert exc_info.value.error_type is AuthErrorType.INVALID_CREDENTIALS


class TestAuthenticationState:
    """Tests for the authentication lifecycle."""

    def test_starts_unauthenticated(self, auth_manager):
        """A new manager should hold no credentials."""
        assert not auth_manager.is_authenticated()
        assert auth_manager.needs_reauth()
        assert auth_manager.auth_state.credentials is None

    def test_authenticate_sets_state(self, auth_manager):
        """authenticate() should store credentials and mark the state."""
        auth_manager.authenticate()
        state = auth_manager.auth_state
        assert auth_manager.is_authenticated()
        assert state.credentials.username == USERNAME
        assert state.last_verified is not None
        assert auth_manager.get_authorization_header() == basic_auth_header(USERNAME, APP_PASSWORD)

    def test_header_without_credentials(self, auth_manager):
        """Requesting a header before authenticating should raise UNAUTHORIZED."""
        with pytest.raises(WordPressError) as exc_info:
            auth_manager.get_authorization_header()
        assert exc_info.value.error_type is AuthErrorType.UNAUTHORIZED

    def test_invalidate_clears_state(self, auth_manager):
        """invalidate_auth() should drop credentials and the flag."""
        auth_manager.authenticate()
        auth_manager.invalidate_auth()
        assert not auth_manager.is_authenticated()
        assert auth_manager.auth_state.credentials is None

    def test_needs_reauth_after_cache_window(self, config):
        """needs_reauth() should turn true after five minutes."""
        clock = FakeClock()
        manager = AuthenticationManager(config, clock=clock)
        manager.authenticate()
        clock.now += 299
        assert not manager.needs_reauth()
        clock.now += 2
        assert manager.needs_reauth()
        # The flag itself survives until invalidated
        assert manager.is_authenticated()

    def test_update_config_reauthenticates(self, auth_manager):
        """A new valid configuration should replace credentials."""
        auth_manager.authenticate()
        auth_manager.update_config(_config(username="editor"))
        assert auth_manager.config.username == "editor"
        assert auth_manager.auth_state.credentials.username == "editor"

    def test_update_config_keeps_previous_on_failure(self, auth_manager):
        """An invalid configuration should leave the previous one in place."""
        with pytest.raises(WordPressError):
            auth_manager.update_config(_config(site_url="http://example.com"))
        assert auth_manager.site_url == SITE_URL

    def test_api_base_url(self, auth_manager):
        """The API base should append the wp/v2 prefix."""
        assert auth_manager.api_base_url == "https://example.com/wp-json/wp/v2"

    def test_public_config(self, auth_manager):
        """public_config() should never expose the password."""
        assert "app_password" not in auth_manager.public_config()


class TestSanitizeErrorMessage:
    """Tests for credential redaction."""

    def test_redacts_basic_token(self, auth_manager):
        """Basic tokens should be replaced."""
        header = basic_auth_header(USERNAME, APP_PASSWORD)
        message = auth_manager.sanitize_error_message(f"Request failed with {header}")
        assert "Basic [CREDENTIALS]" in message
        assert header not in message

    def test_redacts_password_with_and_without_spaces(self, auth_manager):
        """Both the grouped and compact password forms should be replaced."""
        compact = APP_PASSWORD.replace(" ", "")
        message = auth_manager.sanitize_error_message(f"pw={APP_PASSWORD} alt={compact.upper()}")
        assert "[PASSWORD]" in message
        assert APP_PASSWORD not in message
        assert compact.upper() not in message

    def test_redacts_username(self, auth_manager):
        """The username should be replaced case-insensitively."""
        message = auth_manager.sanitize_error_message("user ADMIN rejected")
        assert message == "user [USERNAME] rejected"

    def test_accepts_exceptions(self, auth_manager):
        """Exceptions should be sanitized via their string form."""
        message = auth_manager.sanitize_error_message(RuntimeError(f"bad {APP_PASSWORD}"))
        assert message == "bad [PASSWORD]"

    def test_sanitizing_twice_is_stable(self):
        """A username inside a placeholder word should not mangle the placeholder."""
        manager = AuthenticationManager(_config(username="user"))
        once = manager.sanitize_error_message("Sorry, user is not allowed")
        assert once == "Sorry, [USERNAME] is not allowed"
        assert manager.sanitize_error_message(once) == once

    def test_username_inside_password_placeholder(self):
        """Redacting the username should leave [PASSWORD] intact."""
        manager = AuthenticationManager(_config(username="pass"))
        message = manager.sanitize_error_message(f"pass {APP_PASSWORD}")
        assert message == "[USERNAME] [PASSWORD]"

    def test_leaves_plain_text(self, auth_manager):
        """Ordinary prose mentioning "Basic" should be untouched."""
        text = "Basic connectivity test passed"
        assert auth_manager.sanitize_error_message(text) == text


class TestConnectionTestResult:
    """Tests for building sanitized connection results."""

    def test_error_is_sanitized(self, auth_manager):
        """Attached errors should carry code and status, with secrets redacted."""
        error = WordPressError(AuthErrorType.FORBIDDEN, f"{USERNAME} may not do that", 403)
        result = auth_manager.create_connection_test_result(False, "failed", error)
        assert not result.success
        assert result.error.code == "FORBIDDEN"
        assert result.error.http_status == 403
        assert result.error.message == "[USERNAME] may not do that"
        assert result.details.site_url == SITE_URL

    def test_plain_exception_is_unknown(self, auth_manager):
        """Non-WordPress exceptions should be reported as UNKNOWN_ERROR."""
        result = auth_manager.create_connection_test_result(False, "failed", ValueError("x"))
        assert result.error.code == "UNKNOWN_ERROR"
