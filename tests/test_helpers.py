"""Tests for helper functions."""

import pytest
from pydantic import ValidationError

from wordpress_rest_mcp.errors import AuthErrorType, ConfigurationError, WordPressError
from wordpress_rest_mcp.models import ReadPostInput
from wordpress_rest_mcp.utils import (
    format_date,
    format_validation_error,
    handle_tool_exception,
    strip_html,
    truncate,
)


class TestStripHtml:
    """Tests for strip_html function."""

    def test_removes_tags(self):
        """Tags should be removed."""
        assert strip_html("<p>Hello <strong>world</strong></p>") == "Hello world"

    def test_decodes_entities(self):
        """Entities should be decoded."""
        assert strip_html("Tom &amp; Jerry&#8217;s") == "Tom & Jerry’s"

    def test_empty(self):
        """Empty input should stay empty."""
        assert strip_html("") == ""


class TestTruncate:
    """Tests for truncate function."""

    def test_short_unchanged(self):
        """Text under the limit should be returned as is."""
        assert truncate("short", 10) == "short"

    def test_long_truncated(self):
        """Text over the limit should be cut and marked."""
        assert truncate("a" * 20, 10) == "a" * 10 + "..."


class TestFormatDate:
    """Tests for format_date function."""

    def test_iso_timestamp(self):
        """ISO timestamps should render as dates."""
        assert format_date("2024-01-15T10:30:00") == "2024-01-15"

    def test_missing(self):
        """Missing dates should render as unknown."""
        assert format_date(None) == "unknown"

    def test_unparseable(self):
        """Unparseable values should pass through."""
        assert format_date("yesterday") == "yesterday"


class TestHandleToolException:
    """Tests for handle_tool_exception function."""

    def test_validation_error(self):
        """Validation errors should list the offending fields."""
        with pytest.raises(ValidationError) as exc_info:
            ReadPostInput()
        text = handle_tool_exception(exc_info.value, "read post")
        assert text.startswith("Failed to read post. Invalid arguments:")
        assert "Either 'id' or 'slug' must be provided" in text

    def test_format_validation_error_field_location(self):
        """Field errors should name the field."""
        with pytest.raises(ValidationError) as exc_info:
            ReadPostInput(id=0)
        assert "- id:" in format_validation_error(exc_info.value)

    def test_configuration_error(self):
        """Configuration errors should include setup instructions."""
        text = handle_tool_exception(ConfigurationError("No configuration"), "list posts")
        assert "No configuration" in text
        assert "WORDPRESS_SITE_URL" in text
        assert "Or create wordpress-config.json:" in text
        assert '"site_url": "https://your-wordpress-site.com"' in text

    def test_wordpress_error(self):
        """WordPress errors should be rendered with recovery actions."""
        error = WordPressError(AuthErrorType.NOT_FOUND, "Resource not found.", 404)
        text = handle_tool_exception(error, "read post")
        assert text.startswith("Failed to read post.")
        assert "HTTP Status: 404" in text

    def test_unexpected_error_is_generic(self):
        """Unexpected exceptions should not expose their message."""
        text = handle_tool_exception(RuntimeError("secret internals"), "list posts")
        assert text == "Failed to list posts: an unexpected error occurred."
