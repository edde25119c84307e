"""MCP tool implementations for the WordPress REST API."""

from .diagnostics import register_diagnostic_tools
from .media import register_media_tools
from .posts import register_post_tools
from .terms import register_term_tools

__all__ = [
    "register_post_tools",
    "register_media_tools",
    "register_term_tools",
    "register_diagnostic_tools",
]


def register_all_tools(mcp):
    """Register all tools with the MCP server."""
    register_post_tools(mcp)
    register_media_tools(mcp)
    register_term_tools(mcp)
    register_diagnostic_tools(mcp)
