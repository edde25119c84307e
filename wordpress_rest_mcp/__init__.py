"""WordPress REST MCP Server.

An MCP server that manages WordPress content (posts, pages, media,
categories and tags) through the WordPress REST API, authenticating with
Application Passwords.
"""

from .server import main, mcp

__all__ = ["mcp", "main"]
__version__ = "1.0.0"
