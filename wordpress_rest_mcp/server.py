"""WordPress REST MCP Server entry point."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from .session import app_lifespan
from .tools import register_all_tools

# Create the MCP server
mcp = FastMCP("wordpress_rest_mcp", lifespan=app_lifespan)

# Register all tools
register_all_tools(mcp)


def main():
    """Run the MCP server over stdio."""
    mcp.run()


if __name__ == "__main__":
    main()
