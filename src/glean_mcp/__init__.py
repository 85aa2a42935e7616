"""Glean MCP server: Glean search and chat exposed as MCP tools over stdio.

Quick Start:
    $ export GLEAN_SUBDOMAIN=acme GLEAN_API_TOKEN=...
    $ glean-mcp

Programmatic use:
    >>> from glean_mcp.server import ToolServer
    >>> from glean_mcp.registry import default_registry
    >>> server = ToolServer(default_registry(lambda: client))
    >>> result = await server.call_tool("search", {"query": "onboarding"})
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
