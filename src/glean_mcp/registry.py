"""Registry of the tools this server exposes.

The registry is the single source for both advertisement (`descriptors()`)
and dispatch (`get()`), so every listed name is callable and vice versa.
"""

from __future__ import annotations

from glean_mcp.core import BaseTool, ClientAccessor, ToolDescriptor
from glean_mcp.tools import ChatTool, SearchTool


class ToolRegistry:
    """Name-indexed collection of tools.

    Example:
        >>> registry = ToolRegistry()
        >>> registry.register(SearchTool(accessor))
        >>> registry.names()
        ['search']
    """

    __slots__ = ("_tools",)

    def __init__(self) -> None:
        self._tools: dict[str, BaseTool] = {}

    def register(self, tool: BaseTool) -> None:
        name = tool.metadata.name
        if name in self._tools:
            raise ValueError(f"Tool '{name}' already registered.")
        self._tools[name] = tool

    def get(self, name: str) -> BaseTool | None:
        return self._tools.get(name)

    def descriptors(self) -> list[ToolDescriptor]:
        return [tool.descriptor for tool in self._tools.values()]

    def names(self) -> list[str]:
        return list(self._tools)


def default_registry(accessor: ClientAccessor) -> ToolRegistry:
    """Registry holding the search and chat tools, bound to one client accessor."""
    registry = ToolRegistry()
    registry.register(SearchTool(accessor))
    registry.register(ChatTool(accessor))
    return registry
