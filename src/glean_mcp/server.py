"""Dispatch router and MCP stdio binding.

`ToolServer` is protocol-agnostic: it lists descriptors from the registry and
routes calls through validate -> execute -> format, returning every outcome
(including failures) as a `ToolCallResult`. `MCPServer` adapts it to the MCP
low-level server over stdio.

Example:
    >>> server = create_server(load_settings())
    >>> asyncio.run(server.run_stdio())
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Literal

import mcp.types as types
from mcp.server.lowlevel.server import Server
from mcp.server.stdio import stdio_server
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from glean_mcp import __version__
from glean_mcp.client import GleanClientProvider
from glean_mcp.errors import Err, Ok, Result, format_glean_error, is_glean_error
from glean_mcp.logger import get_logger
from glean_mcp.registry import ToolRegistry, default_registry
from glean_mcp.schemas import format_validation_error

if TYPE_CHECKING:
    from glean_mcp.config import GleanSettings
    from glean_mcp.core import BaseTool, ToolDescriptor

SERVER_NAME = "Glean Tools MCP"

log = get_logger("glean_mcp.server")


# ═══════════════════════════════════════════════════════════════════════════════
# Results
# ═══════════════════════════════════════════════════════════════════════════════


class TextContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class ToolCallResult(BaseModel):
    """Response envelope for one tool call: `{content: [{type, text}], isError}`."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    content: list[TextContent]
    is_error: bool = Field(default=False, alias="isError")

    @classmethod
    def success(cls, text: str) -> ToolCallResult:
        return cls(content=[TextContent(text=text)], is_error=False)

    @classmethod
    def failure(cls, text: str) -> ToolCallResult:
        return cls(content=[TextContent(text=text)], is_error=True)

    @property
    def text(self) -> str:
        return "\n".join(c.text for c in self.content)


# ═══════════════════════════════════════════════════════════════════════════════
# Dispatch
# ═══════════════════════════════════════════════════════════════════════════════


class ToolServer:
    """Routes tool calls to the registry. Never raises from `call_tool`."""

    __slots__ = ("_name", "_version", "_registry")

    def __init__(self, registry: ToolRegistry, name: str = SERVER_NAME, version: str = __version__) -> None:
        self._name = name
        self._version = version
        self._registry = registry

    @property
    def name(self) -> str:
        return self._name

    @property
    def version(self) -> str:
        return self._version

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    def list_tools(self) -> list[ToolDescriptor]:
        return self._registry.descriptors()

    async def call_tool(self, name: str, arguments: Mapping[str, Any] | None) -> ToolCallResult:
        """Invoke a tool by name. Every failure becomes an error-flagged result."""
        tool_log = log.bind(tool=name)
        start = time.perf_counter()

        result = self._require_arguments(arguments).flat_map(
            lambda args: self._lookup(name).flat_map(lambda tool: self._validate(tool, args))
        )
        if result.is_ok():
            tool, params = result.unwrap()
            result = await self._execute(tool, params)

        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        if result.is_ok():
            tool_log.info("tool call", outcome="ok", duration_ms=duration_ms)
        else:
            tool_log.warning("tool call", outcome="error", duration_ms=duration_ms,
                             error=result.unwrap_err().splitlines()[0])
        return result.match(ok=ToolCallResult.success, err=ToolCallResult.failure)

    # ─────────────────────────────────────────────────────────────────
    # Stages
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def _require_arguments(arguments: Mapping[str, Any] | None) -> Result[Mapping[str, Any], str]:
        if arguments is None:
            return Err("Error: Arguments are required")
        if not isinstance(arguments, Mapping):
            return Err(f"Error: Arguments must be an object, got {type(arguments).__name__}")
        return Ok(arguments)

    def _lookup(self, name: str) -> Result[BaseTool, str]:
        tool = self._registry.get(name)
        return Ok(tool) if tool is not None else Err(f"Unknown tool: {name}")

    @staticmethod
    def _validate(tool: BaseTool, arguments: Mapping[str, Any]) -> Result[tuple[BaseTool, Any], str]:
        try:
            return Ok((tool, tool.parse(arguments)))
        except ValidationError as e:
            return Err(f"Invalid input:\n{format_validation_error(e)}")

    @staticmethod
    async def _execute(tool: BaseTool, params: Any) -> Result[str, str]:
        try:
            return Ok(await tool.arun(params))
        except Exception as e:
            if is_glean_error(e):
                return Err(format_glean_error(e))  # type: ignore[arg-type]
            log.exception("tool failed", tool=tool.name)
            return Err(f"Error: {e}")


# ═══════════════════════════════════════════════════════════════════════════════
# MCP binding
# ═══════════════════════════════════════════════════════════════════════════════


class MCPServer:
    """Exposes a ToolServer over the MCP low-level server.

    Calls are registered as a raw request handler so arguments reach the
    router untouched; the router does its own validation.
    """

    __slots__ = ("_tools", "_server", "_provider")

    def __init__(self, tools: ToolServer, provider: GleanClientProvider | None = None) -> None:
        self._tools = tools
        self._provider = provider
        self._server = Server(tools.name, version=tools.version)
        self._server.list_tools()(self._list_tools)
        self._server.request_handlers[types.CallToolRequest] = self._handle_call_tool

    @property
    def tools(self) -> ToolServer:
        return self._tools

    @property
    def lowlevel(self) -> Server:
        return self._server

    async def _list_tools(self) -> list[types.Tool]:
        return [
            types.Tool(name=d.name, description=d.description, inputSchema=d.input_schema)
            for d in self._tools.list_tools()
        ]

    async def _handle_call_tool(self, req: types.CallToolRequest) -> types.ServerResult:
        result = await self._tools.call_tool(req.params.name, req.params.arguments)
        return types.ServerResult(types.CallToolResult(
            content=[types.TextContent(type="text", text=c.text) for c in result.content],
            isError=result.is_error,
        ))

    async def run_stdio(self) -> None:
        """Serve over stdin/stdout until the stream closes."""
        log.info("server starting", name=self._tools.name, version=self._tools.version, transport="stdio")
        try:
            async with stdio_server() as (read_stream, write_stream):
                await self._server.run(read_stream, write_stream, self._server.create_initialization_options())
        finally:
            if self._provider is not None:
                await self._provider.aclose()
            log.info("server stopped")


def create_server(settings: GleanSettings) -> MCPServer:
    """Wire settings -> client provider -> registry -> router -> MCP server."""
    provider = GleanClientProvider(settings)
    return MCPServer(ToolServer(default_registry(provider.get)), provider)
