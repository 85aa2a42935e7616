"""Chat tool: converse with Glean AI."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from glean_mcp.core import BaseTool, ToolMetadata
from glean_mcp.formatters import format_chat_response
from glean_mcp.schemas import ChatRequest

if TYPE_CHECKING:
    from glean_mcp.client import SupportsGlean


async def chat(request: ChatRequest | Mapping[str, Any], client: SupportsGlean) -> Any:
    """Validate the request and send it to the chat route unchanged."""
    return await client.chat(ChatRequest.model_validate(request))


class ChatTool(BaseTool[ChatRequest]):
    metadata = ToolMetadata(
        name="chat",
        description="Chat with Glean AI, grounded in your company's knowledge",
    )
    params_schema = ChatRequest

    async def execute(self, params: ChatRequest, client: SupportsGlean) -> Any:
        return await chat(params, client)

    def format(self, raw: Any) -> str:
        return format_chat_response(raw)
