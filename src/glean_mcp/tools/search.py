"""Search tool: query Glean's content index."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from glean_mcp.core import BaseTool, ToolMetadata
from glean_mcp.formatters import format_search_results
from glean_mcp.schemas import SearchRequest

if TYPE_CHECKING:
    from glean_mcp.client import SupportsGlean


async def search(request: SearchRequest | Mapping[str, Any], client: SupportsGlean) -> Any:
    """Validate the request and run it against the search route.

    Returns the upstream response unmodified; upstream failures propagate.
    """
    return await client.search(SearchRequest.model_validate(request))


class SearchTool(BaseTool[SearchRequest]):
    metadata = ToolMetadata(
        name="search",
        description="Search Glean for documents, people and other indexed content",
    )
    params_schema = SearchRequest

    async def execute(self, params: SearchRequest, client: SupportsGlean) -> Any:
        return await search(params, client)

    def format(self, raw: Any) -> str:
        return format_search_results(raw)
