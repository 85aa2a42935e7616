"""Pydantic schemas for the search and chat tools."""

from .base import Number, WireModel, format_validation_error
from .chat import (
    Action,
    AgentConfig,
    ChatFile,
    ChatFragment,
    ChatMessage,
    ChatRequest,
    ChatRestrictionFilters,
    Citation,
    Document,
    Parameter,
    QuerySuggestion,
    SourceDocument,
    StructuredResult,
)
from .search import (
    FacetFilter,
    FacetFilterValue,
    Person,
    RestrictionFilters,
    SearchRequest,
    SearchRequestInputDetails,
    SearchRequestOptions,
)

__all__ = [
    "WireModel", "Number", "format_validation_error",
    # Search
    "SearchRequest", "SearchRequestOptions", "SearchRequestInputDetails",
    "Person", "FacetFilter", "FacetFilterValue", "RestrictionFilters",
    # Chat
    "ChatRequest", "ChatMessage", "ChatFragment", "Citation", "SourceDocument",
    "AgentConfig", "Action", "Parameter", "ChatFile", "QuerySuggestion",
    "StructuredResult", "Document", "ChatRestrictionFilters",
]
