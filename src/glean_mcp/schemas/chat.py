"""Chat request schema.

A chat request carries the conversation so far, most recent message first.
Fragments are flat records: whichever optional fields are populated decide
what the fragment holds, and one fragment may populate several.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, StrictBool, StrictStr

from .base import Number, WireModel

Author = Literal["USER", "GLEAN_AI"]
MessageType = Literal["UPDATE", "CONTENT", "CONTEXT", "DEBUG", "DEBUG_EXTERNAL", "ERROR", "HEADING", "WARNING"]
ParameterType = Literal["UNKNOWN", "INTEGER", "STRING", "BOOLEAN"]


class AgentConfig(WireModel):
    agent: Literal["DEFAULT", "GPT"] | None = Field(default=None, description="Name of the agent")
    mode: Literal["DEFAULT", "QUICK"] | None = Field(default=None, description="Top level modes to run GleanChat in")


class Parameter(WireModel):
    type: ParameterType | None = None
    value: StrictStr | None = None
    description: StrictStr | None = None
    display_name: StrictStr | None = None
    is_required: StrictBool | None = None
    label: StrictStr | None = None


class Action(WireModel):
    parameters: dict[str, Parameter] | None = None


class ChatFile(WireModel):
    id: StrictStr
    name: StrictStr


class QuerySuggestion(WireModel):
    query: StrictStr
    datasource: StrictStr | None = None


class Document(WireModel):
    title: StrictStr | None = None
    url: StrictStr | None = None


class StructuredResult(WireModel):
    document: Document | None = None


class ChatFragment(WireModel):
    text: StrictStr | None = None
    action: Action | None = None
    file: ChatFile | None = None
    query_suggestion: QuerySuggestion | None = None
    structured_results: list[StructuredResult] | None = None


class SourceDocument(WireModel):
    id: StrictStr
    title: StrictStr | None = None
    url: StrictStr | None = None
    reference_ranges: list[Any] | None = None


class Citation(WireModel):
    source_document: SourceDocument


class ChatMessage(WireModel):
    author: Author = "USER"
    fragments: list[ChatFragment] | None = None
    citations: list[Citation] | None = None
    message_id: StrictStr | None = None
    message_type: MessageType | None = None
    step_id: StrictStr | None = None
    ts: StrictStr | None = None
    uploaded_file_ids: list[StrictStr] | None = None
    agent_config: AgentConfig | None = None


class ChatRestrictionFilters(WireModel):
    datasources: list[StrictStr] | None = None
    datasource_instances: list[StrictStr] | None = None


class ChatRequest(WireModel):
    """Parameters accepted by the `chat` tool."""

    messages: list[ChatMessage] = Field(..., description="Conversation messages, most recent first")
    agent_config: AgentConfig | None = Field(default=None, description="Agent and mode to run chat with")
    chat_id: StrictStr | None = Field(default=None, description="Existing chat to continue")
    save_chat: StrictBool | None = Field(default=None, description="Whether to persist the chat")
    stream: StrictBool | None = Field(default=None, description="Whether the response is streamed")
    timeout_millis: Number | None = Field(default=None, description="Request timeout in milliseconds")
    application_id: StrictStr | None = Field(default=None, description="Custom application to chat with")
    timezone_offset: Number | None = Field(default=None, description="Offset of client timezone in minutes from UTC")
    inclusions: ChatRestrictionFilters | None = Field(default=None, description="Content to restrict the chat to")
    exclusions: ChatRestrictionFilters | None = Field(default=None, description="Content to keep out of the chat")
