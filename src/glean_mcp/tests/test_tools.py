"""Tests for the search and chat tool operations."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from glean_mcp.errors import GleanError, GleanException
from glean_mcp.schemas import ChatRequest, SearchRequest
from glean_mcp.tools import ChatTool, SearchTool, chat, search


class TestSearchOperation:
    @pytest.mark.asyncio
    async def test_calls_client_once_with_validated_request(self, stub) -> None:
        stub.response = {"results": [], "metadata": {"searchedQuery": "q"}}
        raw = await search({"query": "q", "pageSize": 5, "ignored": True}, stub)

        assert raw is stub.response
        assert len(stub.calls) == 1
        route, request = stub.calls[0]
        assert route == "search"
        assert request == SearchRequest(query="q", page_size=5)
        assert request.to_payload() == {"query": "q", "pageSize": 5}

    @pytest.mark.asyncio
    async def test_revalidates_model_input(self, stub) -> None:
        await search(SearchRequest(query="q"), stub)
        assert stub.calls[0][1] == SearchRequest(query="q")

    @pytest.mark.asyncio
    async def test_invalid_request_never_reaches_client(self, stub) -> None:
        with pytest.raises(ValidationError):
            await search({"pageSize": 5}, stub)
        assert stub.calls == []

    @pytest.mark.asyncio
    async def test_upstream_failure_propagates(self, stub) -> None:
        stub.error = GleanException(GleanError.authentication("Invalid credentials"))
        with pytest.raises(GleanException) as exc_info:
            await search({"query": "q"}, stub)
        assert exc_info.value.status == 401


class TestChatOperation:
    @pytest.mark.asyncio
    async def test_calls_client_once_with_defaulted_request(self, stub) -> None:
        stub.response = {"messages": []}
        raw = await chat({"messages": [{"fragments": [{"text": "Hello"}]}]}, stub)

        assert raw is stub.response
        assert len(stub.calls) == 1
        route, request = stub.calls[0]
        assert route == "chat"
        assert isinstance(request, ChatRequest)
        assert request.messages[0].author == "USER"

    @pytest.mark.asyncio
    async def test_invalid_request_never_reaches_client(self, stub) -> None:
        with pytest.raises(ValidationError):
            await chat({"messages": [{"author": "ROBOT"}]}, stub)
        assert stub.calls == []


class TestToolClasses:
    def test_descriptors(self, stub) -> None:
        search_tool, chat_tool = SearchTool(lambda: stub), ChatTool(lambda: stub)
        assert search_tool.descriptor.name == "search"
        assert chat_tool.descriptor.name == "chat"
        assert search_tool.descriptor.input_schema == SearchRequest.input_schema()
        assert chat_tool.descriptor.model_dump(by_alias=True)["inputSchema"]["required"] == ["messages"]

    @pytest.mark.asyncio
    async def test_arun_formats_response(self, stub) -> None:
        stub.response = {"messages": [{"author": "GLEAN_AI", "fragments": [{"text": "Hi there"}]}]}
        tool = ChatTool(lambda: stub)
        assert await tool.arun(tool.parse({"messages": []})) == "GLEAN_AI: Hi there"

    @pytest.mark.asyncio
    async def test_accessor_called_per_invocation(self, stub) -> None:
        calls = []

        def accessor():
            calls.append(1)
            return stub

        tool = SearchTool(accessor)
        await tool.arun(tool.parse({"query": "a"}))
        await tool.arun(tool.parse({"query": "b"}))
        assert len(calls) == 2
