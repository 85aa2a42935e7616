"""Tests for search and chat response formatters."""

from __future__ import annotations

import copy

import pytest

from glean_mcp.formatters import format_chat_response, format_search_results

SEARCH_RESPONSE = {
    "results": [
        {
            "title": "Onboarding Guide",
            "url": "https://example.com/onboarding",
            "document": {"datasource": "confluence"},
            "snippets": [
                {"text": "second part", "snippetTextOrdering": 2},
                {"text": "first part", "snippetTextOrdering": 1},
                {"text": "", "snippetTextOrdering": 3},
            ],
        },
        {"title": "Untracked", "snippets": []},
    ],
    "metadata": {"searchedQuery": "onboarding"},
    "totalResults": 42,
}


class TestFormatSearchResults:
    def test_full_response(self) -> None:
        assert format_search_results(SEARCH_RESPONSE) == (
            'Search results for "onboarding" (42 results):\n\n'
            "[1] Onboarding Guide\nfirst part\nsecond part\nSource: confluence\nURL: https://example.com/onboarding"
            "\n\n"
            "[2] Untracked\nNo description available\nSource: Unknown source\nURL: "
        )

    def test_empty_results(self) -> None:
        text = format_search_results({"results": [], "metadata": {"searchedQuery": "nonexistent term"}})
        assert 'Search results for "nonexistent term" (0 results)' in text

    @pytest.mark.parametrize("raw", [{}, None, {"results": None}, {"results": "nope"}, []])
    def test_no_results(self, raw: object) -> None:
        assert format_search_results(raw) == "No results found."

    def test_missing_metadata_and_total(self) -> None:
        text = format_search_results({"results": [{}]})
        assert text.startswith('Search results for "your query" (1 results):')
        assert "[1] No title\nNo description available\nSource: Unknown source\nURL: " in text

    def test_snippets_without_ordering_sort_first(self) -> None:
        raw = {"results": [{"snippets": [{"text": "b", "snippetTextOrdering": 1}, {"text": "a"}]}], "metadata": {}}
        assert "\na\nb\n" in format_search_results(raw)

    def test_tolerates_junk_entries(self) -> None:
        raw = {"results": ["junk", {"snippets": [None, 7, {"text": "ok"}], "document": "x"}], "metadata": None}
        text = format_search_results(raw)
        assert "[1] No title" in text
        assert "[2] No title\nok\nSource: Unknown source" in text


class TestFormatChatResponse:
    def test_conversation(self) -> None:
        raw = {
            "messages": [
                {"author": "USER", "fragments": [{"text": "What is Glean?"}], "messageId": "user-msg-1"},
                {
                    "author": "GLEAN_AI",
                    "fragments": [{"text": "Glean is an AI platform for work."}],
                    "citations": [
                        {"sourceDocument": {"title": "Glean Website", "url": "https://www.glean.com/"}},
                        {"sourceDocument": {"title": "Glean Documentation", "url": "https://docs.glean.com/"}},
                    ],
                    "messageType": "UPDATE",
                    "stepId": "RESPOND",
                },
            ]
        }
        assert format_chat_response(raw) == (
            "USER: What is Glean?\n\n"
            "GLEAN_AI (UPDATE) [Step: RESPOND]: Glean is an AI platform for work.\n\n"
            "Sources:\n"
            "[1] Glean Website - https://www.glean.com/\n"
            "[2] Glean Documentation - https://docs.glean.com/"
        )

    def test_plain_user_message_has_no_sources(self) -> None:
        text = format_chat_response({"messages": [{"author": "USER", "fragments": [{"text": "Hello"}]}]})
        assert "USER: Hello" in text
        assert "Sources:" not in text

    @pytest.mark.parametrize("raw", [{"messages": []}, {}, None, {"messages": "x"}])
    def test_no_response(self, raw: object) -> None:
        assert format_chat_response(raw) == "No response received."

    def test_query_suggestion(self) -> None:
        raw = {
            "messages": [{
                "author": "GLEAN_AI",
                "fragments": [{"querySuggestion": {"query": "What can glean assistant do", "datasource": "all"}}],
                "messageType": "UPDATE",
                "stepId": "SEARCH",
            }]
        }
        text = format_chat_response(raw)
        assert "GLEAN_AI (UPDATE) [Step: SEARCH]" in text
        assert "Query: What can glean assistant do" in text

    def test_structured_results(self) -> None:
        raw = {
            "messages": [{
                "author": "GLEAN_AI",
                "fragments": [{
                    "structuredResults": [
                        {"document": {"title": "Glean Assistant Documentation", "url": "https://docs.glean.com/assistant"}},
                        {"person": {"name": "skipped"}},
                        {"document": {}},
                    ]
                }],
            }]
        }
        text = format_chat_response(raw)
        assert "Document: Glean Assistant Documentation (https://docs.glean.com/assistant)" in text
        assert "Document: Untitled (No URL)" in text
        assert "skipped" not in text

    def test_fragment_with_several_fields_renders_each(self) -> None:
        raw = {"messages": [{"author": "GLEAN_AI", "fragments": [
            {"text": "Try this", "querySuggestion": {"query": "benefits"}},
        ]}]}
        assert format_chat_response(raw) == "GLEAN_AI: Try this\nQuery: benefits"

    def test_messages_without_fragments(self) -> None:
        raw = {"messages": [{"author": "USER"}, {"author": "GLEAN_AI", "citations": [{"sourceDocument": {}}]}]}
        assert format_chat_response(raw) == "USER: \n\nGLEAN_AI: \n\nSources:\n[1] Unknown source - "

    def test_flat_citations(self) -> None:
        raw = {"messages": [{"author": "GLEAN_AI", "citations": [{"title": "Flat", "url": "https://x"}]}]}
        assert "[1] Flat - https://x" in format_chat_response(raw)

    def test_missing_author(self) -> None:
        assert format_chat_response({"messages": [{"fragments": [{"text": "hi"}]}]}) == "Unknown: hi"

    def test_pure_and_repeatable(self) -> None:
        raw = {"messages": [{"author": "USER", "fragments": [{"text": "Hello"}], "citations": [{"title": "t"}]}]}
        snapshot = copy.deepcopy(raw)
        assert format_chat_response(raw) == format_chat_response(raw)
        assert raw == snapshot
