"""Render raw Glean responses as plain text for the calling model.

Both formatters are pure and total: missing, null or mistyped fields fall back
to placeholder text instead of raising.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

NO_RESULTS = "No results found."
NO_RESPONSE = "No response received."

_EMPTY: Mapping[str, Any] = {}


def _mapping(value: object) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else _EMPTY


def _text(value: object) -> str:
    return value if isinstance(value, str) else ""


def _ordering(snippet: Mapping[str, Any]) -> float:
    order = snippet.get("snippetTextOrdering")
    return order if isinstance(order, int | float) and not isinstance(order, bool) else 0


# ─────────────────────────────────────────────────────────────────────────────
# Search
# ─────────────────────────────────────────────────────────────────────────────


def _format_result(index: int, result: Mapping[str, Any]) -> str:
    snippets = result.get("snippets")
    snippet_text = ""
    if isinstance(snippets, list):
        ordered = sorted((_mapping(s) for s in snippets), key=_ordering)
        snippet_text = "\n".join(t for s in ordered if (t := _text(s.get("text"))))

    document = _mapping(result.get("document"))
    return "\n".join([
        f"[{index}] {result.get('title') or 'No title'}",
        snippet_text or "No description available",
        f"Source: {document.get('datasource') or 'Unknown source'}",
        f"URL: {result.get('url') or ''}",
    ])


def format_search_results(raw: Any) -> str:
    """Summarize a search response.

    Example:
        >>> format_search_results({"results": [], "metadata": {"searchedQuery": "q"}})
        'Search results for "q" (0 results):\\n\\n'
    """
    results = raw.get("results") if isinstance(raw, Mapping) else None
    if not isinstance(results, list):
        return NO_RESULTS

    blocks = "\n\n".join(_format_result(i, _mapping(r)) for i, r in enumerate(results, start=1))
    query = _mapping(raw.get("metadata")).get("searchedQuery") or "your query"
    total = raw.get("totalResults") or len(results)
    return f'Search results for "{query}" ({total} results):\n\n{blocks}'


# ─────────────────────────────────────────────────────────────────────────────
# Chat
# ─────────────────────────────────────────────────────────────────────────────


def _fragment_lines(fragment: Mapping[str, Any]) -> list[str]:
    lines = []
    if text := _text(fragment.get("text")):
        lines.append(text)
    if query := _mapping(fragment.get("querySuggestion")).get("query"):
        lines.append(f"Query: {query}")
    structured = fragment.get("structuredResults")
    if isinstance(structured, list):
        for entry in structured:
            document = _mapping(entry).get("document")
            if isinstance(document, Mapping):
                lines.append(f"Document: {document.get('title') or 'Untitled'} ({document.get('url') or 'No URL'})")
    return lines


def _citation_line(index: int, citation: Mapping[str, Any]) -> str:
    # Nested sourceDocument shape, or the older flat {title, url}
    source = citation.get("sourceDocument")
    source = source if isinstance(source, Mapping) else citation
    return f"[{index}] {source.get('title') or 'Unknown source'} - {source.get('url') or ''}"


def _format_message(message: Mapping[str, Any]) -> str:
    header = str(message.get("author") or "Unknown")
    if message_type := message.get("messageType"):
        header += f" ({message_type})"
    if step_id := message.get("stepId"):
        header += f" [Step: {step_id}]"

    fragments = message.get("fragments")
    body = "\n".join(
        line
        for fragment in (fragments if isinstance(fragments, list) else ())
        for line in _fragment_lines(_mapping(fragment))
    )

    rendered = f"{header}: {body}"
    citations = message.get("citations")
    if isinstance(citations, list) and citations:
        sources = "\n".join(_citation_line(i, _mapping(c)) for i, c in enumerate(citations, start=1))
        rendered += f"\n\nSources:\n{sources}"
    return rendered


def format_chat_response(raw: Any) -> str:
    """Summarize a chat response, one block per message."""
    messages = raw.get("messages") if isinstance(raw, Mapping) else None
    if not isinstance(messages, list) or not messages:
        return NO_RESPONSE
    return "\n\n".join(_format_message(_mapping(m)) for m in messages)
