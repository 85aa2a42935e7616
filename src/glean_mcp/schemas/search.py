"""Search request schema.

Mirrors the Glean `/search` request body. Only `query` is required.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, StrictBool, StrictStr

from .base import Number, WireModel

RelationType = Literal["EQUALS", "ID_EQUALS", "LT", "GT"]
ResponseHint = Literal["ALL_RESULT_COUNTS", "FACET_RESULTS", "QUERY_METADATA", "RESULTS", "SPELLCHECK_METADATA"]


class Person(WireModel):
    name: StrictStr
    obfuscated_id: StrictStr
    email: StrictStr | None = None
    metadata: Any = None
    related_documents: list[Any] | None = None


class FacetFilterValue(WireModel):
    value: StrictStr = Field(..., description="Filter value")
    relation_type: RelationType | None = Field(default=None, description="Type of relation")
    is_negated: StrictBool | None = Field(default=None, description="DEPRECATED - Whether the filter is negated")


class FacetFilter(WireModel):
    field_name: StrictStr = Field(..., description="Name of the field to filter on")
    values: list[FacetFilterValue] = Field(..., description="Values to filter by")


class RestrictionFilters(WireModel):
    """Inclusion or exclusion filter."""

    datasources: list[StrictStr] | None = Field(default=None, description="List of datasources to include/exclude")
    people: list[Person] | None = Field(default=None, description="List of people to include/exclude")


class SearchRequestOptions(WireModel):
    datasource_filter: StrictStr | None = Field(default=None, description="Filter results to a single datasource name")
    datasources_filter: list[StrictStr] | None = Field(
        default=None, description="Filter results to one or more datasources"
    )
    query_overrides_facet_filters: StrictBool | None = Field(
        default=None, description="If true, query operators override facet filters in case of conflict"
    )
    facet_filters: list[FacetFilter] | None = Field(
        default=None, description="List of filters for the query (ANDed together)"
    )
    facet_bucket_size: Number | None = Field(
        default=None, description="Maximum number of FacetBuckets to return in each FacetResult"
    )
    default_facets: list[StrictStr] | None = Field(
        default=None, description="Facets for which FacetResults should be fetched"
    )
    fetch_all_datasource_counts: StrictBool | None = Field(
        default=None, description="Return result counts for all supported datasources"
    )
    response_hints: list[ResponseHint] | None = Field(default=None, description="Hints for the response content")
    timezone_offset: Number | None = Field(default=None, description="Offset of client timezone in minutes from UTC")
    disable_spellcheck: StrictBool | None = Field(default=None, description="Whether to disable spellcheck")
    disable_query_autocorrect: StrictBool | None = Field(
        default=None, description="Disables automatic adjustment of the input query"
    )
    return_llm_content_over_snippets: StrictBool | None = Field(
        default=None, description="Enables expanded content to be returned for LLM usage"
    )
    inclusions: RestrictionFilters | None = Field(
        default=None, description="Filters to restrict search results to only specified content"
    )
    exclusions: RestrictionFilters | None = Field(
        default=None, description="Filters specifying content to avoid in search results"
    )


class SearchRequestInputDetails(WireModel):
    has_copy_paste: StrictBool | None = Field(
        default=None, description="Whether the query was at least partially copy-pasted"
    )


class SearchRequest(WireModel):
    """Parameters accepted by the `search` tool."""

    query: StrictStr = Field(..., description="The search terms")
    cursor: StrictStr | None = Field(default=None, description="Pagination cursor for position in overall results")
    result_tab_ids: list[StrictStr] | None = Field(default=None, description="Unique IDs of result tabs to fetch")
    input_details: SearchRequestInputDetails | None = Field(
        default=None, description="Additional metadata about the search input"
    )
    request_options: SearchRequestOptions | None = Field(default=None, description="Options for the search request")
    timeout_millis: Number | None = Field(default=None, description="Request timeout in milliseconds")
    people: list[Person] | None = Field(default=None, description="People associated with the search request")
    disable_spellcheck: StrictBool | None = Field(default=None, description="Whether to disable spellcheck")
    max_snippet_size: Number | None = Field(default=None, description="Maximum characters for snippets")
    page_size: Number | None = Field(default=None, description="Number of results to return")
    timestamp: StrictStr | None = Field(default=None, description="ISO 8601 timestamp of client request")
    tracking_token: StrictStr | None = Field(default=None, description="Previous tracking token for same query")
