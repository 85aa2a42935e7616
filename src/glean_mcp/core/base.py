"""Core tool abstractions: BaseTool, ToolMetadata and ToolDescriptor.

A tool binds together a request schema, the upstream operation it calls and
the formatter that turns the raw response into text. The schema is used for
both validation and the advertised input schema, so the two cannot drift.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from glean_mcp.schemas import WireModel

if TYPE_CHECKING:
    from glean_mcp.client import SupportsGlean

# Zero-arg callable returning the upstream client; called once per invocation
ClientAccessor = Callable[[], "SupportsGlean"]

TParams = TypeVar("TParams", bound=WireModel)


class ToolMetadata(BaseModel):
    """Metadata describing a tool.

    Attributes:
        name: Unique identifier (snake_case, e.g., "search")
        description: What the tool does (shown to the calling model)
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., pattern=r"^[a-z][a-z0-9_]*$")
    description: str = Field(..., min_length=10)


class ToolDescriptor(BaseModel):
    """Advertised form of a tool: `{name, description, inputSchema}`."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str
    input_schema: dict[str, Any] = Field(..., alias="inputSchema")


class BaseTool(ABC, Generic[TParams]):
    """Abstract base class for Glean tools.

    Subclasses must:
    - Define `metadata` class variable with ToolMetadata
    - Define `params_schema` class variable with the request model type
    - Implement `execute(params, client)` and `format(raw)`

    Example:
        >>> tool = SearchTool(lambda: client)
        >>> params = tool.parse({"query": "onboarding"})
        >>> text = await tool.arun(params)
    """

    metadata: ClassVar[ToolMetadata]
    params_schema: ClassVar[type[WireModel]]

    __slots__ = ("_accessor",)

    def __init__(self, accessor: ClientAccessor) -> None:
        self._accessor = accessor

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def descriptor(self) -> ToolDescriptor:
        return ToolDescriptor(
            name=self.metadata.name,
            description=self.metadata.description,
            input_schema=self.params_schema.input_schema(),
        )

    def parse(self, arguments: Mapping[str, Any] | WireModel) -> TParams:
        """Validate arguments against the schema. Raises pydantic.ValidationError."""
        return self.params_schema.model_validate(arguments)  # type: ignore[return-value]

    @abstractmethod
    async def execute(self, params: TParams, client: SupportsGlean) -> Any:
        """Call the upstream operation and return its raw response."""
        ...

    @abstractmethod
    def format(self, raw: Any) -> str:
        """Render a raw upstream response as text."""
        ...

    async def arun(self, params: TParams) -> str:
        """Execute against the accessor's client and format the response."""
        return self.format(await self.execute(params, self._accessor()))
