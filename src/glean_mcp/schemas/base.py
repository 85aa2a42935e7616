"""Shared base model and validation error rendering for tool schemas."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel


def _require_number(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValueError("expected a number")
    return value


# Any JSON number; integers keep their integer form on the wire
Number = Annotated[int | float, BeforeValidator(_require_number)]


class WireModel(BaseModel):
    """Base for request records exchanged with the Glean API.

    Attributes are snake_case; the camelCase aliases are the wire contract.
    Unknown fields are ignored and never forwarded upstream.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        revalidate_instances="always",
    )

    def to_payload(self) -> dict[str, Any]:
        """JSON body for the upstream request: wire names, unset fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")

    @classmethod
    def input_schema(cls) -> dict[str, Any]:
        """JSON Schema advertised to MCP clients."""
        schema = cls.model_json_schema(by_alias=True)
        schema.pop("title", None)
        return schema


def format_validation_error(exc: ValidationError) -> str:
    """One `<dotted.path>: <reason>` line per violation."""
    lines = []
    for err in exc.errors(include_url=False):
        path = ".".join(str(part) for part in err["loc"])
        lines.append(f"{path}: {err['msg']}" if path else err["msg"])
    return "\n".join(lines)
