"""Typed failures raised by the Glean API.

Every upstream failure is classified into one of a closed set of kinds, each
with its own status code, default message and display label. Records are
immutable Pydantic models; `GleanException` carries one through `raise`.

Example:
    >>> err = classify(429, {})
    >>> err.kind
    <GleanErrorKind.RATE_LIMIT: 'RATE_LIMIT'>
    >>> print(format_glean_error(GleanError.authentication("Invalid credentials")))
    Authentication Failed: Invalid credentials
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import Any, NamedTuple, Self

import orjson
from pydantic import BaseModel, ConfigDict, Field


class GleanErrorKind(StrEnum):
    """Closed set of upstream failure kinds."""
    INVALID_REQUEST = "INVALID_REQUEST"
    AUTHENTICATION = "AUTHENTICATION"
    PERMISSION = "PERMISSION"
    REQUEST_TIMEOUT = "REQUEST_TIMEOUT"
    VALIDATION = "VALIDATION"
    RATE_LIMIT = "RATE_LIMIT"
    GENERIC = "GENERIC"


class _KindInfo(NamedTuple):
    status: int
    default_message: str
    label: str


_KIND_INFO: dict[GleanErrorKind, _KindInfo] = {
    GleanErrorKind.INVALID_REQUEST: _KindInfo(400, "Invalid request", "Invalid Request"),
    GleanErrorKind.AUTHENTICATION: _KindInfo(401, "Authentication failed", "Authentication Failed"),
    GleanErrorKind.PERMISSION: _KindInfo(403, "Forbidden", "Permission Denied"),
    GleanErrorKind.REQUEST_TIMEOUT: _KindInfo(408, "Request timeout", "Request Timeout"),
    GleanErrorKind.VALIDATION: _KindInfo(422, "Invalid query", "Invalid Query"),
    GleanErrorKind.RATE_LIMIT: _KindInfo(429, "Too many requests", "Rate Limit Exceeded"),
    GleanErrorKind.GENERIC: _KindInfo(500, "Glean API error", "Glean API Error"),
}

_STATUS_KINDS: dict[int, GleanErrorKind] = {
    info.status: kind for kind, info in _KIND_INFO.items() if kind is not GleanErrorKind.GENERIC
}

# Kinds whose rendering includes the response payload
_DETAIL_KINDS: frozenset[GleanErrorKind] = frozenset({
    GleanErrorKind.INVALID_REQUEST,
    GleanErrorKind.VALIDATION,
})

RATE_LIMIT_WINDOW = timedelta(seconds=60)


def _default_reset_at() -> datetime:
    return datetime.now(UTC) + RATE_LIMIT_WINDOW


class GleanError(BaseModel):
    """Structured record of a failed Glean API call.

    Attributes:
        kind: Failure classification
        message: Human-readable message (upstream's when it sent one)
        status: HTTP-like status code
        response: Opaque upstream payload, kept for display
        reset_at: When the rate limit window resets (RATE_LIMIT only)
    """

    model_config = ConfigDict(frozen=True)

    kind: GleanErrorKind = GleanErrorKind.GENERIC
    message: str
    status: int = Field(..., ge=0)
    response: Any = None
    reset_at: datetime | None = None

    @property
    def label(self) -> str:
        return _KIND_INFO[self.kind].label

    # ─────────────────────────────────────────────────────────────────
    # Per-kind constructors
    # ─────────────────────────────────────────────────────────────────

    @classmethod
    def _of(cls, kind: GleanErrorKind, message: str | None, response: Any, **extra: Any) -> Self:
        info = _KIND_INFO[kind]
        return cls(kind=kind, message=message or info.default_message, status=info.status, response=response, **extra)

    @classmethod
    def invalid_request(cls, message: str | None = None, response: Any = None) -> Self:
        return cls._of(GleanErrorKind.INVALID_REQUEST, message, response)

    @classmethod
    def authentication(cls, message: str | None = None, response: Any = None) -> Self:
        return cls._of(GleanErrorKind.AUTHENTICATION, message, response)

    @classmethod
    def permission(cls, message: str | None = None, response: Any = None) -> Self:
        return cls._of(GleanErrorKind.PERMISSION, message, response)

    @classmethod
    def request_timeout(cls, message: str | None = None, response: Any = None) -> Self:
        return cls._of(GleanErrorKind.REQUEST_TIMEOUT, message, response)

    @classmethod
    def validation(cls, message: str | None = None, response: Any = None) -> Self:
        return cls._of(GleanErrorKind.VALIDATION, message, response)

    @classmethod
    def rate_limit(
        cls,
        message: str | None = None,
        reset_at: datetime | None = None,
        response: Any = None,
    ) -> Self:
        return cls._of(GleanErrorKind.RATE_LIMIT, message, response, reset_at=reset_at or _default_reset_at())

    @classmethod
    def generic(cls, message: str | None = None, status: int = 500, response: Any = None) -> Self:
        return cls(
            kind=GleanErrorKind.GENERIC,
            message=message or _KIND_INFO[GleanErrorKind.GENERIC].default_message,
            status=status,
            response=response,
        )


class GleanException(Exception):
    """Exception wrapping a GleanError for raising."""

    __slots__ = ("error",)

    def __init__(self, error: GleanError) -> None:
        self.error = error
        super().__init__(error.message)

    @property
    def status(self) -> int:
        return self.error.status

    @classmethod
    def from_status(cls, status: int, payload: Mapping[str, Any] | None = None) -> Self:
        return cls(classify(status, payload))


def _parse_reset_at(value: object) -> datetime | None:
    """Accept ISO-8601 strings or epoch seconds; None when unparseable."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        try:
            return datetime.fromtimestamp(value, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
    return None


def classify(status: int, payload: Mapping[str, Any] | None = None) -> GleanError:
    """Build the error record matching an HTTP status code.

    Uses `payload["message"]` when present, otherwise the kind's default.
    For 429, `payload["reset_at"]` sets the reset time (now + 60s if absent).
    """
    payload = payload if payload is not None else {}
    raw_message = payload.get("message")
    message = str(raw_message) if raw_message else None
    kind = _STATUS_KINDS.get(status, GleanErrorKind.GENERIC)

    if kind is GleanErrorKind.RATE_LIMIT:
        return GleanError.rate_limit(message, _parse_reset_at(payload.get("reset_at")), payload)
    if kind is GleanErrorKind.GENERIC:
        return GleanError.generic(message, status, payload)
    return GleanError._of(kind, message, payload)


def is_glean_error(value: object) -> bool:
    """Whether value belongs to the Glean API failure family."""
    return isinstance(value, GleanError | GleanException)


def _iso_millis(ts: datetime) -> str:
    ts = ts.astimezone(UTC) if ts.tzinfo else ts.replace(tzinfo=UTC)
    return ts.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_glean_error(error: GleanError | GleanException) -> str:
    """Render the user-facing text for an upstream failure."""
    if isinstance(error, GleanException):
        error = error.error

    lines = [f"{error.label}: {error.message}"]
    if error.kind in _DETAIL_KINDS and error.response:
        lines.append(f"Details: {orjson.dumps(error.response, default=str).decode()}")
    if error.kind is GleanErrorKind.RATE_LIMIT and error.reset_at is not None:
        lines.append(f"Resets at: {_iso_millis(error.reset_at)}")
    return "\n".join(lines)


class ConfigurationError(RuntimeError):
    """Required configuration is missing or invalid. Fatal at start-up."""
