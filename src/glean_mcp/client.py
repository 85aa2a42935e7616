"""HTTP client for the Glean REST API.

Two POST routes are used: `/api/v1/search` and `/api/v1/chat`. Non-2xx
responses and transport failures are raised as `GleanException` carrying a
classified `GleanError`.

The client is created lazily by `GleanClientProvider`, which the server owns
for the lifetime of the process.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import httpx
import orjson

from glean_mcp.errors import GleanError, GleanException, classify
from glean_mcp.logger import get_logger
from glean_mcp.schemas import WireModel

if TYPE_CHECKING:
    from glean_mcp.config import GleanSettings

log = get_logger("glean_mcp.client")

SEARCH_PATH = "/api/v1/search"
CHAT_PATH = "/api/v1/chat"


def build_headers(token: str, act_as: str | None = None) -> dict[str, str]:
    """Bearer auth plus the impersonation header when acting as another user."""
    headers = {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}
    if act_as:
        headers["X-Scio-Actas"] = act_as
    return headers


@runtime_checkable
class SupportsGlean(Protocol):
    """What tool operations need from an upstream client."""

    async def search(self, request: WireModel | Mapping[str, Any]) -> Any: ...
    async def chat(self, request: WireModel | Mapping[str, Any]) -> Any: ...


class GleanClient:
    """Async client for one Glean instance.

    Args:
        base_url: REST base, e.g. "https://acme-be.glean.com/rest"
        token: API bearer token
        act_as: Identity to impersonate (global tokens only)
        timeout: Per-request timeout in seconds
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    __slots__ = ("base_url", "timeout", "_headers", "_transport", "_client")

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        act_as: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._headers = build_headers(token, act_as)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None  # Lazy httpx client

    @classmethod
    def from_settings(cls, settings: GleanSettings, **kwargs: Any) -> GleanClient:
        token = settings.api_token.get_secret_value() if settings.api_token else ""
        return cls(settings.base_url, token, act_as=settings.act_as, timeout=settings.timeout, **kwargs)

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    # ─────────────────────────────────────────────────────────────────
    # Routes
    # ─────────────────────────────────────────────────────────────────

    async def search(self, request: WireModel | Mapping[str, Any]) -> Any:
        return await self._request(SEARCH_PATH, request)

    async def chat(self, request: WireModel | Mapping[str, Any]) -> Any:
        return await self._request(CHAT_PATH, request)

    # ─────────────────────────────────────────────────────────────────
    # HTTP
    # ─────────────────────────────────────────────────────────────────

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(self, path: str, request: WireModel | Mapping[str, Any]) -> Any:
        body = request.to_payload() if isinstance(request, WireModel) else dict(request)
        start = time.perf_counter()
        try:
            response = await self._get_client().post(path, content=orjson.dumps(body))
        except httpx.TimeoutException as e:
            log.warning("upstream timeout", path=path, timeout=self.timeout)
            raise GleanException(
                GleanError.request_timeout(f"Glean API did not respond within {self.timeout:g}s")
            ) from e
        except httpx.HTTPError as e:
            log.warning("upstream unreachable", path=path, error=str(e))
            raise GleanException(
                GleanError.generic(f"Failed to connect to Glean API: {e}", 500, {"error": str(e)})
            ) from e

        elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
        log.debug("upstream response", path=path, status=response.status_code, duration_ms=elapsed_ms)

        try:
            data = orjson.loads(response.content) if response.content else None
        except orjson.JSONDecodeError as e:
            if response.is_success:
                raise GleanException(
                    GleanError.generic(f"Invalid JSON in Glean API response: {e}", 500, {"body": response.text})
                ) from e
            data = {"body": response.text}

        if not response.is_success:
            payload = data if isinstance(data, dict) else {"body": data}
            raise GleanException(classify(response.status_code, payload))
        return data


class GleanClientProvider:
    """Lazily constructs one GleanClient and hands out the same instance.

    Example:
        >>> provider = GleanClientProvider(settings)
        >>> client = provider.get()        # built on first use
        >>> provider.get() is client
        True
    """

    __slots__ = ("_settings", "_transport", "_client", "_lock")

    def __init__(self, settings: GleanSettings, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._settings = settings
        self._transport = transport
        self._client: GleanClient | None = None
        self._lock = threading.Lock()

    def get(self) -> GleanClient:
        if self._client is None:
            with self._lock:
                if self._client is None:
                    self._client = GleanClient.from_settings(self._settings, transport=self._transport)
                    log.debug("client created", base_url=self._client.base_url)
        return self._client

    __call__ = get

    def reset(self) -> None:
        """Drop the cached client; the next get() builds a fresh one."""
        with self._lock:
            self._client = None

    async def aclose(self) -> None:
        with self._lock:
            client, self._client = self._client, None
        if client is not None:
            await client.aclose()
