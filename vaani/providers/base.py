from __future__ import annotations
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from vaani.config import ProviderConfig, DEFAULT_TIMEOUT
from vaani.normalize import extract_text
from vaani.providers.types import ProviderRequest, ProviderResponse


class HTTPProvider(ABC):
    """One hosted completion API reached over HTTP.

    Subclasses describe the wire shape (``url``, ``headers``, ``payload``); the
    request/response handling is shared. ``chat`` never raises: transport
    errors, timeouts and non-2xx answers come back as ``ok=False`` with the
    reason in ``error``.
    """

    family = "chat"

    def __init__(
        self,
        config: ProviderConfig,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config
        self.timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def enabled(self) -> bool:
        return bool(self.config.api_key)

    @abstractmethod
    def url(self, req: ProviderRequest) -> str:
        ...

    def headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json"}

    @abstractmethod
    def payload(self, req: ProviderRequest) -> Dict[str, Any]:
        ...

    def meta(self, data: Any) -> Dict[str, Any]:
        return {}

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def chat(self, req: ProviderRequest) -> ProviderResponse:
        if not self.enabled:
            return ProviderResponse(False, "", 0, {}, error=f"{self.name} disabled: missing credential")
        t0 = time.perf_counter()
        async with self._client() as client:
            try:
                r = await client.post(self.url(req), json=self.payload(req), headers=self.headers())
                latency_ms = int((time.perf_counter() - t0) * 1000)
                if not r.is_success:
                    return ProviderResponse(False, "", latency_ms, {"status": r.status_code}, error=r.text)
                try:
                    data = r.json()
                except ValueError:
                    data = r.text
                content = extract_text(data)
                meta = {"status": r.status_code, **self.meta(data)}
                if not content.strip():
                    return ProviderResponse(False, "", latency_ms, meta, error="empty completion")
                return ProviderResponse(True, content, latency_ms, meta)
            except httpx.TimeoutException as e:
                latency_ms = int((time.perf_counter() - t0) * 1000)
                return ProviderResponse(False, "", latency_ms, {}, error=f"timeout after {self.timeout}s: {e!r}")
            except Exception as e:
                latency_ms = int((time.perf_counter() - t0) * 1000)
                return ProviderResponse(False, "", latency_ms, {}, error=str(e) or repr(e))
