from __future__ import annotations
from typing import Any, Dict

from vaani.providers.base import HTTPProvider
from vaani.providers.types import ProviderRequest


class OpenAIProvider(HTTPProvider):
    """Chat-completions API (also fits OpenAI-compatible gateways via OPENAI_BASE_URL)."""

    family = "chat"

    def url(self, req: ProviderRequest) -> str:
        return f"{self.config.endpoint.rstrip('/')}/chat/completions"

    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }

    def payload(self, req: ProviderRequest) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": req.model,
            "messages": req.messages,
        }
        if self.config.temperature is not None:
            payload["temperature"] = self.config.temperature
        if self.config.max_tokens is not None:
            payload["max_tokens"] = self.config.max_tokens
        return payload

    def meta(self, data: Any) -> Dict[str, Any]:
        if not isinstance(data, dict):
            return {}
        return {"model": data.get("model"), "usage": data.get("usage")}
