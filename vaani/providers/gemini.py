from __future__ import annotations
from typing import Any, Dict

from vaani.providers.base import HTTPProvider
from vaani.providers.types import ProviderRequest


class GeminiProvider(HTTPProvider):
    family = "chat"

    def url(self, req: ProviderRequest) -> str:
        return f"{self.config.endpoint.rstrip('/')}/{req.model}:generateContent?key={self.config.api_key}"

    def payload(self, req: ProviderRequest) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": req.prompt}],
                }
            ]
        }
        gen: Dict[str, Any] = {}
        if self.config.temperature is not None:
            gen["temperature"] = self.config.temperature
        if self.config.max_tokens is not None:
            gen["maxOutputTokens"] = self.config.max_tokens
        if gen:
            payload["generationConfig"] = gen
        return payload

    def meta(self, data: Any) -> Dict[str, Any]:
        if not isinstance(data, dict):
            return {}
        return {"candidates": len(data.get("candidates", []) or [])}
