from __future__ import annotations
from typing import Any, Dict

from vaani.providers.base import HTTPProvider
from vaani.providers.types import ProviderRequest


class OllamaProvider(HTTPProvider):
    family = "chat"

    @property
    def enabled(self) -> bool:
        # No credential; a configured host is enough.
        return bool(self.config.endpoint)

    def url(self, req: ProviderRequest) -> str:
        return f"{self.config.endpoint.rstrip('/')}/api/chat"

    def payload(self, req: ProviderRequest) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": req.model,
            "messages": req.messages,
            "stream": False,
        }
        options: Dict[str, Any] = {}
        if self.config.temperature is not None:
            options["temperature"] = self.config.temperature
        if self.config.max_tokens is not None:
            options["num_predict"] = self.config.max_tokens
        if options:
            payload["options"] = options
        return payload

    def meta(self, data: Any) -> Dict[str, Any]:
        if not isinstance(data, dict):
            return {}
        return {k: data.get(k) for k in ("total_duration", "load_duration", "prompt_eval_count", "eval_count")}
