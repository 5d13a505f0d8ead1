from __future__ import annotations
from typing import Any, Dict

from vaani.providers.base import HTTPProvider
from vaani.providers.types import ProviderRequest


class HuggingFaceProvider(HTTPProvider):
    """Hosted Inference API, text-generation task: raw prompt in, ``generated_text`` out."""

    family = "text-generation"

    def url(self, req: ProviderRequest) -> str:
        return f"{self.config.endpoint.rstrip('/')}/{req.model}"

    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }

    def payload(self, req: ProviderRequest) -> Dict[str, Any]:
        params: Dict[str, Any] = {"return_full_text": False}
        if self.config.temperature is not None:
            params["temperature"] = self.config.temperature
        if self.config.max_tokens is not None:
            params["max_new_tokens"] = self.config.max_tokens
        return {
            "inputs": req.prompt,
            "parameters": params,
            # Block until a cold model is loaded instead of answering 503.
            "options": {"wait_for_model": True},
        }
