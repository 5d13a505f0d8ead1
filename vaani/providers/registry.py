from __future__ import annotations
from typing import Dict, Optional

import httpx

from vaani.config import ProviderConfig, Settings
from vaani.providers.base import HTTPProvider
from vaani.providers.gemini import GeminiProvider
from vaani.providers.huggingface import HuggingFaceProvider
from vaani.providers.ollama import OllamaProvider
from vaani.providers.openai import OpenAIProvider

PROVIDER_CLASSES = {
    "openai": OpenAIProvider,
    "huggingface": HuggingFaceProvider,
    "gemini": GeminiProvider,
    "ollama": OllamaProvider,
}


def build_provider(
    config: ProviderConfig,
    timeout: float,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> HTTPProvider:
    try:
        cls = PROVIDER_CLASSES[config.name]
    except KeyError:
        raise KeyError(f"Unknown provider: {config.name}")
    if config.family != cls.family:
        raise ValueError(f"{config.name} speaks {cls.family!r}, config says {config.family!r}")
    return cls(config, timeout=timeout, transport=transport)


class ProviderRegistry:
    """Provider instances for every configured credential, built once from Settings."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.settings = settings
        self._providers: Dict[str, HTTPProvider] = {
            name: build_provider(cfg, settings.timeout, transport)
            for name, cfg in settings.providers.items()
        }

    @property
    def names(self) -> list[str]:
        return list(self._providers)

    @property
    def primary(self) -> Optional[HTTPProvider]:
        return self._providers.get(self.settings.primary) if self.settings.primary else None

    @property
    def fallback(self) -> Optional[HTTPProvider]:
        return self._providers.get(self.settings.fallback) if self.settings.fallback else None

    def get(self, provider: str) -> HTTPProvider:
        try:
            return self._providers[provider]
        except KeyError:
            raise KeyError(f"Provider not configured: {provider}")
