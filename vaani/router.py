from __future__ import annotations
import logging
from typing import Optional

from vaani.providers.base import HTTPProvider
from vaani.providers.registry import ProviderRegistry
from vaani.providers.types import ProviderRequest, ProviderResponse

logger = logging.getLogger(__name__)

APOLOGY_TEXT = "Sorry, I'm temporarily unable to respond. Please try again later."
NOT_CONFIGURED_TEXT = "The assistant is not configured yet. Please try again later."


class CompletionRouter:
    """Text in, text out.

    Calls the primary provider, then the fallback once if the primary fails.
    Whatever happens upstream, ``complete`` returns a string: the reply,
    ``APOLOGY_TEXT`` when every configured provider failed, or
    ``NOT_CONFIGURED_TEXT`` when there is nothing to call.
    """

    def __init__(self, primary: Optional[HTTPProvider], fallback: Optional[HTTPProvider] = None) -> None:
        self.primary = primary
        self.fallback = fallback

    @classmethod
    def from_registry(cls, registry: ProviderRegistry) -> "CompletionRouter":
        return cls(registry.primary, registry.fallback)

    @property
    def configured(self) -> bool:
        return self.primary is not None or self.fallback is not None

    async def _call(self, provider: HTTPProvider, text: str) -> ProviderResponse:
        req = ProviderRequest.from_text(provider.config.model, text, provider=provider.name)
        try:
            resp = await provider.chat(req)
        except Exception as e:
            logger.exception("provider %s raised", provider.name)
            return ProviderResponse(False, "", 0, {}, error=str(e) or repr(e))
        if resp.ok:
            logger.info("provider %s answered in %dms", provider.name, resp.latency_ms)
        else:
            logger.warning(
                "provider %s failed after %dms: %s",
                provider.name,
                resp.latency_ms,
                (resp.error or "")[:500],
            )
        return resp

    async def complete(self, text: str) -> str:
        attempts = [p for p in (self.primary, self.fallback) if p is not None]
        if not attempts:
            logger.warning("no completion provider configured")
            return NOT_CONFIGURED_TEXT
        for i, provider in enumerate(attempts):
            if i:
                logger.info("falling back to provider %s", provider.name)
            resp = await self._call(provider, text)
            if resp.ok:
                return resp.content
        logger.error("all completion providers failed (%s)", ", ".join(p.name for p in attempts))
        return APOLOGY_TEXT
