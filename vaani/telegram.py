from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

import httpx

from vaani.config import Settings

logger = logging.getLogger(__name__)

SEND_TIMEOUT = 30.0
MAX_MESSAGE_LENGTH = 4096


def split_message(text: str, limit: int = MAX_MESSAGE_LENGTH) -> List[str]:
    """Cut ``text`` into pieces Telegram accepts, preferring line breaks, then spaces."""
    chunks: List[str] = []
    while len(text) > limit:
        cut = text.rfind("\n", 0, limit + 1)
        if cut < limit // 2:
            cut = text.rfind(" ", 0, limit + 1)
        if cut < limit // 2:
            chunks.append(text[:limit])
            text = text[limit:]
            continue
        chunks.append(text[:cut])
        text = text[cut:].lstrip("\n ")
    if text or not chunks:
        chunks.append(text)
    return chunks


class TelegramClient:
    """Minimal Bot API client: sendMessage and setWebhook."""

    def __init__(
        self,
        token: str,
        api_base: str = "https://api.telegram.org",
        timeout: float = SEND_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.token = token
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> "TelegramClient":
        return cls(settings.telegram_bot_token, settings.telegram_api_base, transport=transport)

    def method_url(self, method: str) -> str:
        return f"{self.api_base}/bot{self.token}/{method}"

    async def _call(self, method: str, payload: Dict[str, Any]) -> bool:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                r = await client.post(self.method_url(method), json=payload)
            except httpx.HTTPError as e:
                # The exception text can carry the request URL, which embeds the token.
                logger.error("telegram %s failed: %s", method, type(e).__name__)
                return False
        if not r.is_success:
            logger.error("telegram %s returned %d: %s", method, r.status_code, r.text[:500])
            return False
        try:
            data = r.json()
        except ValueError:
            data = None
        if isinstance(data, dict) and data.get("ok") is False:
            logger.error("telegram %s rejected: %s", method, data.get("description"))
            return False
        return True

    async def send_message(self, chat_id: int | str, text: str) -> bool:
        for chunk in split_message(text):
            if not await self._call("sendMessage", {"chat_id": chat_id, "text": chunk}):
                return False
        return True

    async def set_webhook(self, url: str) -> bool:
        return await self._call("setWebhook", {"url": url})
