from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Optional

from vaani.inbound import InboundMessage, parse_update
from vaani.router import CompletionRouter
from vaani.telegram import TelegramClient

logger = logging.getLogger(__name__)


@dataclass
class RelayOutcome:
    status: str  # "ignored" | "sent" | "send_failed"
    chat_id: Optional[int | str] = None
    reply: Optional[str] = None

    @property
    def http_status(self) -> int:
        return 500 if self.status == "send_failed" else 200


class RelayService:
    """Inbound update -> completion -> sendMessage, one pass per request."""

    def __init__(self, router: CompletionRouter, telegram: TelegramClient) -> None:
        self.router = router
        self.telegram = telegram

    async def handle(self, body: Any) -> RelayOutcome:
        msg: Optional[InboundMessage] = parse_update(body)
        if msg is None:
            logger.debug("ignoring update without text")
            return RelayOutcome("ignored")
        reply = await self.router.complete(msg.text)
        sent = await self.telegram.send_message(msg.chat_id, reply)
        if not sent:
            logger.error("could not deliver reply to chat %s", msg.chat_id)
            return RelayOutcome("send_failed", msg.chat_id, reply)
        return RelayOutcome("sent", msg.chat_id, reply)
