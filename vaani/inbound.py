"""Telegram update parsing.

Only plain text messages produce work. Every other update type (edits,
stickers, photos, joins, callback queries) is acknowledged and ignored.
"""
from __future__ import annotations
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError


class Chat(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int | str


class Message(BaseModel):
    model_config = ConfigDict(extra="allow")

    chat: Optional[Chat] = None
    text: Optional[str] = None


class Update(BaseModel):
    model_config = ConfigDict(extra="allow")

    update_id: Optional[int] = None
    message: Optional[Message] = None


class InboundMessage(BaseModel):
    chat_id: int | str
    text: str


def parse_update(body: Any) -> Optional[InboundMessage]:
    """Return the chat id and text of ``body``, or None when there is nothing to answer."""
    if not isinstance(body, dict):
        return None
    try:
        update = Update.model_validate(body)
    except ValidationError:
        return None
    msg = update.message
    if msg is None or msg.chat is None or not msg.text:
        return None
    return InboundMessage(chat_id=msg.chat.id, text=msg.text)
