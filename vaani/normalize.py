"""Turn heterogeneous provider response bodies into plain reply text.

Each matcher inspects a decoded JSON value and returns the extracted text, or
``None`` when the value is not in the shape it understands. :func:`extract_text`
tries them in order and the first hit wins; the final matcher always succeeds,
so any value yields some text.
"""
from __future__ import annotations
import json
from typing import Any, Callable, List, Optional

Matcher = Callable[[Any], Optional[str]]


def _first(value: Any) -> Any:
    if isinstance(value, list) and value:
        return value[0]
    return None


def match_generated_text_list(data: Any) -> Optional[str]:
    # [{"generated_text": "..."}] (text-generation inference APIs)
    item = _first(data)
    if isinstance(item, dict) and isinstance(item.get("generated_text"), str):
        return item["generated_text"]
    return None


def match_generated_text(data: Any) -> Optional[str]:
    if isinstance(data, dict) and isinstance(data.get("generated_text"), str):
        return data["generated_text"]
    return None


def match_chat_choices(data: Any) -> Optional[str]:
    # {"choices": [{"message": {"content": "..."}}]} or legacy {"choices": [{"text": "..."}]}
    if not isinstance(data, dict):
        return None
    choice = _first(data.get("choices"))
    if not isinstance(choice, dict):
        return None
    message = choice.get("message")
    if isinstance(message, dict) and isinstance(message.get("content"), str):
        return message["content"]
    if isinstance(choice.get("text"), str):
        return choice["text"]
    return None


def match_chat_message(data: Any) -> Optional[str]:
    # Ollama /api/chat: {"message": {"role": "assistant", "content": "..."}}
    if not isinstance(data, dict):
        return None
    message = data.get("message")
    if isinstance(message, dict) and isinstance(message.get("content"), str):
        return message["content"]
    return None


def match_candidates(data: Any) -> Optional[str]:
    # Gemini generateContent: {"candidates": [{"content": {"parts": [{"text": "..."}]}}]}
    if not isinstance(data, dict):
        return None
    cand = _first(data.get("candidates"))
    if not isinstance(cand, dict):
        return None
    content = cand.get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return None
    texts = [p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)]
    if not texts:
        return None
    return "".join(texts)


def match_raw_string(data: Any) -> Optional[str]:
    return data if isinstance(data, str) else None


def match_any(data: Any) -> str:
    try:
        return json.dumps(data, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(data)


MATCHERS: List[Matcher] = [
    match_generated_text_list,
    match_generated_text,
    match_chat_choices,
    match_chat_message,
    match_candidates,
    match_raw_string,
    match_any,
]


def extract_text(data: Any, matchers: List[Matcher] | None = None) -> str:
    for matcher in MATCHERS if matchers is None else matchers:
        text = matcher(data)
        if text is not None:
            return text
    return match_any(data)
