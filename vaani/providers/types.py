from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, List
from datetime import datetime, timezone


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass
class ProviderRequest:
    model: str
    messages: List[Dict[str, str]]  # [{role, content}]
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_text(cls, model: str, text: str, **metadata: Any) -> "ProviderRequest":
        return cls(model=model, messages=[{"role": "user", "content": text}], metadata=dict(metadata))

    @property
    def prompt(self) -> str:
        # Text-generation providers take a single raw prompt rather than a message list.
        return "\n".join(m.get("content", "") for m in self.messages)


@dataclass
class ProviderResponse:
    ok: bool
    content: str
    latency_ms: int
    provider_meta: Dict[str, Any]
    error: Optional[str] = None
    created_at: str = field(default_factory=_utcnow)
