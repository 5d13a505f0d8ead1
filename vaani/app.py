from __future__ import annotations
import json
import logging
from typing import Optional

import httpx
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel

from vaani.config import Settings
from vaani.pipeline import RelayService
from vaani.providers.registry import ProviderRegistry
from vaani.router import CompletionRouter
from vaani.telegram import TelegramClient

APP_VERSION = "0.1.0"
HEALTH_TEXT = "✅ Vaani backend is running"

logger = logging.getLogger(__name__)


class Health(BaseModel):
    status: str


class VersionInfo(BaseModel):
    version: str
    primary_provider: str | None
    fallback_provider: str | None
    models: dict[str, str]


def create_app(
    settings: Settings,
    *,
    router: Optional[CompletionRouter] = None,
    telegram: Optional[TelegramClient] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Build the webhook app from an already-loaded Settings.

    ``router`` and ``telegram`` default to ones built from ``settings``;
    ``transport`` is handed to every outbound httpx client when given.
    """
    if router is None:
        router = CompletionRouter.from_registry(ProviderRegistry(settings, transport=transport))
    if telegram is None:
        telegram = TelegramClient.from_settings(settings, transport=transport)

    app = FastAPI(title="Vaani Relay", version=APP_VERSION)
    app.state.settings = settings
    app.state.relay = RelayService(router, telegram)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return HEALTH_TEXT

    @app.get("/health", response_model=Health)
    async def health():
        return Health(status="ok")

    @app.get("/version", response_model=VersionInfo)
    async def version():
        s: Settings = app.state.settings
        return VersionInfo(
            version=APP_VERSION,
            primary_provider=s.primary,
            fallback_provider=s.fallback,
            models={name: cfg.model for name, cfg in s.providers.items()},
        )

    @app.post("/webhook")
    async def webhook(request: Request):
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise HTTPException(status_code=400, detail="body must be JSON")
        try:
            outcome = await app.state.relay.handle(body)
        except Exception:
            logger.exception("webhook handling failed")
            return Response(status_code=500)
        return Response(status_code=outcome.http_status)

    return app
