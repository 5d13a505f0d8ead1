from __future__ import annotations
import argparse
import asyncio
import logging
import sys
from typing import List

from vaani.config import ConfigError, Settings, load_settings
from vaani.providers.registry import ProviderRegistry
from vaani.router import CompletionRouter
from vaani.telegram import TelegramClient

logger = logging.getLogger("vaani")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    # httpx logs every request URL at INFO; the Telegram URL embeds the bot token.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def cmd_serve(settings: Settings, host: str, port: int | None) -> int:
    import uvicorn

    from vaani.app import create_app

    port = port or settings.port
    logger.info(
        "starting on %s:%d (primary=%s, fallback=%s)",
        host,
        port,
        settings.primary or "-",
        settings.fallback or "-",
    )
    if not settings.primary:
        logger.warning("no completion provider credentials found; replies will say the assistant is not configured")
    uvicorn.run(create_app(settings), host=host, port=port, log_level=settings.log_level.lower())
    return 0


def cmd_ask(settings: Settings, text: str) -> int:
    router = CompletionRouter.from_registry(ProviderRegistry(settings))
    print(asyncio.run(router.complete(text)))
    return 0


def cmd_set_webhook(settings: Settings, url: str) -> int:
    ok = asyncio.run(TelegramClient.from_settings(settings).set_webhook(url))
    if not ok:
        print("setWebhook failed", file=sys.stderr)
        return 1
    print(f"Webhook set to {url}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="vaani-relay", description="Telegram to LLM webhook relay")
    sub = p.add_subparsers(dest="command")
    serve = sub.add_parser("serve", help="Run the webhook server (default)")
    serve.add_argument("--host", dest="host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    serve.add_argument("--port", dest="port", type=int, default=None, help="Listen port (default: $PORT or 3000)")
    ask = sub.add_parser("ask", help="Send one message through the completion router and print the reply")
    ask.add_argument("text", help="Message text")
    hook = sub.add_parser("set-webhook", help="Register the public webhook URL with Telegram")
    hook.add_argument("url", help="Public URL ending in /webhook")
    return p


def main(argv: List[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings()
    except ConfigError as e:
        configure_logging()
        logger.critical("configuration error: %s", e)
        return 1
    configure_logging(settings.log_level)
    if args.command == "ask":
        return cmd_ask(settings, args.text)
    if args.command == "set-webhook":
        return cmd_set_webhook(settings, args.url)
    return cmd_serve(settings, getattr(args, "host", "0.0.0.0"), getattr(args, "port", None))


if __name__ == "__main__":
    raise SystemExit(main())
