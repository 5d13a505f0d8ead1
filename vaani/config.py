from __future__ import annotations
import os
from dataclasses import dataclass, field, replace
from typing import Dict, List, Mapping, Optional

from dotenv import load_dotenv

DEFAULT_PORT = 3000
DEFAULT_TIMEOUT = 120.0
TELEGRAM_API_BASE = "https://api.telegram.org"

# Preference order used when LLM_PROVIDER / LLM_FALLBACK_PROVIDER are not set.
PROVIDER_ORDER = ("openai", "huggingface", "gemini", "ollama")
# uvicorn accepts exactly these; WARN and FATAL are stdlib aliases.
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "TRACE")
LOG_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}
PROVIDER_FAMILIES = {
    "openai": "chat",
    "huggingface": "text-generation",
    "gemini": "chat",
    "ollama": "chat",
}


class ConfigError(RuntimeError):
    """Raised when required configuration is missing or invalid."""


@dataclass(frozen=True)
class ProviderConfig:
    name: str
    family: str  # "chat" | "text-generation"
    endpoint: str
    api_key: Optional[str]
    model: str
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None


@dataclass(frozen=True)
class Settings:
    telegram_bot_token: str
    telegram_api_base: str = TELEGRAM_API_BASE
    providers: Dict[str, ProviderConfig] = field(default_factory=dict)
    primary: Optional[str] = None
    fallback: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @property
    def primary_provider(self) -> Optional[ProviderConfig]:
        return self.providers.get(self.primary) if self.primary else None

    @property
    def fallback_provider(self) -> Optional[ProviderConfig]:
        return self.providers.get(self.fallback) if self.fallback else None


def _get(env: Mapping[str, str], key: str, default: Optional[str] = None) -> Optional[str]:
    v = env.get(key)
    if v is None:
        return default
    v = v.strip()
    return v or default


def _as_float(env: Mapping[str, str], key: str, default: Optional[float]) -> Optional[float]:
    raw = _get(env, key)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{key} must be a number, got {raw!r}")


def _as_int(env: Mapping[str, str], key: str, default: Optional[int]) -> Optional[int]:
    raw = _get(env, key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {raw!r}")


def _log_level(env: Mapping[str, str]) -> str:
    level = (_get(env, "LOG_LEVEL", "INFO") or "INFO").upper()
    level = LOG_LEVEL_ALIASES.get(level, level)
    if level not in LOG_LEVELS:
        raise ConfigError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
    return level


def _provider_configs(env: Mapping[str, str]) -> Dict[str, ProviderConfig]:
    """Build a ProviderConfig for every provider whose credential is present."""
    temperature = _as_float(env, "LLM_TEMPERATURE", None)
    max_tokens = _as_int(env, "LLM_MAX_TOKENS", None)
    out: Dict[str, ProviderConfig] = {}

    openai_key = _get(env, "OPENAI_API_KEY")
    if openai_key:
        out["openai"] = ProviderConfig(
            name="openai",
            family=PROVIDER_FAMILIES["openai"],
            endpoint=_get(env, "OPENAI_BASE_URL", "https://api.openai.com/v1"),
            api_key=openai_key,
            model=_get(env, "OPENAI_MODEL", "gpt-3.5-turbo"),
            temperature=temperature,
            max_tokens=max_tokens,
        )

    hf_key = _get(env, "HUGGINGFACE_API_KEY") or _get(env, "HF_API_TOKEN")
    if hf_key:
        out["huggingface"] = ProviderConfig(
            name="huggingface",
            family=PROVIDER_FAMILIES["huggingface"],
            endpoint=_get(env, "HUGGINGFACE_BASE_URL", "https://api-inference.huggingface.co/models"),
            api_key=hf_key,
            model=_get(env, "HUGGINGFACE_MODEL", "mistralai/Mistral-7B-Instruct-v0.2"),
            temperature=temperature,
            max_tokens=max_tokens,
        )

    google_key = _get(env, "GOOGLE_API_KEY")
    if google_key:
        out["gemini"] = ProviderConfig(
            name="gemini",
            family=PROVIDER_FAMILIES["gemini"],
            endpoint=_get(env, "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/models"),
            api_key=google_key,
            model=_get(env, "GEMINI_MODEL", "gemini-1.5-flash"),
            temperature=temperature,
            max_tokens=max_tokens,
        )

    # Ollama has no credential; an explicit host is what opts it in.
    ollama_host = _get(env, "OLLAMA_HOST")
    if ollama_host:
        out["ollama"] = ProviderConfig(
            name="ollama",
            family=PROVIDER_FAMILIES["ollama"],
            endpoint=ollama_host.rstrip("/"),
            api_key=None,
            model=_get(env, "OLLAMA_MODEL", "llama3.2:latest"),
            temperature=temperature,
            max_tokens=max_tokens,
        )
    return out


def _select(providers: Dict[str, ProviderConfig], env: Mapping[str, str]) -> tuple[Optional[str], Optional[str]]:
    configured: List[str] = [n for n in PROVIDER_ORDER if n in providers]

    primary = _get(env, "LLM_PROVIDER")
    if primary is not None:
        primary = primary.lower()
        if primary not in PROVIDER_FAMILIES:
            raise ConfigError(f"LLM_PROVIDER must be one of {', '.join(PROVIDER_ORDER)}, got {primary!r}")
        if primary not in providers:
            # Requested provider has no credential; fall through to the first configured one.
            primary = None
    if primary is None:
        primary = configured[0] if configured else None

    fallback = _get(env, "LLM_FALLBACK_PROVIDER")
    if fallback is not None:
        fallback = fallback.lower()
        if fallback == "none":
            return primary, None
        if fallback not in PROVIDER_FAMILIES:
            raise ConfigError(f"LLM_FALLBACK_PROVIDER must be one of {', '.join(PROVIDER_ORDER)} or 'none', got {fallback!r}")
        if fallback not in providers or fallback == primary:
            fallback = None
        return primary, fallback

    rest = [n for n in configured if n != primary]
    return primary, (rest[0] if rest else None)


def load_settings(env: Optional[Mapping[str, str]] = None, *, dotenv: bool = True) -> Settings:
    """Read the process configuration once.

    ``env`` defaults to ``os.environ`` (after loading ``.env`` from the working
    directory). Raises :class:`ConfigError` when ``TELEGRAM_BOT_TOKEN`` is absent.
    """
    if env is None:
        if dotenv:
            load_dotenv()
        env = os.environ

    token = _get(env, "TELEGRAM_BOT_TOKEN")
    if not token:
        raise ConfigError("TELEGRAM_BOT_TOKEN is required")

    providers = _provider_configs(env)
    primary, fallback = _select(providers, env)

    model_override = _get(env, "LLM_MODEL")
    if primary and model_override:
        providers[primary] = replace(providers[primary], model=model_override)

    return Settings(
        telegram_bot_token=token,
        telegram_api_base=_get(env, "TELEGRAM_API_BASE", TELEGRAM_API_BASE).rstrip("/"),
        providers=providers,
        primary=primary,
        fallback=fallback,
        timeout=_as_float(env, "LLM_TIMEOUT", DEFAULT_TIMEOUT),
        port=_as_int(env, "PORT", DEFAULT_PORT),
        log_level=_log_level(env),
    )
