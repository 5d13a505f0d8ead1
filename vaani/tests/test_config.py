import pytest

from vaani.config import ConfigError, load_settings


def test_missing_bot_token_is_fatal():
    with pytest.raises(ConfigError):
        load_settings({"OPENAI_API_KEY": "sk-x"})


def test_blank_bot_token_is_fatal():
    with pytest.raises(ConfigError):
        load_settings({"TELEGRAM_BOT_TOKEN": "   "})


def test_defaults_without_providers(make_settings):
    s = make_settings()
    assert s.providers == {}
    assert s.primary is None and s.fallback is None
    assert s.port == 3000
    assert s.timeout == 120.0
    assert s.telegram_api_base == "https://api.telegram.org"


def test_primary_and_fallback_follow_preference_order(make_settings):
    s = make_settings(GOOGLE_API_KEY="g", OPENAI_API_KEY="o", HUGGINGFACE_API_KEY="h")
    assert s.primary == "openai"
    assert s.fallback == "huggingface"
    assert s.primary_provider.family == "chat"
    assert s.fallback_provider.family == "text-generation"


def test_single_provider_has_no_fallback(make_settings):
    s = make_settings(HF_API_TOKEN="h")
    assert s.primary == "huggingface"
    assert s.fallback is None


def test_provider_override(make_settings):
    s = make_settings(OPENAI_API_KEY="o", GOOGLE_API_KEY="g", LLM_PROVIDER="Gemini")
    assert s.primary == "gemini"
    assert s.fallback == "openai"


def test_override_without_credential_uses_first_configured(make_settings):
    s = make_settings(OPENAI_API_KEY="o", LLM_PROVIDER="huggingface")
    assert s.primary == "openai"


def test_unknown_provider_override_rejected(make_settings):
    with pytest.raises(ConfigError):
        make_settings(OPENAI_API_KEY="o", LLM_PROVIDER="claude")


def test_fallback_can_be_disabled(make_settings):
    s = make_settings(OPENAI_API_KEY="o", GOOGLE_API_KEY="g", LLM_FALLBACK_PROVIDER="none")
    assert s.primary == "openai"
    assert s.fallback is None


def test_fallback_same_as_primary_is_dropped(make_settings):
    s = make_settings(OPENAI_API_KEY="o", LLM_FALLBACK_PROVIDER="openai")
    assert s.fallback is None


def test_model_override_applies_to_primary_only(make_settings):
    s = make_settings(OPENAI_API_KEY="o", GOOGLE_API_KEY="g", LLM_MODEL="gpt-4o-mini")
    assert s.providers["openai"].model == "gpt-4o-mini"
    assert s.providers["gemini"].model == "gemini-1.5-flash"


def test_generation_params(make_settings):
    s = make_settings(OPENAI_API_KEY="o", LLM_TEMPERATURE="0.3", LLM_MAX_TOKENS="256", LLM_TIMEOUT="30", PORT="8080")
    cfg = s.providers["openai"]
    assert cfg.temperature == 0.3
    assert cfg.max_tokens == 256
    assert s.timeout == 30.0
    assert s.port == 8080


def test_bad_number_rejected(make_settings):
    with pytest.raises(ConfigError):
        make_settings(PORT="eighty")


def test_ollama_enabled_by_host(make_settings):
    s = make_settings(OLLAMA_HOST="http://localhost:11434/")
    assert s.primary == "ollama"
    assert s.providers["ollama"].endpoint == "http://localhost:11434"
    assert s.providers["ollama"].api_key is None


@pytest.mark.parametrize("raw, level", [
    ("warn", "WARNING"),
    ("WARNING", "WARNING"),
    ("fatal", "CRITICAL"),
    ("debug", "DEBUG"),
    ("trace", "TRACE"),
])
def test_log_level_normalized(make_settings, raw, level):
    assert make_settings(LOG_LEVEL=raw).log_level == level


def test_unknown_log_level_rejected(make_settings):
    with pytest.raises(ConfigError):
        make_settings(LOG_LEVEL="verbose")
