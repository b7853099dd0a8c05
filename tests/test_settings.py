from __future__ import annotations

from param_engine.settings import Settings, get_settings


def test_defaults(monkeypatch):
    for var in ("PARAM_ENGINE_LOAD_BUILTINS", "PARAM_ENGINE_STRICT_CONVERSION", "PARAM_ENGINE_LOG_LEVEL", "PARAM_ENGINE_PROVIDER_DEFAULTS"):
        monkeypatch.delenv(var, raising=False)
    settings = Settings()

    assert settings.load_builtins is True
    assert settings.strict_conversion is True
    assert settings.log_level == "INFO"
    assert settings.provider_defaults == {}


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PARAM_ENGINE_STRICT_CONVERSION", "false")
    monkeypatch.setenv("PARAM_ENGINE_LOG_LEVEL", "debug")
    monkeypatch.setenv("PARAM_ENGINE_PROVIDER_DEFAULTS", '{"openai:chat": {"temperature": 0.5}, "gemini:chat": {}}')
    settings = Settings()

    assert settings.strict_conversion is False
    assert settings.log_level == "DEBUG"
    assert settings.provider_defaults == {"openai:chat": {"temperature": 0.5}, "gemini:chat": {}}
    assert settings.providers_with_overrides == ["openai:chat"]


def test_get_settings_is_cached():
    get_settings.cache_clear()
    assert get_settings() is get_settings()
