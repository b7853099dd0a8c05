from __future__ import annotations

import pytest

from param_engine.providers import create_default_service, gemini, openai
from param_engine.settings import Settings


def test_builtin_providers_are_scoped(builtin_service):
    assert builtin_service.schemas.list_providers() == frozenset({"openai:chat", "openai:image", "gemini:chat"})
    assert builtin_service.schemas.find_definition("openai:image", "quality") is not None
    assert builtin_service.schemas.find_definition("openai:chat", "quality") is None


def test_one_default_preset_per_scoped_provider(builtin_service):
    assert builtin_service.presets.get_default(openai.CHAT).id == "openai_chat_balanced"
    assert builtin_service.presets.get_default(openai.IMAGE).id == "openai_image_standard"
    assert builtin_service.presets.get_default(gemini.CHAT).id == "gemini_chat_balanced"


@pytest.mark.parametrize(
    ("provider", "preset_id"),
    [
        (openai.CHAT, "openai_chat_creative"),
        (openai.CHAT, "openai_chat_analytical"),
        (openai.CHAT, "openai_chat_balanced"),
        (openai.CHAT, "openai_chat_concise"),
        (gemini.CHAT, "gemini_chat_creative"),
        (gemini.CHAT, "gemini_chat_precise"),
        (gemini.CHAT, "gemini_chat_balanced"),
        (openai.IMAGE, "openai_image_hd_square"),
        (openai.IMAGE, "openai_image_natural_landscape"),
        (openai.IMAGE, "openai_image_standard"),
        (openai.IMAGE, "openai_image_multiple_v2"),
    ],
)
def test_builtin_presets_pass_their_own_rules(builtin_service, provider, preset_id):
    result = builtin_service.prepare(provider, {}, preset_id=preset_id)
    assert result.valid, result.violations


def test_defaults_alone_are_valid(builtin_service):
    for provider in (openai.CHAT, openai.IMAGE, gemini.CHAT):
        assert builtin_service.prepare(provider, {}).valid


def test_dalle_2_rejects_hd_quality_and_style(builtin_service):
    result = builtin_service.prepare(openai.IMAGE, {"model": "dall-e-2", "quality": "hd", "style": "vivid"})

    assert result.constraints.dependency_violations == [
        "Quality parameter is only supported by DALL-E 3",
        "Style parameter is only supported by DALL-E 3",
    ]
    assert result.constraints.custom_rule_violations == [
        "DALL-E Model Compatibility: DALL-E 2 only supports standard quality",
        "DALL-E Model Compatibility: DALL-E 2 does not support style parameter",
    ]


def test_dalle_3_generates_one_image(builtin_service):
    result = builtin_service.prepare(openai.IMAGE, {"n": "2"})
    assert result.violations == ["DALL-E Model Compatibility: DALL-E 3 only supports generating 1 image at a time"]


def test_openai_temperature_sanity(builtin_service):
    result = builtin_service.prepare(openai.CHAT, {"temperature": 0.05})
    assert result.violations == ["Temperature Range Check: Temperature below 0.1 may produce very repetitive responses"]


def test_deprecated_model(builtin_service):
    result = builtin_service.prepare(openai.CHAT, {"model": "text-davinci-003"})
    assert "Model Availability: Model text-davinci-003 is deprecated and may not be available" in result.violations


def test_gemini_topk_topp_balance(builtin_service):
    result = builtin_service.prepare(gemini.CHAT, {"topK": 30, "topP": 0.3})
    assert result.violations == ["TopK and TopP Balance: High topK with low topP may produce unexpected results"]


def test_gemini_token_limit(builtin_service):
    result = builtin_service.prepare(gemini.CHAT, {"maxOutputTokens": 5000})
    assert result.violations == ["Token Limit Check: Very high token limits may result in expensive API calls"]


def test_token_keys_are_mutually_exclusive(builtin_service):
    result = builtin_service.prepare(openai.CHAT, {"maxOutputTokens": 100}, strip_unknown=False)
    assert result.constraints.exclusion_violations == ["Cannot specify both maxTokens and maxOutputTokens"]


def test_create_default_service_from_settings():
    settings = Settings(provider_defaults={"openai:chat": {"temperature": 0.4}}, strict_conversion=False)
    service = create_default_service(settings)

    assert service.strict_conversion is False
    assert service.prepare(openai.CHAT, {}).parameters["temperature"] == 0.4


def test_create_default_service_without_builtins():
    service = create_default_service(Settings(load_builtins=False))
    assert service.schemas.list_providers() == frozenset()
