"""Gemini chat parameter catalogue."""

from __future__ import annotations

from typing import Any

from ..core.schema_registry import provider_key
from ..schema import CheckResult, CustomValidationRule, ParameterDefinition, ParameterPreset, ParameterSet, is_number
from ..shard.enums import Capability, ParameterType, Provider

CHAT = provider_key(Provider.GEMINI, Capability.CHAT)

CHAT_MODELS = ("gemini-pro", "gemini-pro-vision")

CHAT_DEFINITIONS: tuple[ParameterDefinition, ...] = (
    ParameterDefinition(key="model", type=ParameterType.ENUMERATION, default_value="gemini-pro", options=CHAT_MODELS, description="Gemini model"),
    ParameterDefinition(key="temperature", type=ParameterType.NUMBER, default_value=0.9, min=0, max=1, description="Sampling temperature"),
    ParameterDefinition(key="maxOutputTokens", type=ParameterType.NUMBER, default_value=2048, min=1, max=8192, description="Maximum output tokens"),
    ParameterDefinition(key="topP", type=ParameterType.NUMBER, default_value=1, min=0, max=1, description="Nucleus sampling probability mass"),
    ParameterDefinition(key="topK", type=ParameterType.NUMBER, default_value=1, min=1, max=40, description="Number of top tokens considered"),
)


def _check_temperature(value: Any, definition: ParameterDefinition, params: ParameterSet) -> CheckResult:
    if definition.key == "temperature" and is_number(value) and value > 1:
        return CheckResult.fail("Gemini temperature must be between 0 and 1")
    return CheckResult.ok()


def _check_topk_topp_balance(value: Any, definition: ParameterDefinition, params: ParameterSet) -> CheckResult:
    top_p = params.get("topP")
    if definition.key != "topK" or not is_number(value) or not is_number(top_p):
        return CheckResult.ok()
    if value > 20 and top_p < 0.5:
        return CheckResult.fail("High topK with low topP may produce unexpected results")
    return CheckResult.ok()


CHAT_RULES: tuple[CustomValidationRule, ...] = (
    CustomValidationRule(name="Gemini Temperature Range", description="Gemini accepts temperatures up to 1", check=_check_temperature),
    CustomValidationRule(name="TopK and TopP Balance", description="Flags a wide topK paired with a narrow topP", check=_check_topk_topp_balance),
)


def chat_presets() -> list[ParameterPreset]:
    common = {"provider": CHAT, "capability": Capability.CHAT}
    return [
        ParameterPreset(
            id="gemini_chat_creative",
            name="Creative",
            description="Creative writing and open-ended ideation",
            parameters={"model": "gemini-pro", "temperature": 0.9, "maxOutputTokens": 2048, "topP": 0.9, "topK": 20},
            tags=frozenset({"creative", "writing", "innovation"}),
            **common,
        ),
        ParameterPreset(
            id="gemini_chat_precise",
            name="Precise",
            description="Consistent, factual answers",
            parameters={"model": "gemini-pro", "temperature": 0.2, "maxOutputTokens": 1024, "topP": 0.8, "topK": 5},
            tags=frozenset({"precise", "consistent", "factual"}),
            **common,
        ),
        ParameterPreset(
            id="gemini_chat_balanced",
            name="Balanced",
            description="General purpose Gemini settings",
            parameters={"model": "gemini-pro", "temperature": 0.9, "maxOutputTokens": 2048, "topP": 1.0, "topK": 1},
            tags=frozenset({"balanced", "general", "default"}),
            is_default=True,
            **common,
        ),
    ]


__all__ = ["CHAT", "CHAT_DEFINITIONS", "CHAT_RULES", "chat_presets"]
