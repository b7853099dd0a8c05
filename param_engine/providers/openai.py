"""OpenAI chat and image (DALL-E) parameter catalogue."""

from __future__ import annotations

from typing import Any

from ..core.schema_registry import provider_key
from ..schema import (
    CheckResult,
    CustomValidationRule,
    Dependency,
    ParameterDefinition,
    ParameterPreset,
    ParameterSet,
    is_number,
)
from ..shard.enums import Capability, ParameterType, Provider

CHAT = provider_key(Provider.OPENAI, Capability.CHAT)
IMAGE = provider_key(Provider.OPENAI, Capability.IMAGE)

CHAT_MODELS = ("gpt-3.5-turbo", "gpt-4", "gpt-4-turbo", "gpt-4o")
IMAGE_MODELS = ("dall-e-2", "dall-e-3")
IMAGE_SIZES = ("256x256", "512x512", "1024x1024", "1792x1024", "1024x1792")

# ------------------------------- Schemas ----------------------------------- #

CHAT_DEFINITIONS: tuple[ParameterDefinition, ...] = (
    ParameterDefinition(
        key="model",
        type=ParameterType.ENUMERATION,
        default_value="gpt-3.5-turbo",
        options=CHAT_MODELS,
        description="Chat completion model",
    ),
    ParameterDefinition(
        key="temperature",
        type=ParameterType.NUMBER,
        default_value=0.7,
        min=0,
        max=2,
        description="Sampling temperature; higher is more random",
    ),
    ParameterDefinition(
        key="maxTokens",
        type=ParameterType.NUMBER,
        default_value=1000,
        min=1,
        max=4000,
        description="Maximum number of tokens to generate",
    ),
    ParameterDefinition(
        key="topP",
        type=ParameterType.NUMBER,
        default_value=1,
        min=0,
        max=1,
        description="Nucleus sampling probability mass",
    ),
    ParameterDefinition(
        key="frequencyPenalty",
        type=ParameterType.NUMBER,
        default_value=0,
        min=-2,
        max=2,
        description="Penalty for tokens by frequency so far",
    ),
    ParameterDefinition(
        key="presencePenalty",
        type=ParameterType.NUMBER,
        default_value=0,
        min=-2,
        max=2,
        description="Penalty for tokens that already appeared",
    ),
)

IMAGE_DEFINITIONS: tuple[ParameterDefinition, ...] = (
    ParameterDefinition(
        key="model",
        type=ParameterType.ENUMERATION,
        default_value="dall-e-3",
        options=IMAGE_MODELS,
        description="Image generation model",
    ),
    ParameterDefinition(
        key="size",
        type=ParameterType.ENUMERATION,
        default_value="1024x1024",
        options=IMAGE_SIZES,
        description="Output resolution",
    ),
    ParameterDefinition(
        key="quality",
        type=ParameterType.ENUMERATION,
        default_value="standard",
        options=("standard", "hd"),
        description="Rendering quality; 'hd' needs dall-e-3",
    ),
    # No default: DALL-E 2 rejects the parameter outright.
    ParameterDefinition(
        key="style",
        type=ParameterType.ENUMERATION,
        options=("vivid", "natural"),
        description="Rendering style (dall-e-3 only)",
    ),
    ParameterDefinition(
        key="n",
        type=ParameterType.NUMBER,
        default_value=1,
        min=1,
        max=10,
        description="Number of images to generate",
    ),
)

# ------------------------------- Rules ------------------------------------- #


def _check_dalle_compatibility(value: Any, definition: ParameterDefinition, params: ParameterSet) -> CheckResult:
    model = params.get("model")
    if model == "dall-e-2":
        if definition.key == "quality" and value != "standard":
            return CheckResult.fail("DALL-E 2 only supports standard quality")
        if definition.key == "style":
            return CheckResult.fail("DALL-E 2 does not support style parameter")
    if model == "dall-e-3" and definition.key == "n" and value != 1:
        return CheckResult.fail("DALL-E 3 only supports generating 1 image at a time")
    return CheckResult.ok()


def _check_temperature(value: Any, definition: ParameterDefinition, params: ParameterSet) -> CheckResult:
    if definition.key != "temperature" or not is_number(value):
        return CheckResult.ok()
    if value < 0.1:
        return CheckResult.fail("Temperature below 0.1 may produce very repetitive responses")
    if value > 1.5:
        return CheckResult.fail("Temperature above 1.5 may produce incoherent responses")
    return CheckResult.ok()


CHAT_RULES: tuple[CustomValidationRule, ...] = (
    CustomValidationRule(
        name="Temperature Range Check",
        description="Keeps temperature inside the range that produces usable text",
        check=_check_temperature,
    ),
)

IMAGE_RULES: tuple[CustomValidationRule, ...] = (
    CustomValidationRule(
        name="DALL-E Model Compatibility",
        description="Checks quality, style and n against the selected DALL-E model",
        check=_check_dalle_compatibility,
    ),
)

IMAGE_DEPENDENCIES: tuple[Dependency, ...] = (
    Dependency(
        parameter="quality",
        depends_on="model",
        condition=lambda quality, model: model == "dall-e-3" or quality == "standard",
        message="Quality parameter is only supported by DALL-E 3",
    ),
    Dependency(
        parameter="style",
        depends_on="model",
        condition=lambda style, model: model == "dall-e-3" or style is None,
        message="Style parameter is only supported by DALL-E 3",
    ),
)

# ------------------------------- Presets ----------------------------------- #


def chat_presets() -> list[ParameterPreset]:
    def preset(preset_id: str, name: str, description: str, parameters: dict[str, Any], tags: set[str], default: bool = False) -> ParameterPreset:
        return ParameterPreset(
            id=preset_id,
            name=name,
            description=description,
            provider=CHAT,
            parameters=parameters,
            tags=frozenset(tags),
            is_default=default,
            capability=Capability.CHAT,
        )

    return [
        preset(
            "openai_chat_creative",
            "Creative writing",
            "Settings for creative writing, storytelling and brainstorming",
            {"model": "gpt-4", "temperature": 0.9, "maxTokens": 2000, "topP": 0.9, "frequencyPenalty": 0.5, "presencePenalty": 0.5},
            {"creative", "writing", "storytelling"},
        ),
        preset(
            "openai_chat_analytical",
            "Analytical",
            "Settings for analysis, reasoning and logic",
            {"model": "gpt-4", "temperature": 0.3, "maxTokens": 1500, "topP": 0.8, "frequencyPenalty": 0.0, "presencePenalty": 0.0},
            {"analytical", "reasoning", "logic"},
        ),
        preset(
            "openai_chat_balanced",
            "Balanced",
            "General purpose settings balancing creativity and accuracy",
            {"model": "gpt-3.5-turbo", "temperature": 0.7, "maxTokens": 1000, "topP": 1.0, "frequencyPenalty": 0.0, "presencePenalty": 0.0},
            {"balanced", "general", "default"},
            default=True,
        ),
        preset(
            "openai_chat_concise",
            "Concise",
            "Short, direct answers",
            {"model": "gpt-3.5-turbo", "temperature": 0.5, "maxTokens": 500, "topP": 0.9, "frequencyPenalty": 0.2, "presencePenalty": 0.1},
            {"concise", "brief", "direct"},
        ),
    ]


def image_presets() -> list[ParameterPreset]:
    def preset(preset_id: str, name: str, description: str, parameters: dict[str, Any], tags: set[str], default: bool = False) -> ParameterPreset:
        return ParameterPreset(
            id=preset_id,
            name=name,
            description=description,
            provider=IMAGE,
            parameters=parameters,
            tags=frozenset(tags),
            is_default=default,
            capability=Capability.IMAGE,
        )

    return [
        preset(
            "openai_image_hd_square",
            "HD square",
            "High definition square images with DALL-E 3",
            {"model": "dall-e-3", "size": "1024x1024", "quality": "hd", "style": "vivid", "n": 1},
            {"hd", "square", "vivid"},
        ),
        preset(
            "openai_image_natural_landscape",
            "Natural landscape",
            "Wide images with a natural look",
            {"model": "dall-e-3", "size": "1792x1024", "quality": "hd", "style": "natural", "n": 1},
            {"natural", "landscape", "wide"},
        ),
        preset(
            "openai_image_standard",
            "Standard",
            "Standard image generation settings",
            {"model": "dall-e-3", "size": "1024x1024", "quality": "standard", "style": "vivid", "n": 1},
            {"standard", "default"},
            default=True,
        ),
        preset(
            "openai_image_multiple_v2",
            "Multiple images",
            "Batch generation with DALL-E 2",
            {"model": "dall-e-2", "size": "1024x1024", "n": 4},
            {"multiple", "dall-e-2", "batch"},
        ),
    ]


__all__ = [
    "CHAT",
    "IMAGE",
    "CHAT_DEFINITIONS",
    "IMAGE_DEFINITIONS",
    "CHAT_RULES",
    "IMAGE_RULES",
    "IMAGE_DEPENDENCIES",
    "chat_presets",
    "image_presets",
]
