"""Built-in provider catalogue.

Schemas, rules and presets are registered under scoped provider ids
(``openai:chat``, ``openai:image``, ``gemini:chat``) so each capability keeps
its own default preset.
"""

from __future__ import annotations

from loguru import logger

from ..core.service import ParameterService
from ..settings import Settings, get_settings
from . import gemini, openai
from .common import COMMON_EXCLUSIONS, COMMON_RULES

CHAT_PROVIDERS = (openai.CHAT, gemini.CHAT)


def load_builtins(service: ParameterService) -> None:
    """Register the built-in schemas, rules, dependencies and presets on ``service``."""
    service.register_provider(openai.CHAT, openai.CHAT_DEFINITIONS)
    service.register_provider(openai.IMAGE, openai.IMAGE_DEFINITIONS)
    service.register_provider(gemini.CHAT, gemini.CHAT_DEFINITIONS)

    for rule in openai.CHAT_RULES:
        service.constraints.add_custom_rule(openai.CHAT, rule)
    for rule in openai.IMAGE_RULES:
        service.constraints.add_custom_rule(openai.IMAGE, rule)
    for dependency in openai.IMAGE_DEPENDENCIES:
        service.constraints.add_dependency(openai.IMAGE, dependency)
    for rule in gemini.CHAT_RULES:
        service.constraints.add_custom_rule(gemini.CHAT, rule)

    for provider in CHAT_PROVIDERS:
        for rule in COMMON_RULES:
            service.constraints.add_custom_rule(provider, rule)
        for exclusion in COMMON_EXCLUSIONS:
            service.constraints.add_mutual_exclusion(provider, exclusion)

    for preset in (*openai.chat_presets(), *openai.image_presets(), *gemini.chat_presets()):
        service.presets.add(preset)

    logger.debug(f"Loaded built-in catalogue for {', '.join(sorted(service.schemas.list_providers()))}")


def create_default_service(settings: Settings | None = None) -> ParameterService:
    """Build a service configured from ``Settings`` (environment by default)."""
    settings = settings or get_settings()
    service = ParameterService(strict_conversion=settings.strict_conversion)
    if settings.load_builtins:
        load_builtins(service)
    for provider, values in settings.provider_defaults.items():
        service.provider_defaults.set(provider, values)
    logger.info(
        f"Parameter service ready: {len(service.schemas.list_providers())} provider(s), "
        f"overrides for {settings.providers_with_overrides or 'none'}"
    )
    return service


__all__ = ["load_builtins", "create_default_service", "CHAT_PROVIDERS"]
