from __future__ import annotations

from functools import lru_cache
from typing import Any, ClassVar

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(env_prefix="PARAM_ENGINE_", env_nested_delimiter="__")

    provider_defaults: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Provider-level default overrides keyed by scoped provider id, e.g. {'openai:chat': {'temperature': 0.5}}",
    )
    load_builtins: bool = Field(default=True, description="Seed the built-in OpenAI/Gemini schemas, rules and presets")
    strict_conversion: bool = Field(default=True, description="Report text that cannot be converted as a violation instead of a warning")
    log_level: str = Field(default="INFO", description="Minimum loguru level for the server sink")

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.strip().upper()

    @property
    def providers_with_overrides(self) -> list[str]:
        """Scoped provider ids that carry at least one default override."""
        return sorted(p for p, values in self.provider_defaults.items() if values)


@lru_cache
def get_settings() -> Settings:
    return Settings()
