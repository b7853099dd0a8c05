from __future__ import annotations

# ============================================================================
# Configuration / registration errors
#
# User-supplied parameter data never raises; it is reported through structured
# results. These exceptions signal misconfiguration discovered while schemas,
# rules or presets are being registered.
# ============================================================================


class ParameterEngineError(ValueError):
    """Base exception for parameter engine configuration errors."""

    @property
    def user_message(self) -> str:
        return str(self)


class SchemaDefinitionError(ParameterEngineError):
    """Raised when a raw schema mapping cannot be turned into definitions."""

    def __init__(self, provider: str, detail: str):
        self.provider = provider
        super().__init__(f"Invalid parameter schema for provider '{provider}': {detail}")


class PresetError(ParameterEngineError):
    """Base exception for preset store errors."""


class DuplicatePresetError(PresetError):
    """Raised when a preset id is registered twice for the same provider."""

    def __init__(self, provider: str, preset_id: str):
        self.provider = provider
        self.preset_id = preset_id
        super().__init__(f"Preset '{preset_id}' is already registered for provider '{provider}'.")


class DefaultPresetConflictError(PresetError):
    """Raised when a second default preset would exist for a provider."""

    def __init__(self, provider: str, existing_id: str, rejected_id: str):
        self.provider = provider
        self.existing_id = existing_id
        self.rejected_id = rejected_id
        super().__init__(
            f"Provider '{provider}' already has default preset '{existing_id}'; "
            f"refusing to mark '{rejected_id}' as default."
        )


class PresetUpdateError(PresetError):
    """Raised when an update tries to change immutable preset fields."""

    def __init__(self, preset_id: str, fields: list[str]):
        self.preset_id = preset_id
        self.fields = fields
        super().__init__(f"Cannot change {', '.join(sorted(fields))} of preset '{preset_id}'.")


__all__ = [
    "ParameterEngineError",
    "SchemaDefinitionError",
    "PresetError",
    "DuplicatePresetError",
    "DefaultPresetConflictError",
    "PresetUpdateError",
]
