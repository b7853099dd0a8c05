from __future__ import annotations

import time
from collections.abc import Iterable, Mapping
from typing import Any
from uuid import uuid4

from loguru import logger

from ..exceptions import DefaultPresetConflictError, DuplicatePresetError, PresetUpdateError
from ..schema import ParameterPreset, PresetStats
from ..shard import constants as C
from ..shard.enums import Capability
from .snapshot import ProviderTable

_IMMUTABLE_FIELDS = frozenset({"id", "provider"})


def _existing_default(presets: Iterable[ParameterPreset], *, ignore_id: str | None = None) -> ParameterPreset | None:
    for preset in presets:
        if preset.is_default and preset.id != ignore_id:
            return preset
    return None


def _detached(preset: ParameterPreset) -> ParameterPreset:
    # Stored presets never share their mutable parameter dict with callers.
    return preset.model_copy(deep=True)


def _custom_preset_id() -> str:
    return f"{C.CUSTOM_PRESET_PREFIX}{int(time.time() * 1000)}_{uuid4().hex[: C.CUSTOM_PRESET_SUFFIX_LEN]}"


class PresetStore:
    """Named, tagged parameter bundles per provider.

    At most one preset per provider is flagged ``is_default``; a registration
    or update that would introduce a second default is rejected instead of
    silently replacing the first. Presets live in memory only: hosts that need
    persistence load them at start-up and write back custom presets.
    """

    def __init__(self) -> None:
        self._table: ProviderTable[tuple[ParameterPreset, ...]] = ProviderTable(())

    def add(self, preset: ParameterPreset) -> None:
        """Register a preset.

        Raises DuplicatePresetError when the id is taken and
        DefaultPresetConflictError when the provider already has a default.
        """

        def _insert(current: tuple[ParameterPreset, ...]) -> tuple[ParameterPreset, ...]:
            if any(p.id == preset.id for p in current):
                raise DuplicatePresetError(preset.provider, preset.id)
            if preset.is_default:
                existing = _existing_default(current)
                if existing is not None:
                    logger.warning(f"Rejected default preset '{preset.id}' for '{preset.provider}': '{existing.id}' is already the default")
                    raise DefaultPresetConflictError(preset.provider, existing.id, preset.id)
            return (*current, _detached(preset))

        self._table.update(preset.provider, _insert)
        logger.debug(f"Added preset '{preset.id}' for provider '{preset.provider}'")

    def list_by_provider(self, provider: str) -> list[ParameterPreset]:
        return [_detached(p) for p in self._table.get(provider)]

    def get_by_id(self, provider: str, preset_id: str) -> ParameterPreset | None:
        for preset in self._table.get(provider):
            if preset.id == preset_id:
                return _detached(preset)
        return None

    def list_by_tag(self, provider: str, tag: str) -> list[ParameterPreset]:
        return [_detached(p) for p in self._table.get(provider) if tag in p.tags]

    def get_default(self, provider: str) -> ParameterPreset | None:
        default = _existing_default(self._table.get(provider))
        return _detached(default) if default is not None else None

    def update(self, provider: str, preset_id: str, **changes: Any) -> bool:
        """Apply a partial update; returns False when the preset does not exist.

        ``id`` and ``provider`` cannot change. Setting ``is_default`` while
        another preset is the default raises DefaultPresetConflictError.
        """
        blocked = sorted(k for k in changes if k in _IMMUTABLE_FIELDS)
        if blocked:
            raise PresetUpdateError(preset_id, blocked)
        if "tags" in changes:
            changes["tags"] = frozenset(changes["tags"])
        found = False

        def _replace(current: tuple[ParameterPreset, ...]) -> tuple[ParameterPreset, ...]:
            nonlocal found
            updated: list[ParameterPreset] = []
            for preset in current:
                if preset.id != preset_id:
                    updated.append(preset)
                    continue
                found = True
                candidate = ParameterPreset.model_validate({**preset.model_dump(), **changes})
                if candidate.is_default:
                    existing = _existing_default(current, ignore_id=preset_id)
                    if existing is not None:
                        raise DefaultPresetConflictError(provider, existing.id, preset_id)
                updated.append(_detached(candidate))
            return tuple(updated)

        if provider not in self._table:
            return False
        self._table.update(provider, _replace)
        return found

    def remove(self, provider: str, preset_id: str) -> bool:
        if self.get_by_id(provider, preset_id) is None:
            return False
        self._table.update(provider, lambda current: tuple(p for p in current if p.id != preset_id))
        logger.debug(f"Removed preset '{preset_id}' from provider '{provider}'")
        return True

    def create_custom(
        self,
        provider: str,
        name: str,
        description: str,
        parameters: Mapping[str, Any],
        tags: Iterable[str] = (),
        created_by: str | None = None,
        capability: Capability | None = None,
    ) -> ParameterPreset:
        """Create, register and return an ad-hoc, non-default preset."""
        preset = ParameterPreset(
            id=_custom_preset_id(),
            name=name,
            description=description,
            provider=provider,
            parameters=dict(parameters),
            tags=frozenset(tags),
            is_default=False,
            created_by=created_by,
            capability=capability,
        )
        self.add(preset)
        return preset

    def providers(self) -> frozenset[str]:
        return self._table.providers()

    def stats(self) -> dict[str, PresetStats]:
        return {
            provider: PresetStats(
                total=len(presets),
                default=sum(1 for p in presets if p.is_default),
                custom=sum(1 for p in presets if p.id.startswith(C.CUSTOM_PRESET_PREFIX)),
            )
            for provider, presets in self._table.snapshot().items()
        }


__all__ = ["PresetStore"]
