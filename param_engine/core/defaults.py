"""Default-value resolution.

Three sources are layered, highest precedence first:

1. the caller-supplied value, when it is not None;
2. the provider-level default override (a runtime-tunable table kept apart
   from the schemas, see ``ProviderDefaults``);
3. the definition's own ``default_value``.

Keys unknown to the schema are passed through unchanged unless stripping is
requested, in which case they are dropped silently. Unknown parameters are
treated as non-actionable rather than malicious, so stripping never produces a
diagnostic.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from loguru import logger

from ..schema import ParameterDefinition, ParameterSet
from ..utils.values import is_defined
from .snapshot import ProviderTable


class ProviderDefaults:
    """Provider-scoped default overrides, tunable without editing schemas."""

    def __init__(self, initial: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self._table: ProviderTable[Mapping[str, Any]] = ProviderTable(MappingProxyType({}))
        for provider, defaults in (initial or {}).items():
            self.set(provider, defaults)

    def set(self, provider: str, defaults: Mapping[str, Any]) -> None:
        self._table.set(provider, MappingProxyType(dict(defaults)))
        logger.debug(f"Set {len(defaults)} provider-level defaults for '{provider}'")

    def get(self, provider: str) -> dict[str, Any]:
        return dict(self._table.get(provider))

    def update(self, provider: str, key: str, value: Any) -> None:
        self._table.update(provider, lambda current: MappingProxyType({**current, key: value}))

    def remove(self, provider: str) -> bool:
        return self._table.pop(provider)

    def all(self) -> dict[str, dict[str, Any]]:
        return {provider: dict(values) for provider, values in self._table.snapshot().items()}


def clean(parameters: Mapping[str, Any], definitions: Iterable[ParameterDefinition]) -> ParameterSet:
    """Drop keys that have no definition in the schema."""
    known = {d.key for d in definitions}
    return {key: value for key, value in parameters.items() if key in known}


def resolve(
    provider: str,
    parameters: Mapping[str, Any],
    definitions: Iterable[ParameterDefinition],
    provider_defaults: Mapping[str, Any] | None = None,
    *,
    strip_unknown: bool = False,
) -> ParameterSet:
    """Layer caller values over provider overrides over schema defaults.

    Idempotent: resolving an already-resolved set returns an equal set.
    """
    definitions = tuple(definitions)
    known = {d.key for d in definitions}
    merged: ParameterSet = {}

    for definition in definitions:
        if definition.default_value is not None:
            merged[definition.key] = definition.default_value

    for key, value in (provider_defaults or {}).items():
        if not is_defined(value) or (strip_unknown and key not in known):
            continue
        merged[key] = value

    for key, value in parameters.items():
        if not is_defined(value) or (strip_unknown and key not in known):
            continue
        merged[key] = value

    if strip_unknown:
        dropped = [key for key in parameters if key not in known]
        if dropped:
            logger.debug(f"Dropped unknown parameters for provider '{provider}': {', '.join(dropped)}")
    return merged


__all__ = ["ProviderDefaults", "clean", "resolve"]
