from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from typing import Any

from loguru import logger
from pydantic import ValidationError

from ..exceptions import SchemaDefinitionError
from ..schema import ParameterDefinition, ParameterSummary, ParameterValue
from ..shard import constants as C
from ..shard.enums import Capability, ParameterType
from .snapshot import ProviderTable


def provider_key(provider: str, capability: Capability | str | None = None) -> str:
    """Compose the scoped provider id used for per-capability schemas.

    ``provider_key("openai", Capability.IMAGE) == "openai:image"``. Without a
    capability the provider id is returned unchanged.
    """
    if capability is None:
        return provider
    cap = Capability(capability) if not isinstance(capability, Capability) else capability
    return f"{provider}{C.PROVIDER_SCOPE_SEPARATOR}{cap.value}"


def definitions_from_mappings(provider: str, raw: Iterable[Mapping[str, Any] | ParameterDefinition]) -> list[ParameterDefinition]:
    """Build definitions from plain mappings (e.g. loaded from JSON/YAML).

    Raises SchemaDefinitionError naming the offending entry when a mapping does
    not satisfy the definition invariants.
    """
    definitions: list[ParameterDefinition] = []
    for index, item in enumerate(raw):
        if isinstance(item, ParameterDefinition):
            definitions.append(item)
            continue
        try:
            definitions.append(ParameterDefinition.model_validate(item))
        except ValidationError as e:
            key = item.get("key", f"#{index}") if isinstance(item, Mapping) else f"#{index}"
            raise SchemaDefinitionError(provider, f"entry {key}: {e.errors()[0]['msg']}") from e
    return definitions


class SchemaRegistry:
    """Per-provider ordered parameter definitions. Pure lookup structure.

    No validation happens here beyond the invariants each definition enforces
    on construction; an unknown provider simply has no definitions.
    """

    def __init__(self) -> None:
        self._table: ProviderTable[tuple[ParameterDefinition, ...]] = ProviderTable(())

    def register(self, provider: str, definitions: Iterable[ParameterDefinition | Mapping[str, Any]]) -> None:
        """Replace (not merge) the provider's definition list; last write wins."""
        defs = tuple(definitions_from_mappings(provider, definitions))
        replaced = provider in self._table
        self._table.set(provider, defs)
        logger.debug(f"{'Replaced' if replaced else 'Registered'} {len(defs)} parameter definitions for provider '{provider}'")

    def unregister(self, provider: str) -> bool:
        return self._table.pop(provider)

    def lookup(self, provider: str) -> tuple[ParameterDefinition, ...]:
        return self._table.get(provider)

    def find_definition(self, provider: str, key: str) -> ParameterDefinition | None:
        for definition in self._table.get(provider):
            if definition.key == key:
                return definition
        return None

    def list_providers(self) -> frozenset[str]:
        return self._table.providers()

    def supports_parameter(self, provider: str, key: str) -> bool:
        return self.find_definition(provider, key) is not None

    def summary(self, provider: str) -> ParameterSummary:
        """Count definitions by type and by whether they carry a default."""
        definitions = self.lookup(provider)
        by_type = Counter(d.type.value for d in definitions)
        required = sum(1 for d in definitions if d.required)
        return ParameterSummary(
            total=len(definitions),
            by_type=dict(by_type),
            required=required,
            optional=len(definitions) - required,
        )

    def suggestions(self, provider: str, key: str) -> list[ParameterValue]:
        """Return representative values for a parameter, e.g. to pre-fill a form."""
        definition = self.find_definition(provider, key)
        if definition is None:
            return []
        if definition.type == ParameterType.ENUMERATION:
            return list(definition.options or ())
        if definition.type == ParameterType.BOOLEAN:
            return [True, False]
        if definition.type == ParameterType.NUMBER:
            values: list[ParameterValue] = []
            for candidate in (definition.default_value, definition.min, definition.max):
                if candidate is not None:
                    values.append(candidate)
            return values
        return [definition.default_value] if definition.default_value is not None else []


__all__ = ["SchemaRegistry", "provider_key", "definitions_from_mappings"]
