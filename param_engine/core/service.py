from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from typing import Any

from loguru import logger

from ..schema import (
    ConstraintReport,
    ParameterDefinition,
    ParameterDiff,
    ParameterPreset,
    ParameterSet,
    ParameterStats,
    PreparedParameters,
    is_number,
)
from ..shard import constants as C
from ..utils.values import is_defined
from . import comparator, converter, defaults, value_validator
from .constraints import ConstraintValidator
from .defaults import ProviderDefaults
from .presets import PresetStore
from .schema_registry import SchemaRegistry


class ParameterService:
    """
    Facade wiring the registries and the pure stages into one pipeline:
    convert -> resolve defaults -> per-key value checks -> cross-parameter
    constraints.

    All collaborators are injected so hosts and tests can build isolated
    instances; fresh empty ones are created when omitted.
    """

    def __init__(
        self,
        schemas: SchemaRegistry | None = None,
        constraints: ConstraintValidator | None = None,
        presets: PresetStore | None = None,
        provider_defaults: ProviderDefaults | None = None,
        *,
        strict_conversion: bool = True,
    ) -> None:
        self.schemas = schemas or SchemaRegistry()
        self.constraints = constraints or ConstraintValidator()
        self.presets = presets or PresetStore()
        self.provider_defaults = provider_defaults or ProviderDefaults()
        self.strict_conversion = strict_conversion

    # ------------------------------------------------------------------
    # Schema passthroughs
    # ------------------------------------------------------------------
    def register_provider(self, provider: str, definitions: Iterable[ParameterDefinition | Mapping[str, Any]]) -> None:
        self.schemas.register(provider, definitions)

    def definitions(self, provider: str) -> tuple[ParameterDefinition, ...]:
        return self.schemas.lookup(provider)

    # ------------------------------------------------------------------
    # Individual stages
    # ------------------------------------------------------------------
    def convert(self, provider: str, parameters: Mapping[str, Any]) -> ParameterSet:
        return converter.convert(parameters, self.definitions(provider))

    def clean(self, provider: str, parameters: Mapping[str, Any]) -> ParameterSet:
        return defaults.clean(parameters, self.definitions(provider))

    def merge_with_defaults(self, provider: str, parameters: Mapping[str, Any], *, strip_unknown: bool = False) -> ParameterSet:
        return defaults.resolve(
            provider,
            parameters,
            self.definitions(provider),
            self.provider_defaults.get(provider),
            strip_unknown=strip_unknown,
        )

    def validate(
        self,
        provider: str,
        parameters: Mapping[str, Any],
        *,
        check_dependencies: bool = True,
        check_exclusions: bool = True,
        check_custom_rules: bool = True,
    ) -> tuple[list[str], ConstraintReport]:
        """Run value checks and constraint evaluation on an already-typed set.

        Returns ``(value_violations, constraint_report)``.
        """
        definitions = self.definitions(provider)
        value_errors = value_validator.check_all(parameters, definitions)
        report = self.constraints.evaluate(
            provider,
            parameters,
            definitions,
            check_dependencies=check_dependencies,
            check_exclusions=check_exclusions,
            check_custom_rules=check_custom_rules,
        )
        return value_errors, report

    def compare(self, before: Mapping[str, Any], after: Mapping[str, Any]) -> ParameterDiff:
        return comparator.diff(before, after)

    # ------------------------------------------------------------------
    # Presets
    # ------------------------------------------------------------------
    def apply_preset(self, provider: str, preset_id: str, overrides: Mapping[str, Any] | None = None) -> ParameterSet | None:
        """Return the preset's parameters overlaid with ``overrides``, or None if unknown.

        None-valued overrides count as absent and keep the preset's value.
        """
        preset = self.presets.get_by_id(provider, preset_id)
        if preset is None:
            return None
        defined = {key: value for key, value in (overrides or {}).items() if is_defined(value)}
        return {**preset.parameters, **defined}

    def create_custom_preset(
        self,
        provider: str,
        name: str,
        description: str,
        parameters: Mapping[str, Any],
        tags: Iterable[str] = (),
        created_by: str | None = None,
    ) -> ParameterPreset:
        return self.presets.create_custom(provider, name, description, parameters, tags, created_by)

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------
    def prepare(
        self,
        provider: str,
        raw: Mapping[str, Any],
        *,
        preset_id: str | None = None,
        strip_unknown: bool = True,
        check_dependencies: bool = True,
        check_exclusions: bool = True,
        check_custom_rules: bool = True,
        include_suggestions: bool = False,
    ) -> PreparedParameters:
        """Turn raw caller parameters into a complete, provider-valid set.

        Never raises for bad input; every problem is collected into the
        result so the host decides between hard rejection and soft warnings.
        """
        definitions = self.definitions(provider)
        warnings: list[str] = []
        violations: list[str] = []

        if not definitions:
            warnings.append(f"No parameter definitions registered for provider '{provider}'")

        seed: Mapping[str, Any] = raw
        if preset_id is not None:
            applied = self.apply_preset(provider, preset_id, raw)
            if applied is None:
                violations.append(f"Unknown preset '{preset_id}' for provider '{provider}'")
            else:
                seed = applied

        converted, conversion_issues = converter.convert_with_issues(seed, definitions)
        if self.strict_conversion:
            violations.extend(conversion_issues.values())
        else:
            warnings.extend(conversion_issues.values())

        merged = self.merge_with_defaults(provider, converted, strip_unknown=strip_unknown)
        value_errors = value_validator.check_each(merged, definitions)
        report = self.constraints.evaluate(
            provider,
            merged,
            definitions,
            check_dependencies=check_dependencies,
            check_exclusions=check_exclusions,
            check_custom_rules=check_custom_rules,
        )
        # Keys that failed conversion are already reported; one message per key.
        for key, message in value_errors.items():
            if not (self.strict_conversion and key in conversion_issues):
                violations.append(message)
        violations.extend(report.violations)

        result = PreparedParameters(
            valid=not violations,
            provider=provider,
            parameters=merged,
            violations=violations,
            warnings=warnings,
            suggestions=self.advisory_suggestions(provider, merged) if include_suggestions else [],
            constraints=report,
        )
        if violations:
            logger.debug(f"Prepared parameters for '{provider}' with {len(violations)} violation(s)")
        return result

    # ------------------------------------------------------------------
    # Advisory output
    # ------------------------------------------------------------------
    def advisory_suggestions(self, provider: str, parameters: Mapping[str, Any]) -> list[str]:
        """Non-binding hints: unset keys with defaults, extreme temperature, large token limits."""
        suggestions: list[str] = []
        for definition in self.definitions(provider):
            value = parameters.get(definition.key)
            if value is None and definition.default_value is not None:
                suggestions.append(f"Consider setting {definition.key} to {definition.default_value} (default)")
                continue
            if not is_number(value):
                continue
            if definition.key == "temperature":
                if value < C.LOW_TEMPERATURE_HINT:
                    suggestions.append("Low temperature may produce repetitive responses")
                elif value > C.HIGH_TEMPERATURE_HINT:
                    suggestions.append("High temperature may produce incoherent responses")
            if definition.key in C.TOKEN_LIMIT_KEYS and value > C.HIGH_TOKEN_LIMIT_HINT:
                suggestions.append("High token limit may result in expensive API calls")
        return suggestions

    def stats(self) -> ParameterStats:
        providers = sorted(self.schemas.list_providers())
        by_type: Counter[str] = Counter()
        by_provider: dict[str, int] = {}
        presets_count: dict[str, int] = {}
        for provider in providers:
            definitions = self.definitions(provider)
            by_provider[provider] = len(definitions)
            by_type.update(d.type.value for d in definitions)
            presets_count[provider] = len(self.presets.list_by_provider(provider))
        return ParameterStats(
            total_providers=len(providers),
            total_parameters=sum(by_provider.values()),
            parameters_by_provider=by_provider,
            parameters_by_type=dict(by_type),
            presets_count=presets_count,
        )


__all__ = ["ParameterService"]
