from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from loguru import logger

from ..schema import ConstraintReport, CustomValidationRule, Dependency, MutualExclusion, ParameterDefinition
from ..utils.values import is_defined
from .snapshot import ProviderTable


def _append(item: Any) -> Any:
    return lambda current: (*current, item)


class ConstraintValidator:
    """Cross-parameter rules: dependencies, mutual exclusions and custom rules.

    Rules are provider-scoped and registered once at start-up (the registration
    methods stay usable at runtime). ``evaluate`` never raises for bad data;
    exceptions raised inside a condition or rule are treated as programming
    faults and propagate unchanged.
    """

    def __init__(self) -> None:
        self._dependencies: ProviderTable[tuple[Dependency, ...]] = ProviderTable(())
        self._exclusions: ProviderTable[tuple[MutualExclusion, ...]] = ProviderTable(())
        self._rules: ProviderTable[tuple[CustomValidationRule, ...]] = ProviderTable(())

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def add_dependency(self, provider: str, dependency: Dependency) -> None:
        self._dependencies.update(provider, _append(dependency))
        logger.debug(f"Added dependency {dependency.parameter} -> {dependency.depends_on} for provider '{provider}'")

    def add_mutual_exclusion(self, provider: str, exclusion: MutualExclusion) -> None:
        self._exclusions.update(provider, _append(exclusion))
        logger.debug(f"Added mutual exclusion {sorted(exclusion.parameters)} for provider '{provider}'")

    def add_custom_rule(self, provider: str, rule: CustomValidationRule) -> None:
        self._rules.update(provider, _append(rule))
        logger.debug(f"Added custom rule '{rule.name}' for provider '{provider}'")

    def dependencies(self, provider: str) -> tuple[Dependency, ...]:
        return self._dependencies.get(provider)

    def mutual_exclusions(self, provider: str) -> tuple[MutualExclusion, ...]:
        return self._exclusions.get(provider)

    def custom_rules(self, provider: str) -> tuple[CustomValidationRule, ...]:
        return self._rules.get(provider)

    def clear(self, provider: str) -> None:
        """Drop every rule registered for ``provider``."""
        self._dependencies.pop(provider)
        self._exclusions.pop(provider)
        self._rules.pop(provider)

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------
    def check_dependencies(self, provider: str, parameters: Mapping[str, Any]) -> list[str]:
        errors: list[str] = []
        for dep in self._dependencies.get(provider):
            value = parameters.get(dep.parameter)
            if not is_defined(value):
                continue
            # The depended-on value is passed as None when absent; conditions
            # must handle that explicitly.
            if not dep.condition(value, parameters.get(dep.depends_on)):
                errors.append(dep.message)
        return errors

    def check_mutual_exclusions(self, provider: str, parameters: Mapping[str, Any]) -> list[str]:
        errors: list[str] = []
        for exclusion in self._exclusions.get(provider):
            present = [key for key in exclusion.parameters if is_defined(parameters.get(key))]
            if len(present) > 1:
                errors.append(exclusion.message)
        return errors

    def check_custom_rules(
        self,
        provider: str,
        parameters: Mapping[str, Any],
        definitions: Iterable[ParameterDefinition],
    ) -> list[str]:
        errors: list[str] = []
        definitions = tuple(definitions)
        candidate = dict(parameters)
        for rule in self._rules.get(provider):
            for definition in definitions:
                value = candidate.get(definition.key)
                if not is_defined(value):
                    continue
                result = rule.check(value, definition, candidate)
                if not result.valid:
                    errors.append(f"{rule.name}: {result.message or rule.description or 'validation failed'}")
        return errors

    def evaluate(
        self,
        provider: str,
        parameters: Mapping[str, Any],
        definitions: Iterable[ParameterDefinition],
        *,
        check_dependencies: bool = True,
        check_exclusions: bool = True,
        check_custom_rules: bool = True,
    ) -> ConstraintReport:
        """Run all three phases and concatenate their violations in fixed order."""
        dependency_errors = self.check_dependencies(provider, parameters) if check_dependencies else []
        exclusion_errors = self.check_mutual_exclusions(provider, parameters) if check_exclusions else []
        rule_errors = self.check_custom_rules(provider, parameters, definitions) if check_custom_rules else []
        violations = [*dependency_errors, *exclusion_errors, *rule_errors]
        return ConstraintReport(
            valid=not violations,
            violations=violations,
            dependency_violations=dependency_errors,
            exclusion_violations=exclusion_errors,
            custom_rule_violations=rule_errors,
        )


__all__ = ["ConstraintValidator"]
