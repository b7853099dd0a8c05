from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Any

from ..schema import CheckResult, ParameterDefinition, is_number
from ..shard.enums import ParameterType
from ..utils.values import same_value


def _describe(value: Any) -> str:
    return f'"{value}"' if isinstance(value, str) else repr(value)


def _check_number(value: Any, definition: ParameterDefinition) -> CheckResult:
    if not is_number(value):
        return CheckResult.fail(f"{definition.key}: expected a number, got {_describe(value)}")
    if not math.isfinite(value):
        return CheckResult.fail(f"{definition.key}: expected a finite number")
    if definition.min is not None and value < definition.min:
        return CheckResult.fail(f"{definition.key}: value {value} is below minimum {definition.min}")
    if definition.max is not None and value > definition.max:
        return CheckResult.fail(f"{definition.key}: value {value} is above maximum {definition.max}")
    return CheckResult.ok()


def _check_string(value: Any, definition: ParameterDefinition) -> CheckResult:
    # min/max are length bounds for strings, not value bounds.
    if not isinstance(value, str):
        return CheckResult.fail(f"{definition.key}: expected a string, got {_describe(value)}")
    length = len(value)
    if definition.min is not None and length < definition.min:
        return CheckResult.fail(f"{definition.key}: string length {length} is below minimum {definition.min}")
    if definition.max is not None and length > definition.max:
        return CheckResult.fail(f"{definition.key}: string length {length} is above maximum {definition.max}")
    return CheckResult.ok()


def _check_boolean(value: Any, definition: ParameterDefinition) -> CheckResult:
    if not isinstance(value, bool):
        return CheckResult.fail(f"{definition.key}: expected a boolean, got {_describe(value)}")
    return CheckResult.ok()


def _check_enumeration(value: Any, definition: ParameterDefinition) -> CheckResult:
    options = definition.options or ()
    # Membership is type-aware so that True does not match an option of 1.
    if any(same_value(value, option) for option in options):
        return CheckResult.ok()
    allowed = ", ".join(str(o) for o in options)
    return CheckResult.fail(f"{definition.key}: value {_describe(value)} is not in allowed options: {allowed}")


_CHECKS = {
    ParameterType.NUMBER: _check_number,
    ParameterType.STRING: _check_string,
    ParameterType.BOOLEAN: _check_boolean,
    ParameterType.ENUMERATION: _check_enumeration,
}


def check(value: Any, definition: ParameterDefinition) -> CheckResult:
    """Decide type/range/enumeration validity of one value.

    An absent value (None) is always valid here; whether it gets a default is
    the resolver's concern. A value of the wrong type (for instance text that
    could not be converted to a number) yields a type diagnostic.
    """
    if value is None:
        return CheckResult.ok()
    return _CHECKS[definition.type](value, definition)


def check_each(parameters: Mapping[str, Any], definitions: Iterable[ParameterDefinition]) -> dict[str, str]:
    """Check every defined key; map each offending key to its message.

    Keys without a definition are ignored. All keys are checked, not just
    the first failure.
    """
    failures: dict[str, str] = {}
    for definition in definitions:
        result = check(parameters.get(definition.key), definition)
        if not result.valid:
            failures[definition.key] = result.message or f"{definition.key}: invalid value"
    return failures


def check_all(parameters: Mapping[str, Any], definitions: Iterable[ParameterDefinition]) -> list[str]:
    return list(check_each(parameters, definitions).values())


__all__ = ["check", "check_each", "check_all"]
