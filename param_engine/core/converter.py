from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from typing import Any

from ..schema import ParameterDefinition, ParameterSet
from ..shard import constants as C
from ..shard.enums import ParameterType

_DECIMAL_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")
_INTEGER_RE = re.compile(r"^[+-]?\d+$")


def parse_number(text: str) -> int | float | None:
    """Parse a decimal literal; integral literals become ``int``.

    Returns None for anything that is not a finite decimal number.
    """
    candidate = text.strip()
    if not _DECIMAL_RE.match(candidate):
        return None
    if _INTEGER_RE.match(candidate):
        return int(candidate)
    number = float(candidate)
    return number if math.isfinite(number) else None


def parse_boolean(text: str) -> bool | None:
    lowered = text.strip().lower()
    if lowered == C.BOOLEAN_TRUE_LITERAL:
        return True
    if lowered == C.BOOLEAN_FALSE_LITERAL:
        return False
    return None


def convert_value(value: Any, definition: ParameterDefinition) -> tuple[Any, str | None]:
    """Coerce one textual value to the definition's type.

    Returns ``(converted, issue)``. When the text cannot be converted the
    original value is returned unchanged together with a description of the
    problem; non-string values are never touched.
    """
    if not isinstance(value, str):
        return value, None
    if definition.type == ParameterType.NUMBER:
        number = parse_number(value)
        if number is None:
            return value, f'{definition.key}: could not convert "{value}" to a number'
        return number, None
    if definition.type == ParameterType.BOOLEAN:
        flag = parse_boolean(value)
        if flag is None:
            return value, f'{definition.key}: expected "true" or "false", got "{value}"'
        return flag, None
    return value, None


def convert_with_issues(parameters: Mapping[str, Any], definitions: Iterable[ParameterDefinition]) -> tuple[ParameterSet, dict[str, str]]:
    """Convert a raw parameter map and report keys whose text did not convert.

    The second element maps each unconverted key to a diagnostic message.
    """
    by_key = {d.key: d for d in definitions}
    converted: ParameterSet = {}
    issues: dict[str, str] = {}
    for key, value in parameters.items():
        definition = by_key.get(key)
        if definition is None:
            converted[key] = value
            continue
        converted[key], issue = convert_value(value, definition)
        if issue:
            issues[key] = issue
    return converted, issues


def convert(parameters: Mapping[str, Any], definitions: Iterable[ParameterDefinition]) -> ParameterSet:
    """Leniently coerce textual input to the schema's declared types.

    Never rejects input: unparseable text falls through unchanged and keys
    without a definition pass as given. Rejections are left to the validators.
    """
    converted, _ = convert_with_issues(parameters, definitions)
    return converted


__all__ = ["parse_number", "parse_boolean", "convert_value", "convert", "convert_with_issues"]
