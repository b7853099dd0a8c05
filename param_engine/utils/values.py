from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..schema import is_number

_COMPOSITE_TYPES = (Mapping, list, set, frozenset, tuple)


def is_defined(value: Any) -> bool:
    """A parameter counts as present only when it carries a non-None value."""
    return value is not None


def same_value(a: Any, b: Any) -> bool:
    """Scalar value equality that keeps booleans distinct from numbers.

    Composite values (mappings, lists, sets, tuples) are compared by identity
    only: two equal-looking but distinct dicts are reported as different.
    """
    if a is b:
        return True
    if isinstance(a, _COMPOSITE_TYPES) or isinstance(b, _COMPOSITE_TYPES):
        return False
    if is_number(a) and is_number(b):
        return a == b
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    return type(a) is type(b) and a == b


__all__ = ["is_defined", "same_value"]
