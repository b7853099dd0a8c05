from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..schema import ChangedValue, ParameterDiff
from ..utils.values import same_value


def diff(before: Mapping[str, Any], after: Mapping[str, Any]) -> ParameterDiff:
    """Structural diff over the union of both key sets.

    ``added`` holds keys only in ``after``, ``removed`` keys only in
    ``before``. Values are compared by scalar equality; nested objects are
    compared by identity, so two equal but distinct dicts show up as changed.
    Keys are listed in order of first appearance in ``before`` then ``after``.
    """
    result = ParameterDiff()
    keys = list(before) + [key for key in after if key not in before]
    for key in keys:
        if key not in before:
            result.added.append(key)
        elif key not in after:
            result.removed.append(key)
        elif not same_value(before[key], after[key]):
            result.changed.append(ChangedValue(key=key, old_value=before[key], new_value=after[key]))
        else:
            result.unchanged.append(key)
    return result


def equals(before: Mapping[str, Any], after: Mapping[str, Any]) -> bool:
    return diff(before, after).equal


__all__ = ["diff", "equals"]
