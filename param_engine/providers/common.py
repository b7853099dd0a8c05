"""Rules shared by every chat provider in the built-in catalogue."""

from __future__ import annotations

from typing import Any

from ..schema import CheckResult, CustomValidationRule, MutualExclusion, ParameterDefinition, ParameterSet, is_number
from ..shard import constants as C

TOKEN_LIMIT_WARNING = 4000
DEPRECATED_MODELS = frozenset({"text-davinci-003", "text-curie-001"})


def _check_token_limit(value: Any, definition: ParameterDefinition, params: ParameterSet) -> CheckResult:
    if definition.key in C.TOKEN_LIMIT_KEYS and is_number(value) and value > TOKEN_LIMIT_WARNING:
        return CheckResult.fail("Very high token limits may result in expensive API calls")
    return CheckResult.ok()


def _check_model_availability(value: Any, definition: ParameterDefinition, params: ParameterSet) -> CheckResult:
    if definition.key == "model" and value in DEPRECATED_MODELS:
        return CheckResult.fail(f"Model {value} is deprecated and may not be available")
    return CheckResult.ok()


COMMON_RULES: tuple[CustomValidationRule, ...] = (
    CustomValidationRule(
        name="Token Limit Check",
        description="Flags token limits that are likely to be expensive",
        check=_check_token_limit,
    ),
    CustomValidationRule(
        name="Model Availability",
        description="Rejects models that have been retired",
        check=_check_model_availability,
    ),
)

COMMON_EXCLUSIONS: tuple[MutualExclusion, ...] = (
    MutualExclusion(
        parameters=frozenset({"maxTokens", "maxOutputTokens"}),
        message="Cannot specify both maxTokens and maxOutputTokens",
    ),
)

__all__ = ["COMMON_RULES", "COMMON_EXCLUSIONS", "DEPRECATED_MODELS", "TOKEN_LIMIT_WARNING"]
