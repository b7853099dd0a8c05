from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .shard.enums import Capability, ChangeKind, ParameterType

# Closed set of value types a parameter can hold once raw input is converted.
ParameterValue: TypeAlias = bool | int | float | str

# A parameter map as supplied by callers. Values may still be raw text (before
# conversion) or composite objects for keys the schema does not describe.
ParameterSet: TypeAlias = dict[str, Any]


def is_number(value: Any) -> bool:
    """True for int/float values; ``bool`` is deliberately excluded."""
    return isinstance(value, int | float) and not isinstance(value, bool)


# ------------------------------ Error handling ------------------------------ #


class Error(BaseModel):
    """Normalized error provided on tool failures.

    Use short, actionable messages and stable error codes suitable for client
    handling.
    """

    code: str = Field(description="Stable machine-readable error code, e.g. 'validation_error'.")
    message: str = Field(description="Human-readable error message with remediation tips when possible.")
    details: dict[str, Any] | None = Field(
        default=None,
        description="Optional debug details; treat as best-effort and unstable for parsing.",
    )


# ---------------------------- Parameter schema ------------------------------ #


class ParameterDefinition(BaseModel):
    """One tunable knob of a provider/capability pair.

    ``min``/``max`` are overloaded by type: numeric bounds for ``number``,
    character-length bounds for ``string``. ``options`` is only meaningful for
    ``enumeration``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    key: str = Field(min_length=1, description="Unique name within a provider's schema.")
    type: ParameterType = Field(description="Declared value type.")
    default_value: ParameterValue | None = Field(default=None, alias="defaultValue", description="Optional type-matching default.")
    min: int | float | None = Field(default=None, description="Lower numeric bound, or minimum length for strings.")
    max: int | float | None = Field(default=None, description="Upper numeric bound, or maximum length for strings.")
    options: tuple[ParameterValue, ...] | None = Field(default=None, description="Closed set of legal values (enumeration only).")
    description: str = Field(default="", description="Human-readable documentation; not used by validation.")

    @model_validator(mode="after")
    def _check_consistency(self) -> ParameterDefinition:
        if self.type == ParameterType.ENUMERATION:
            if not self.options:
                raise ValueError(f"enumeration parameter '{self.key}' requires non-empty options")
            default = self.default_value
            if default is not None and not any(o == default and isinstance(o, bool) == isinstance(default, bool) for o in self.options):
                raise ValueError(f"default for '{self.key}' must be one of: {', '.join(str(o) for o in self.options)}")
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min must not exceed max for '{self.key}'")
        if self.default_value is not None:
            if self.type == ParameterType.NUMBER and not is_number(self.default_value):
                raise ValueError(f"default for number parameter '{self.key}' must be numeric")
            if self.type == ParameterType.BOOLEAN and not isinstance(self.default_value, bool):
                raise ValueError(f"default for boolean parameter '{self.key}' must be a boolean")
            if self.type == ParameterType.STRING and not isinstance(self.default_value, str):
                raise ValueError(f"default for string parameter '{self.key}' must be a string")
        return self

    @property
    def required(self) -> bool:
        """A definition without a default must be supplied by the caller to be set."""
        return self.default_value is None


class CheckResult(BaseModel):
    """Outcome of a single value check or custom rule evaluation."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    message: str | None = None

    @classmethod
    def ok(cls) -> CheckResult:
        return cls(valid=True)

    @classmethod
    def fail(cls, message: str) -> CheckResult:
        return cls(valid=False, message=message)


# --------------------------- Cross-parameter rules -------------------------- #

# condition(value_of_parameter, value_of_depends_on) -> bool; the second
# argument is None when the depended-on key is absent.
DependencyCondition: TypeAlias = Callable[[Any, Any], bool]

# check(value, definition, full_candidate_set) -> CheckResult
RuleCheck: TypeAlias = Callable[[Any, ParameterDefinition, ParameterSet], CheckResult]


class Dependency(BaseModel):
    """Makes one parameter's legality conditional on another parameter's value."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    parameter: str
    depends_on: str = Field(alias="dependsOn")
    condition: DependencyCondition
    message: str


class MutualExclusion(BaseModel):
    """At most one key of ``parameters`` may carry a defined value."""

    model_config = ConfigDict(frozen=True)

    parameters: frozenset[str] = Field(min_length=2)
    message: str


class CustomValidationRule(BaseModel):
    """Provider-scoped rule evaluated once per defined parameter.

    The check receives the complete candidate set so a single rule can express
    constraints that reference sibling keys (e.g. model-dependent legality).
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    check: RuleCheck


class ConstraintReport(BaseModel):
    """Result of the cross-parameter phase.

    ``violations`` is the concatenation, in this order, of dependency,
    mutual-exclusion and custom-rule violations.
    """

    valid: bool
    violations: list[str] = Field(default_factory=list)
    dependency_violations: list[str] = Field(default_factory=list)
    exclusion_violations: list[str] = Field(default_factory=list)
    custom_rule_violations: list[str] = Field(default_factory=list)


# --------------------------------- Presets ---------------------------------- #


class ParameterPreset(BaseModel):
    """Named, tagged, reusable parameter bundle for one provider."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    name: str
    description: str = ""
    provider: str
    parameters: ParameterSet = Field(default_factory=dict)
    tags: frozenset[str] = Field(default_factory=frozenset)
    is_default: bool = Field(default=False, alias="isDefault")
    created_by: str | None = Field(default=None, alias="createdBy")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), alias="createdAt")
    capability: Capability | None = None


class PresetStats(BaseModel):
    total: int = 0
    default: int = 0
    custom: int = 0


# --------------------------------- Diffing ---------------------------------- #


class ChangedValue(BaseModel):
    key: str
    old_value: Any = None
    new_value: Any = None


class ParameterDiff(BaseModel):
    """Structural diff of two parameter sets, ``added`` relative to the first."""

    added: list[str] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list)
    changed: list[ChangedValue] = Field(default_factory=list)
    unchanged: list[str] = Field(default_factory=list)

    @property
    def equal(self) -> bool:
        return not self.added and not self.removed and not self.changed

    def kind_of(self, key: str) -> ChangeKind | None:
        """Return how ``key`` differs between the two sets, or None if it is in neither."""
        if key in self.added:
            return ChangeKind.ADDED
        if key in self.removed:
            return ChangeKind.REMOVED
        if any(c.key == key for c in self.changed):
            return ChangeKind.CHANGED
        if key in self.unchanged:
            return ChangeKind.UNCHANGED
        return None


# ------------------------------ Summaries ----------------------------------- #


class ParameterSummary(BaseModel):
    total: int = 0
    by_type: dict[str, int] = Field(default_factory=dict)
    required: int = 0
    optional: int = 0


class ParameterStats(BaseModel):
    total_providers: int = 0
    total_parameters: int = 0
    parameters_by_provider: dict[str, int] = Field(default_factory=dict)
    parameters_by_type: dict[str, int] = Field(default_factory=dict)
    presets_count: dict[str, int] = Field(default_factory=dict)


# ------------------------------ Pipeline result ----------------------------- #


class PreparedParameters(BaseModel):
    """Outbound result of the prepare pipeline.

    ``parameters`` is populated whenever the pipeline ran, including invalid
    results, so interactive callers can show what was evaluated. Hosts that
    treat violations as hard rejections should ignore it when ``valid`` is
    false.
    """

    valid: bool
    provider: str
    parameters: ParameterSet | None = None
    violations: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    constraints: ConstraintReport | None = None
    error: Error | None = None


# ------------------------------ Tool responses ------------------------------ #


class ParameterSchemaResponse(BaseModel):
    """Structured payload of the schema lookup tool."""

    provider: str
    definitions: list[ParameterDefinition] = Field(default_factory=list)
    summary: ParameterSummary = Field(default_factory=ParameterSummary)
    default_preset_id: str | None = None
    error: Error | None = None


class PresetListResponse(BaseModel):
    """Structured payload of the preset listing tool."""

    provider: str
    presets: list[ParameterPreset] = Field(default_factory=list)
    default_preset_id: str | None = None
    error: Error | None = None


__all__ = [
    "ParameterValue",
    "ParameterSet",
    "is_number",
    "Error",
    "ParameterDefinition",
    "CheckResult",
    "DependencyCondition",
    "RuleCheck",
    "Dependency",
    "MutualExclusion",
    "CustomValidationRule",
    "ConstraintReport",
    "ParameterPreset",
    "PresetStats",
    "ChangedValue",
    "ParameterDiff",
    "ParameterSummary",
    "ParameterStats",
    "PreparedParameters",
    "ParameterSchemaResponse",
    "PresetListResponse",
]
