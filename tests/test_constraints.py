from __future__ import annotations

import pytest

from param_engine.core.constraints import ConstraintValidator
from param_engine.schema import (
    CheckResult,
    CustomValidationRule,
    Dependency,
    MutualExclusion,
    ParameterDefinition,
)
from param_engine.shard.enums import ParameterType

N = ParameterDefinition(key="n", type=ParameterType.NUMBER, min=1, max=4)
MODEL = ParameterDefinition(key="model", type=ParameterType.ENUMERATION, options=("basic", "pro"))
STYLE = ParameterDefinition(key="style", type=ParameterType.ENUMERATION, options=("vivid", "natural"))

STYLE_NEEDS_PRO = Dependency(
    parameter="style",
    depends_on="model",
    condition=lambda style, model: model == "pro" or style is None,
    message="style requires pro model",
)


@pytest.fixture
def validator() -> ConstraintValidator:
    return ConstraintValidator()


def test_mutual_exclusion_yields_one_violation(validator):
    validator.add_mutual_exclusion("acme", MutualExclusion(parameters=frozenset({"n", "batchId"}), message="n and batchId are exclusive"))

    report = validator.evaluate("acme", {"n": 2, "batchId": "x"}, [N])

    assert not report.valid
    assert report.violations == ["n and batchId are exclusive"]
    assert report.exclusion_violations == ["n and batchId are exclusive"]


def test_mutual_exclusion_ignores_absent_values(validator):
    validator.add_mutual_exclusion("acme", MutualExclusion(parameters=frozenset({"a", "b", "c"}), message="pick one"))

    assert validator.check_mutual_exclusions("acme", {"a": 1, "b": None}) == []
    assert validator.check_mutual_exclusions("acme", {"a": 1, "b": 2, "c": 3}) == ["pick one"]


def test_mutual_exclusion_needs_two_members():
    with pytest.raises(ValueError):
        MutualExclusion(parameters=frozenset({"a"}), message="x")


def test_dependency_violation_and_success(validator):
    validator.add_dependency("acme", STYLE_NEEDS_PRO)

    bad = validator.evaluate("acme", {"model": "basic", "style": "vivid"}, [MODEL, STYLE])
    good = validator.evaluate("acme", {"model": "pro", "style": "vivid"}, [MODEL, STYLE])

    assert bad.violations == ["style requires pro model"]
    assert bad.dependency_violations == ["style requires pro model"]
    assert good.valid


def test_dependency_skipped_when_parameter_absent(validator):
    validator.add_dependency("acme", STYLE_NEEDS_PRO)
    assert validator.check_dependencies("acme", {"model": "basic"}) == []


def test_dependency_receives_none_for_absent_target(validator):
    seen = []

    def condition(value, other):
        seen.append(other)
        return True

    validator.add_dependency("acme", Dependency(parameter="style", depends_on="model", condition=condition, message="m"))
    validator.check_dependencies("acme", {"style": "vivid"})
    assert seen == [None]


def test_custom_rule_runs_per_defined_parameter(validator):
    calls = []

    def check(value, definition, params):
        calls.append(definition.key)
        if definition.key == "n" and params.get("model") == "pro" and value != 1:
            return CheckResult.fail("pro renders one at a time")
        return CheckResult.ok()

    validator.add_custom_rule("acme", CustomValidationRule(name="Pro batch", check=check))
    report = validator.evaluate("acme", {"model": "pro", "n": 3}, [MODEL, STYLE, N])

    assert calls == ["model", "n"]
    assert report.custom_rule_violations == ["Pro batch: pro renders one at a time"]


def test_custom_rule_without_message_still_reported(validator):
    validator.add_custom_rule(
        "acme",
        CustomValidationRule(name="Never", description="always fails", check=lambda v, d, p: CheckResult(valid=False)),
    )
    assert validator.check_custom_rules("acme", {"n": 1}, [N]) == ["Never: always fails"]


def test_faulty_rule_propagates(validator):
    def broken(value, definition, params):
        raise RuntimeError("boom")

    validator.add_custom_rule("acme", CustomValidationRule(name="Broken", check=broken))
    with pytest.raises(RuntimeError):
        validator.evaluate("acme", {"n": 1}, [N])


def test_violations_are_ordered_by_phase(validator):
    validator.add_custom_rule("acme", CustomValidationRule(name="Rule", check=lambda v, d, p: CheckResult.fail("rule")))
    validator.add_mutual_exclusion("acme", MutualExclusion(parameters=frozenset({"model", "style"}), message="exclusion"))
    validator.add_dependency("acme", STYLE_NEEDS_PRO)

    report = validator.evaluate("acme", {"model": "basic", "style": "vivid"}, [MODEL])

    assert report.violations == ["style requires pro model", "exclusion", "Rule: rule"]


def test_phases_can_be_disabled(validator):
    validator.add_dependency("acme", STYLE_NEEDS_PRO)
    report = validator.evaluate("acme", {"model": "basic", "style": "vivid"}, [], check_dependencies=False)
    assert report.valid


def test_rules_are_scoped_by_provider(validator):
    validator.add_dependency("acme", STYLE_NEEDS_PRO)
    assert validator.evaluate("other", {"model": "basic", "style": "vivid"}, []).valid

    validator.clear("acme")
    assert validator.dependencies("acme") == ()
