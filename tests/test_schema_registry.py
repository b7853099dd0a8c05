from __future__ import annotations

import pytest
from pydantic import ValidationError

from param_engine.core.schema_registry import SchemaRegistry, provider_key
from param_engine.exceptions import SchemaDefinitionError
from param_engine.schema import ParameterDefinition
from param_engine.shard.enums import Capability, ParameterType


def test_provider_key_scopes_by_capability():
    assert provider_key("openai", Capability.IMAGE) == "openai:image"
    assert provider_key("openai", "chat") == "openai:chat"
    assert provider_key("openai") == "openai"


def test_lookup_unknown_provider_is_empty():
    registry = SchemaRegistry()
    assert registry.lookup("nobody") == ()
    assert registry.find_definition("nobody", "x") is None
    assert not registry.supports_parameter("nobody", "x")


def test_register_replaces_previous_list(acme_definitions):
    registry = SchemaRegistry()
    registry.register("acme", acme_definitions)
    registry.register("acme", acme_definitions[:1])

    assert [d.key for d in registry.lookup("acme")] == ["mode"]
    assert registry.list_providers() == frozenset({"acme"})


def test_register_preserves_order(acme_definitions):
    registry = SchemaRegistry()
    registry.register("acme", acme_definitions)
    assert [d.key for d in registry.lookup("acme")] == ["mode", "n", "temperature", "stream", "prefix"]


def test_register_from_mappings_accepts_aliases():
    registry = SchemaRegistry()
    registry.register("acme", [{"key": "mode", "type": "select", "options": ["fast", "slow"], "defaultValue": "slow"}])

    definition = registry.find_definition("acme", "mode")
    assert definition is not None
    assert definition.type == ParameterType.ENUMERATION
    assert definition.default_value == "slow"


def test_register_invalid_mapping_raises_schema_error():
    registry = SchemaRegistry()
    with pytest.raises(SchemaDefinitionError) as exc:
        registry.register("acme", [{"key": "mode", "type": "enumeration", "options": []}])
    assert "acme" in str(exc.value)
    assert "mode" in str(exc.value)
    # Nothing is registered on failure
    assert registry.lookup("acme") == ()


def test_definition_invariants():
    with pytest.raises(ValidationError):
        ParameterDefinition(key="m", type=ParameterType.ENUMERATION, options=("a",), default_value="b")
    with pytest.raises(ValidationError):
        ParameterDefinition(key="t", type=ParameterType.NUMBER, min=2, max=1)
    with pytest.raises(ValidationError):
        ParameterDefinition(key="t", type=ParameterType.NUMBER, default_value="high")
    with pytest.raises(ValidationError):
        ParameterDefinition(key="b", type=ParameterType.BOOLEAN, default_value=1)


def test_summary_counts_types_and_required(acme_definitions):
    registry = SchemaRegistry()
    registry.register("acme", acme_definitions)
    summary = registry.summary("acme")

    assert summary.total == 5
    assert summary.by_type == {"enumeration": 1, "number": 2, "boolean": 1, "string": 1}
    assert summary.required == 2  # n and prefix carry no default
    assert summary.optional == 3


def test_suggestions_by_type(acme_definitions):
    registry = SchemaRegistry()
    registry.register("acme", acme_definitions)

    assert registry.suggestions("acme", "mode") == ["fast", "slow"]
    assert registry.suggestions("acme", "stream") == [True, False]
    assert registry.suggestions("acme", "temperature") == [0.7, 0, 2]
    assert registry.suggestions("acme", "n") == [1, 4]
    assert registry.suggestions("acme", "missing") == []


def test_unregister():
    registry = SchemaRegistry()
    registry.register("acme", [])
    assert registry.unregister("acme") is True
    assert registry.unregister("acme") is False
