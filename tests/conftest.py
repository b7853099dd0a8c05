from __future__ import annotations

import os
import sys

import pytest

# Add repository root to sys.path for `import param_engine.*` in tests
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from param_engine.core.service import ParameterService  # noqa: E402
from param_engine.providers import load_builtins  # noqa: E402
from param_engine.schema import ParameterDefinition  # noqa: E402
from param_engine.shard.enums import ParameterType  # noqa: E402


@pytest.fixture
def service() -> ParameterService:
    """An isolated, empty service."""
    return ParameterService()


@pytest.fixture
def builtin_service() -> ParameterService:
    """An isolated service seeded with the built-in catalogue."""
    svc = ParameterService()
    load_builtins(svc)
    return svc


@pytest.fixture
def acme_definitions() -> list[ParameterDefinition]:
    return [
        ParameterDefinition(key="mode", type=ParameterType.ENUMERATION, options=("fast", "slow"), default_value="fast"),
        ParameterDefinition(key="n", type=ParameterType.NUMBER, min=1, max=4),
        ParameterDefinition(key="temperature", type=ParameterType.NUMBER, min=0, max=2, default_value=0.7),
        ParameterDefinition(key="stream", type=ParameterType.BOOLEAN, default_value=False),
        ParameterDefinition(key="prefix", type=ParameterType.STRING, min=1, max=5),
    ]
