from .constraints import ConstraintValidator
from .defaults import ProviderDefaults
from .presets import PresetStore
from .schema_registry import SchemaRegistry, provider_key
from .service import ParameterService
from .snapshot import ProviderTable

__all__ = [
    "ConstraintValidator",
    "ParameterService",
    "PresetStore",
    "ProviderDefaults",
    "ProviderTable",
    "SchemaRegistry",
    "provider_key",
]
