"""Project constants for parameter normalization and validation.

This module centralizes error codes, identifier formats and advisory
thresholds shared across the core components and the provider catalogue.
Provider-specific schemas and rules belong in ``param_engine.providers``.
"""

from __future__ import annotations

from typing import Final

# ------------------------------ Identifiers -------------------------------- #

# Separator used when composing a provider id scoped by capability,
# e.g. ``"openai:image"``.
PROVIDER_SCOPE_SEPARATOR: Final[str] = ":"

# Prefix of identifiers generated for ad-hoc presets.
CUSTOM_PRESET_PREFIX: Final[str] = "custom_"

# Number of random hex characters appended to generated preset ids.
CUSTOM_PRESET_SUFFIX_LEN: Final[int] = 9

# ------------------------------ Literal parsing ---------------------------- #

BOOLEAN_TRUE_LITERAL: Final[str] = "true"
BOOLEAN_FALSE_LITERAL: Final[str] = "false"

# --------------------------- Advisory thresholds --------------------------- #

# Used by advisory suggestions only; never by hard validation.
LOW_TEMPERATURE_HINT: Final[float] = 0.3
HIGH_TEMPERATURE_HINT: Final[float] = 1.2
HIGH_TOKEN_LIMIT_HINT: Final[int] = 2000

TOKEN_LIMIT_KEYS: Final[frozenset[str]] = frozenset({"maxTokens", "maxOutputTokens"})

# ------------------------------- Error codes ------------------------------- #

ERROR_CODE_VALIDATION: Final[str] = "validation_error"
ERROR_CODE_UNKNOWN_PRESET: Final[str] = "unknown_preset"
ERROR_CODE_UNKNOWN_PROVIDER: Final[str] = "unknown_provider"
ERROR_CODE_INTERNAL: Final[str] = "internal_error"
