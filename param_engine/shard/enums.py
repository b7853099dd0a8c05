from __future__ import annotations

from enum import StrEnum
from typing import Self


class ParameterType(StrEnum):
    """Declared value type of a parameter definition.

    ``ENUMERATION`` is a closed set of legal values. The legacy wire value
    ``"select"`` is accepted as an alias so schemas exported by older clients
    keep loading.
    """

    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    ENUMERATION = "enumeration"

    @classmethod
    def _missing_(cls, value: object) -> Self | None:
        if isinstance(value, str):
            v = value.strip().lower()
            if v == "select":
                return cls.ENUMERATION
            for member in cls:
                if member.value == v:
                    return member
        return None


class Capability(StrEnum):
    """Kind of generation a provider offers; schemas are scoped per provider + capability."""

    CHAT = "chat"
    IMAGE = "image"
    VIDEO = "video"

    @classmethod
    def from_str(cls, value: str | None) -> Self | None:
        if not value:
            return None
        v = value.strip().lower()
        try:
            return cls(v)  # type: ignore[arg-type]
        except ValueError:
            return None


class Provider(StrEnum):
    """Identifiers of the providers shipped in the built-in catalogue.

    The engine itself accepts any string as a provider id; these values only
    name the providers that ``param_engine.providers`` knows how to seed.
    """

    OPENAI = "openai"
    GEMINI = "gemini"


class ChangeKind(StrEnum):
    """Classification of a key when two parameter sets are compared."""

    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"
    UNCHANGED = "unchanged"


__all__ = ["ParameterType", "Capability", "Provider", "ChangeKind"]
