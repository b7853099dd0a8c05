from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from types import MappingProxyType
from typing import Generic, TypeVar

V = TypeVar("V")


class ProviderTable(Generic[V]):
    """Copy-on-write mapping from provider id to an immutable value.

    Readers use the current snapshot without locking. Writers serialise on a
    lock, build a new mapping and swap the reference, so a reader always sees
    either the old or the new state and never a partial update. Values stored
    here must themselves be immutable (tuples, frozen models, mapping proxies).
    """

    def __init__(self, empty: V) -> None:
        self._empty = empty
        self._lock = threading.RLock()
        self._snapshot: MappingProxyType[str, V] = MappingProxyType({})

    # ------------------------------------------------------------------
    # Readers
    # ------------------------------------------------------------------
    def get(self, provider: str) -> V:
        return self._snapshot.get(provider, self._empty)

    def __contains__(self, provider: object) -> bool:
        return provider in self._snapshot

    def __iter__(self) -> Iterator[str]:
        return iter(self._snapshot)

    def __len__(self) -> int:
        return len(self._snapshot)

    def providers(self) -> frozenset[str]:
        return frozenset(self._snapshot)

    def snapshot(self) -> MappingProxyType[str, V]:
        """Return the current immutable view of the whole table."""
        return self._snapshot

    # ------------------------------------------------------------------
    # Writers
    # ------------------------------------------------------------------
    def set(self, provider: str, value: V) -> None:
        with self._lock:
            staged = dict(self._snapshot)
            staged[provider] = value
            self._snapshot = MappingProxyType(staged)

    def pop(self, provider: str) -> bool:
        with self._lock:
            if provider not in self._snapshot:
                return False
            staged = dict(self._snapshot)
            del staged[provider]
            self._snapshot = MappingProxyType(staged)
            return True

    def update(self, provider: str, fn: Callable[[V], V]) -> V:
        """Replace the provider's value with ``fn(current)`` atomically.

        ``fn`` runs under the write lock; if it raises, the table is left
        untouched and the exception propagates.
        """
        with self._lock:
            new_value = fn(self.get(provider))
            staged = dict(self._snapshot)
            staged[provider] = new_value
            self._snapshot = MappingProxyType(staged)
            return new_value

    def clear(self) -> None:
        with self._lock:
            self._snapshot = MappingProxyType({})


__all__ = ["ProviderTable"]
