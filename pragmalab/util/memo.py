"""Lazily computed, cached key → value map."""

from __future__ import annotations

import threading
from collections.abc import Callable, Hashable, Iterable, Iterator
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class MemoizingMap(Generic[K, V]):
    """Computes ``value_func(key)`` on first access and caches the result.

    The key set is fixed at construction; asking for any other key raises
    ``KeyError``. The cache is unbounded and nothing is ever evicted, so
    memory grows with the number of distinct keys requested over the
    map's lifetime. A reentrant lock guards the cache so one map may be
    shared by threads and ``value_func`` may itself read other keys of the
    same map; ``value_func`` runs at most once per key.
    """

    def __init__(self, keys: Iterable[K], value_func: Callable[[K], V]):
        self.keys: tuple[K, ...] = tuple(keys)
        self._key_set = frozenset(self.keys)
        self._value_func = value_func
        self._cache: dict[K, V] = {}
        self._lock = threading.RLock()

    def get_or_compute(self, key: K) -> V:
        """Return the cached value for ``key``, computing it if needed."""
        if key not in self._key_set:
            raise KeyError(key)
        with self._lock:
            if key not in self._cache:
                self._cache[key] = self._value_func(key)
            return self._cache[key]

    def __getitem__(self, key: K) -> V:
        return self.get_or_compute(key)

    def __contains__(self, key: object) -> bool:
        return key in self._key_set

    def __iter__(self) -> Iterator[K]:
        return iter(self.keys)

    def __len__(self) -> int:
        return len(self.keys)

    def is_computed(self, key: K) -> bool:
        """Whether the value for ``key`` has already been computed."""
        with self._lock:
            return key in self._cache

    @property
    def cached_count(self) -> int:
        """Number of values computed so far."""
        with self._lock:
            return len(self._cache)
