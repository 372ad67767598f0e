"""Computation cache with memoization.

Two instances are used by the calculation engine:
    - factor cache: raw demagnetization factors, keyed by (geometry, dims), no expiry
    - result cache: composed calculation results, keyed by (geometry, dims,
      material), expiring after CACHE_TTL_S

Both evict the oldest-inserted entry once they exceed their capacity.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Generic, TypeVar

from .constants import MAX_CACHE_SIZE, MODEL_VERSION
from .types import GeometryDimensions, MaterialProperties

V = TypeVar("V")


@dataclass(frozen=True)
class FactorKey:
    """Immutable cache key for raw factor results."""

    geometry: str
    dims: tuple[float, ...]
    version: str = MODEL_VERSION


@dataclass(frozen=True)
class ResultKey:
    """Immutable cache key for composed calculation results."""

    geometry: str
    dims: tuple[float, ...]
    ms: float
    ku: float
    a: float
    t: float
    version: str = MODEL_VERSION


def make_factor_key(dimensions: GeometryDimensions) -> FactorKey:
    return FactorKey(geometry=dimensions.kind, dims=dimensions.values())


def make_result_key(dimensions: GeometryDimensions, material: MaterialProperties) -> ResultKey:
    """Create cache key from inputs.

    Args:
        dimensions: Geometry variant.
        material: Material constants.

    Returns:
        ResultKey for lookup.
    """
    return ResultKey(
        geometry=dimensions.kind,
        dims=dimensions.values(),
        ms=float(material.ms),
        ku=float(material.ku),
        a=float(material.a),
        t=float(material.t),
    )


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    value: V
    inserted_at: float


class ComputationCache(Generic[V]):
    """In-memory memoization cache with optional expiry.

    Eviction is by insertion order, not by recency of use. Expired entries are
    dropped lazily on read or by an explicit ``cleanup()``. All operations hold
    a per-instance lock, so ``clear()`` never interleaves with a read.
    """

    def __init__(
        self,
        max_size: int = MAX_CACHE_SIZE,
        ttl: float | None = None,
        clock: Callable[[], float] = time.monotonic,
        name: str = "cache",
    ) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {max_size}")
        if ttl is not None and ttl <= 0:
            raise ValueError(f"ttl must be positive or None, got {ttl}")
        self.name = name
        self._entries: dict[Hashable, CacheEntry[V]] = {}
        self._max_size = max_size
        self._ttl = ttl
        self._clock = clock
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def ttl(self) -> float | None:
        return self._ttl

    def _expired(self, entry: CacheEntry[V], now: float) -> bool:
        return self._ttl is not None and now - entry.inserted_at >= self._ttl

    def get(self, key: Hashable) -> V | None:
        """Retrieve cached value if present and not expired.

        Args:
            key: Cache key.

        Returns:
            Cached value or None if not found.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self._expired(entry, self._clock()):
                del self._entries[key]
                entry = None
            if entry is None:
                self._misses += 1
                return None
            self._hits += 1
            return entry.value

    def set(self, key: Hashable, value: V) -> None:
        """Store value in cache.

        Re-setting an existing key refreshes its value and timestamp but keeps
        its place in the eviction order.
        """
        with self._lock:
            self._entries[key] = CacheEntry(value=value, inserted_at=self._clock())
            while len(self._entries) > self._max_size:
                oldest = next(iter(self._entries))
                del self._entries[oldest]
                self._evictions += 1

    def clear(self) -> None:
        """Clear all cached entries."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
            self._evictions = 0

    def cleanup(self) -> int:
        """Remove every expired entry; return how many were removed."""
        with self._lock:
            if self._ttl is None:
                return 0
            now = self._clock()
            stale = [k for k, entry in self._entries.items() if self._expired(entry, now)]
            for k in stale:
                del self._entries[k]
            return len(stale)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and not self._expired(entry, self._clock())

    @property
    def stats(self) -> dict[str, int]:
        """Return cache statistics."""
        with self._lock:
            return {
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
                "size": len(self._entries),
            }


def memoize(cache: ComputationCache[V], key: Hashable, compute: Callable[[], V]) -> V:
    """Return the cached value for ``key``, computing and storing it on a miss."""
    cached = cache.get(key)
    if cached is not None:
        return cached
    value = compute()
    cache.set(key, value)
    return value
