"""
LayerLab — Compiled Program Cache
Optional LRU cache of compiled programs keyed by (preset name, intensity).

compile() itself never caches. Callers that re-render the same slider
positions (preview grids, scrubbing) create and own a CompiledCache and
decide when to evict.
"""

import threading

from core.compiler import clamp_intensity, compile as compile_preset


class CompiledCache:
    """Thread-safe LRU of compiled operation tuples."""

    def __init__(self, maxsize: int = 128):
        if maxsize < 1:
            raise ValueError(f"maxsize must be >= 1, got {maxsize}")
        self.maxsize = maxsize
        self.hits = 0
        self.misses = 0
        self._entries = {}
        self._access_order = []  # LRU tracking: most recent at end
        self._lock = threading.Lock()

    @staticmethod
    def _key(name: str, intensity) -> tuple:
        return (name, clamp_intensity(intensity))

    def get(self, name: str, intensity=100) -> tuple:
        """Return the compiled program, compiling and storing it on a miss."""
        key = self._key(name, intensity)
        with self._lock:
            if key in self._entries:
                self.hits += 1
                self._access_order.remove(key)
                self._access_order.append(key)
                return self._entries[key]

            self.misses += 1
            program = compile_preset(name, key[1])

            while len(self._entries) >= self.maxsize and self._access_order:
                evict_key = self._access_order.pop(0)
                self._entries.pop(evict_key, None)

            self._entries[key] = program
            self._access_order.append(key)
            return program

    def evict(self, name: str | None = None) -> int:
        """Drop entries for one preset (or all entries). Returns how many were dropped."""
        with self._lock:
            if name is None:
                dropped = len(self._entries)
                self._entries.clear()
                self._access_order.clear()
                return dropped
            keys = [k for k in self._entries if k[0] == name]
            for k in keys:
                del self._entries[k]
                self._access_order.remove(k)
            return len(keys)

    def clear(self) -> None:
        """Drop every entry and reset the hit/miss counters."""
        with self._lock:
            self._entries.clear()
            self._access_order.clear()
            self.hits = 0
            self.misses = 0

    def __contains__(self, key) -> bool:
        name, intensity = key
        with self._lock:
            return self._key(name, intensity) in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
