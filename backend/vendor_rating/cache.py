"""
Thread-safe caching utilities for the rating engine.

Ranking runs memoise category peer lists in a named TTLCache that
lives only for the duration of the run. Weighted ratings are never cached.
"""
import threading

from cachetools import TTLCache


class AppCache:
    """Application-wide cache registry. Thread-safe with size and TTL bounds."""

    def __init__(self):
        self._lock = threading.Lock()
        self._caches: dict[str, TTLCache] = {}

    def get_cache(self, name: str, maxsize: int = 128, ttl: int = 600) -> TTLCache:
        """Get or create a named TTLCache. Thread-safe."""
        with self._lock:
            if name not in self._caches:
                self._caches[name] = TTLCache(maxsize=maxsize, ttl=ttl)
            return self._caches[name]

    def get_or_load(self, cache_name: str, key: str, loader, maxsize: int = 128, ttl: int = 600):
        """Return a cached value, calling loader() to fill it on a miss."""
        cache = self.get_cache(cache_name, maxsize=maxsize, ttl=ttl)
        with self._lock:
            try:
                return cache[key]
            except KeyError:
                pass
        value = loader()
        with self._lock:
            cache[key] = value
        return value

    def drop(self, cache_name: str):
        """Remove a named cache from the registry."""
        with self._lock:
            self._caches.pop(cache_name, None)


# Global cache instance
app_cache = AppCache()
