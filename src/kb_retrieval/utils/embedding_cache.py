"""In-memory LRU cache for embedding vectors.

Shared by every concurrent search in the process. Keys are the exact
(already lower-cased) texts sent to the embedding provider.
"""

from collections import OrderedDict
from threading import Lock


class EmbeddingCache:
    """Thread-safe LRU cache mapping text to its embedding vector.

    A ``max_size`` of 0 disables eviction.
    """

    def __init__(self, max_size: int = 10_000) -> None:
        if max_size < 0:
            raise ValueError("max_size must be >= 0")
        self.max_size = max_size
        self._cache: OrderedDict[str, list[float]] = OrderedDict()
        self._lock = Lock()
        self._hits = 0
        self._misses = 0

    def get(self, text: str) -> list[float] | None:
        """Get the cached vector for a text, or None."""
        with self._lock:
            vector = self._cache.get(text)
            if vector is None:
                self._misses += 1
                return None

            self._cache.move_to_end(text)
            self._hits += 1
            return vector

    def set(self, text: str, vector: list[float]) -> None:
        """Cache a vector. Empty vectors are ignored."""
        if not vector:
            return

        with self._lock:
            if text in self._cache:
                self._cache.move_to_end(text)
            self._cache[text] = vector

            if self.max_size:
                while len(self._cache) > self.max_size:
                    self._cache.popitem(last=False)

    def clear(self) -> None:
        """Drop every cached vector."""
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> dict:
        """Return cache statistics."""
        with self._lock:
            return {
                "size": len(self._cache),
                "max_size": self.max_size,
                "hits": self._hits,
                "misses": self._misses,
            }

    def __contains__(self, text: object) -> bool:
        with self._lock:
            return text in self._cache

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
