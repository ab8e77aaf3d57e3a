"""Embedding-similarity matching of knowledge-base entries.

Used as a fallback when keyword scoring is weak. Every embedding failure
degrades to an empty vector (similarity 0) instead of raising, so a single
bad item never aborts the batch.
"""

import asyncio
import math
from collections.abc import Sequence

import numpy as np

from kb_retrieval.config import settings
from kb_retrieval.entities import SEMANTIC, KnowledgeEntryEntity, MatchCandidateEntity
from kb_retrieval.protocols import EmbeddingProvider
from kb_retrieval.utils import EmbeddingCache, get_logger

logger = get_logger(__name__)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity of two vectors.

    Returns 0.0 when either vector is empty, the lengths differ, either
    norm is zero, or the result is not finite (NaN or inf components).
    """
    if len(a) == 0 or len(b) == 0 or len(a) != len(b):
        return 0.0

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    with np.errstate(invalid="ignore", over="ignore"):
        norm_a = np.linalg.norm(va)
        norm_b = np.linalg.norm(vb)
        if norm_a == 0 or norm_b == 0:
            return 0.0
        similarity = np.dot(va, vb) / (norm_a * norm_b)

    if not np.isfinite(similarity):
        return 0.0

    return float(np.clip(similarity, -1.0, 1.0))


def similarity_to_score(similarity: float) -> int:
    """Convert a similarity to a 0-100 integer score, rounding halves up."""
    return int(math.floor(similarity * 100 + 0.5))


def entry_embedding_text(entry: KnowledgeEntryEntity) -> str:
    """Text embedded for an entry: question plus keywords, lower-cased."""
    return f"{entry.question or ''} {entry.keywords or ''}".lower()


class SemanticMatcher:
    """Ranks entries by cosine similarity between query and entry embeddings.

    Inert when the embedding provider is missing or not configured:
    ``match`` then returns an empty list without any network call.

    Example:
        ```python
        matcher = SemanticMatcher(
            embedding_provider=OpenAIEmbeddingProvider.create(),
            cache=EmbeddingCache(max_size=10_000),
        )
        matches = await matcher.match("can i arrive early", entries, threshold=0.7)
        ```
    """

    def __init__(
        self,
        embedding_provider: EmbeddingProvider | None,
        cache: EmbeddingCache | None = None,
        timeout: float | None = None,
        threshold: float | None = None,
    ) -> None:
        """Initialize the matcher.

        Args:
            embedding_provider: Embedding service, or None to disable matching.
            cache: Shared embedding cache. Defaults to a new one sized from settings.
            timeout: Per-embedding timeout in seconds. Defaults to settings.
            threshold: Default similarity threshold (0-1). Defaults to settings.
        """
        self._embeddings = embedding_provider
        self._cache = cache if cache is not None else EmbeddingCache(settings.embedding_cache_size)
        self._timeout = timeout or settings.embedding_timeout
        self._threshold = (
            settings.semantic_similarity_threshold if threshold is None else threshold
        )

    @property
    def is_enabled(self) -> bool:
        """True when a configured embedding provider is present."""
        return self._embeddings is not None and self._embeddings.is_configured

    @property
    def cache(self) -> EmbeddingCache:
        """Get the embedding cache."""
        return self._cache

    @property
    def threshold(self) -> float:
        """Get the default similarity threshold."""
        return self._threshold

    async def embed(self, text: str) -> list[float]:
        """Embed a text, going through the cache.

        Args:
            text: Exact text to embed (already normalized by the caller)

        Returns:
            The vector, or an empty list when unavailable
        """
        cached = self._cache.get(text)
        if cached is not None:
            return cached

        if not self.is_enabled:
            return []

        try:
            vector = await asyncio.wait_for(self._embeddings.encode(text), self._timeout)
        except asyncio.TimeoutError:
            logger.warning("embedding timed out", extra={"timeout": self._timeout})
            return []
        except Exception as e:
            logger.warning("embedding failed", extra={"error": str(e)})
            return []

        vector = list(vector or [])
        if not np.all(np.isfinite(np.asarray(vector, dtype=np.float64))):
            logger.warning("embedding rejected, non-finite values", extra={"dimensions": len(vector)})
            return []

        self._cache.set(text, vector)
        return vector

    async def match(
        self,
        query: str,
        candidates: Sequence[KnowledgeEntryEntity],
        threshold: float | None = None,
        limit: int = 3,
    ) -> list[MatchCandidateEntity]:
        """Rank candidates by semantic similarity to the query.

        Business logic:
        1. Embed the lower-cased query (empty vector -> no matches)
        2. Embed every candidate concurrently
        3. Score = cosine similarity x 100, rounded
        4. Keep scores >= threshold x 100, best first, up to limit

        Args:
            query: Raw guest question
            candidates: Entries to rank
            threshold: Minimum similarity (0-1). Defaults to the matcher's threshold.
            limit: Maximum number of matches to return

        Returns:
            Semantic matches, best first
        """
        if not self.is_enabled or not candidates or not query.strip():
            return []

        threshold = self._threshold if threshold is None else threshold

        query_vector = await self.embed(query.lower())
        if not query_vector:
            return []

        vectors = await asyncio.gather(
            *(self.embed(entry_embedding_text(entry)) for entry in candidates)
        )

        scored = []
        for entry, vector in zip(candidates, vectors):
            score = similarity_to_score(cosine_similarity(query_vector, vector)) if vector else 0
            if score >= threshold * 100:
                scored.append(
                    MatchCandidateEntity(
                        entry_id=entry.id,
                        question=entry.question,
                        answer=entry.answer,
                        category=entry.category or "",
                        score=score,
                        source=SEMANTIC,
                    )
                )

        scored.sort(key=lambda m: m.score, reverse=True)
        return scored[:limit]
