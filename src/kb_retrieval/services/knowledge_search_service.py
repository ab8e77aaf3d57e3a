"""Knowledge search service for core business logic.

This service orchestrates retrieval by coordinating the store (entries and
usage telemetry), the lexical matcher and the semantic fallback matcher.
"""

import time

from kb_retrieval.config import settings
from kb_retrieval.entities import MatchCandidateEntity
from kb_retrieval.metrics import SearchMetrics
from kb_retrieval.protocols import EmbeddingProvider, KnowledgeStore
from kb_retrieval.utils import EmbeddingCache, get_logger

from .context_builder import format_business_context
from .lexical_matcher import LexicalMatcher
from .semantic_matcher import SemanticMatcher

logger = get_logger(__name__)


class KnowledgeSearchService:
    """Finds the knowledge-base entries that best answer a guest question.

    Depends on PROTOCOLS, not concrete implementations:
    - KnowledgeStore: Redis, SQL, an in-memory fake, etc.
    - EmbeddingProvider (inside the SemanticMatcher): OpenAI, Ollama, local

    Search is a best-effort enrichment of the chat reply: it never raises,
    and any internal failure yields an empty list.

    Example:
        ```python
        service = KnowledgeSearchService.create(
            repository=RedisKnowledgeRepository.create(),
            embedding_provider=OpenAIEmbeddingProvider.create(),
        )
        matches = await service.search("hotel-42", "what time is check in", "en")
        ```
    """

    def __init__(
        self,
        repository: KnowledgeStore,
        lexical_matcher: LexicalMatcher | None = None,
        semantic_matcher: SemanticMatcher | None = None,
        similarity_threshold: float | None = None,
        confident_score: int | None = None,
        default_limit: int | None = None,
        context_max_entries: int | None = None,
        track_usage: bool = True,
    ) -> None:
        """Initialize the search service.

        Args:
            repository: Knowledge-base store (required).
            lexical_matcher: Keyword matcher. Defaults to one using settings' quality bar.
            semantic_matcher: Fallback matcher. None disables semantic matching.
            similarity_threshold: Semantic threshold (0-1). Defaults to settings.
            confident_score: Top score above which usage is recorded. Defaults to settings.
            default_limit: Result count when the caller gives none. Defaults to settings.
            context_max_entries: Cap for build_context. Defaults to settings.
            track_usage: Whether winning entries get their usage recorded.
        """
        self._repository = repository
        self._lexical = lexical_matcher or LexicalMatcher(settings.lexical_quality_bar)
        self._semantic = semantic_matcher
        self._threshold = (
            settings.semantic_similarity_threshold
            if similarity_threshold is None
            else similarity_threshold
        )
        self._confident_score = (
            settings.confident_match_score if confident_score is None else confident_score
        )
        self._default_limit = default_limit or settings.default_search_limit
        self._context_max_entries = context_max_entries or settings.context_max_entries
        self._track_usage = track_usage
        self._metrics = SearchMetrics()

    @classmethod
    def create(
        cls,
        repository: KnowledgeStore,
        embedding_provider: EmbeddingProvider | None = None,
        cache: EmbeddingCache | None = None,
        similarity_threshold: float | None = None,
        track_usage: bool = True,
    ) -> "KnowledgeSearchService":
        """Factory method wiring the matchers from settings.

        Args:
            repository: Knowledge-base store (required).
            embedding_provider: Embedding service. None means lexical-only search.
            cache: Shared embedding cache. Defaults to one sized from settings.
            similarity_threshold: Semantic threshold (0-1). If None, uses settings.
            track_usage: Whether winning entries get their usage recorded.

        Returns:
            Configured KnowledgeSearchService
        """
        semantic = None
        if embedding_provider is not None:
            semantic = SemanticMatcher(
                embedding_provider=embedding_provider,
                cache=cache,
                threshold=similarity_threshold,
            )
        return cls(
            repository=repository,
            lexical_matcher=LexicalMatcher(settings.lexical_quality_bar),
            semantic_matcher=semantic,
            similarity_threshold=similarity_threshold,
            track_usage=track_usage,
        )

    async def search(
        self,
        tenant_id: str,
        query: str,
        language: str = "en",
        limit: int | None = None,
    ) -> list[MatchCandidateEntity]:
        """Search a tenant's knowledge base for a guest question.

        Business logic:
        1. Fetch the tenant's active entries in the query language
        2. Score them lexically
        3. If the lexical top score is weak, consult the semantic matcher
        4. Keep whichever list has the higher top score (winner takes all)
        5. Record usage on the winning entry if it is a confident match

        Args:
            tenant_id: The tenant whose knowledge base is searched
            query: Raw guest question
            language: Language code of the query
            limit: Maximum number of matches. Defaults to the service default.

        Returns:
            Matches best first; empty on no match or on any internal error
        """
        limit = limit or self._default_limit
        start_time = time.time()

        try:
            entries = self._repository.fetch_active_entries(tenant_id, language)
            if not entries:
                self._metrics.record(None, (time.time() - start_time) * 1000)
                return []

            matches = self._lexical.match(entries, query, limit)

            fallback = False
            if self._lexical.is_insufficient(matches) and self.semantic_enabled:
                fallback = True
                semantic = await self._semantic.match(query, entries, self._threshold, limit)
                if semantic and (not matches or semantic[0].score > matches[0].score):
                    matches = semantic

            if self._track_usage and matches and matches[0].score > self._confident_score:
                self._record_usage(matches[0].entry_id)

            self._metrics.record(
                matches[0].source if matches else None,
                (time.time() - start_time) * 1000,
                fallback=fallback,
            )
            return matches

        except Exception:
            logger.exception(
                "knowledge base search failed",
                extra={"tenant_id": tenant_id, "language": language},
            )
            self._metrics.record_failure((time.time() - start_time) * 1000)
            return []

    def _record_usage(self, entry_id: str) -> None:
        """Best-effort usage telemetry; failures are logged, never raised."""
        try:
            self._repository.increment_usage(entry_id)
        except Exception as e:
            logger.warning("usage update failed", extra={"entry_id": entry_id, "error": str(e)})

    async def build_context(self, tenant_id: str, language: str = "en") -> str:
        """Format a tenant's whole knowledge base as prompt context.

        Args:
            tenant_id: The tenant
            language: Language code

        Returns:
            The context block, or "" when empty or on error
        """
        try:
            entries = self._repository.fetch_active_entries(tenant_id, language)
            return format_business_context(entries, self._context_max_entries)
        except Exception:
            logger.exception(
                "knowledge context build failed",
                extra={"tenant_id": tenant_id, "language": language},
            )
            return ""

    def get_stats(self) -> dict:
        """Get search statistics.

        Returns:
            Dictionary with store, search and embedding-cache statistics
        """
        stats = {
            "store": self._repository.get_stats(),
            "search": self._metrics.to_dict(),
            "semantic_enabled": self.semantic_enabled,
            "similarity_threshold": self._threshold,
            "quality_bar": self._lexical.quality_bar,
        }
        if self._semantic is not None:
            stats["embedding_cache"] = self._semantic.cache.stats()
        return stats

    def is_healthy(self) -> bool:
        """Check if the knowledge store is reachable."""
        return self._repository.health_check()

    @property
    def semantic_enabled(self) -> bool:
        """True when the semantic fallback can run."""
        return self._semantic is not None and self._semantic.is_enabled

    @property
    def metrics(self) -> SearchMetrics:
        """Get search metrics."""
        return self._metrics

    @property
    def repository(self) -> KnowledgeStore:
        """Get the underlying repository (for testing)."""
        return self._repository

    @property
    def similarity_threshold(self) -> float:
        """Get the semantic similarity threshold."""
        return self._threshold
