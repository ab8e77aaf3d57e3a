from dataclasses import dataclass


@dataclass
class SearchMetrics:
    """Track outcomes of knowledge-base searches."""

    total_searches: int = 0
    lexical_wins: int = 0
    semantic_wins: int = 0
    empty_results: int = 0
    failures: int = 0
    semantic_fallbacks: int = 0
    total_lookup_time_ms: float = 0.0

    @property
    def hit_rate(self) -> float:
        """Share of searches that returned at least one match."""
        if self.total_searches == 0:
            return 0.0
        return (self.lexical_wins + self.semantic_wins) / self.total_searches

    @property
    def avg_lookup_time_ms(self) -> float:
        """Calculate average lookup time."""
        if self.total_searches == 0:
            return 0.0
        return self.total_lookup_time_ms / self.total_searches

    def record(self, source: str | None, lookup_time_ms: float, fallback: bool = False) -> None:
        """Record a completed search.

        Args:
            source: Source of the winning list ("lexical"/"semantic"), or None if empty
            lookup_time_ms: Duration of the search
            fallback: Whether the semantic matcher was consulted
        """
        self.total_searches += 1
        self.total_lookup_time_ms += lookup_time_ms
        if fallback:
            self.semantic_fallbacks += 1
        if source == "semantic":
            self.semantic_wins += 1
        elif source == "lexical":
            self.lexical_wins += 1
        else:
            self.empty_results += 1

    def record_failure(self, lookup_time_ms: float) -> None:
        """Record a search that failed internally and returned nothing."""
        self.total_searches += 1
        self.failures += 1
        self.empty_results += 1
        self.total_lookup_time_ms += lookup_time_ms

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary."""
        return {
            "total_searches": self.total_searches,
            "lexical_wins": self.lexical_wins,
            "semantic_wins": self.semantic_wins,
            "semantic_fallbacks": self.semantic_fallbacks,
            "empty_results": self.empty_results,
            "failures": self.failures,
            "hit_rate": self.hit_rate,
            "avg_lookup_time_ms": self.avg_lookup_time_ms,
        }
