"""
Evaluation utilities for knowledge-base search.

This module measures how often the search returns the right entry for a
set of labelled guest questions, and sweeps the semantic similarity
threshold to help tune it per deployment.
"""

import time
from dataclasses import dataclass

import numpy as np

from kb_retrieval.entities import SEMANTIC
from kb_retrieval.protocols import EmbeddingProvider, KnowledgeStore
from kb_retrieval.services import KnowledgeSearchService
from kb_retrieval.utils import EmbeddingCache


@dataclass
class EvalResult:
    """Result of one evaluation run."""

    threshold: float
    total_queries: int = 0
    true_positives: int = 0
    false_positives: int = 0
    true_negatives: int = 0
    false_negatives: int = 0
    semantic_wins: int = 0
    avg_lookup_time_ms: float = 0.0

    @property
    def hit_rate(self) -> float:
        """Share of queries whose top match was the expected entry."""
        if self.total_queries == 0:
            return 0.0
        return self.true_positives / self.total_queries

    @property
    def precision(self) -> float:
        """Calculate precision (TP / (TP + FP))."""
        denominator = self.true_positives + self.false_positives
        if denominator == 0:
            return 0.0
        return self.true_positives / denominator

    @property
    def recall(self) -> float:
        """Calculate recall (TP / (TP + FN))."""
        denominator = self.true_positives + self.false_negatives
        if denominator == 0:
            return 0.0
        return self.true_positives / denominator

    @property
    def f1_score(self) -> float:
        """Calculate F1 score (2 * precision * recall / (precision + recall))."""
        p = self.precision
        r = self.recall
        if p + r == 0:
            return 0.0
        return 2 * p * r / (p + r)

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary."""
        return {
            "threshold": self.threshold,
            "hit_rate": self.hit_rate,
            "precision": self.precision,
            "recall": self.recall,
            "f1_score": self.f1_score,
            "total_queries": self.total_queries,
            "semantic_wins": self.semantic_wins,
            "avg_lookup_time_ms": self.avg_lookup_time_ms,
        }


@dataclass
class QueryCase:
    """A guest question and the entry question it should retrieve.

    ``expected_question`` is None when no entry should match.
    """

    query: str
    expected_question: str | None


class SearchEvaluator:
    """Evaluator for knowledge-base search quality.

    Usage is not recorded while evaluating, so running it against a live
    store leaves the telemetry untouched.
    """

    def __init__(
        self,
        repository: KnowledgeStore,
        embedding_provider: EmbeddingProvider | None = None,
        cache: EmbeddingCache | None = None,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            repository: Store holding the tenant under test.
            embedding_provider: Embedding service, None for lexical-only runs.
            cache: Embedding cache shared across runs so a sweep embeds each text once.
        """
        self.repository = repository
        self.embedding_provider = embedding_provider
        self.cache = cache if cache is not None else EmbeddingCache(max_size=0)
        self.results: list[EvalResult] = []

    def _service(self, threshold: float) -> KnowledgeSearchService:
        return KnowledgeSearchService.create(
            repository=self.repository,
            embedding_provider=self.embedding_provider,
            cache=self.cache,
            similarity_threshold=threshold,
            track_usage=False,
        )

    async def evaluate(
        self,
        tenant_id: str,
        cases: list[QueryCase],
        threshold: float,
        language: str = "en",
    ) -> EvalResult:
        """
        Evaluate top-1 search accuracy at one similarity threshold.

        Args:
            tenant_id: Tenant whose knowledge base is searched.
            cases: Labelled queries.
            threshold: Semantic similarity threshold (0-1).
            language: Language code of the queries.

        Returns:
            EvalResult for this threshold.
        """
        service = self._service(threshold)
        result = EvalResult(threshold=threshold)
        total_lookup_time = 0.0

        for case in cases:
            start_time = time.time()
            matches = await service.search(tenant_id, case.query, language, limit=1)
            total_lookup_time += (time.time() - start_time) * 1000
            result.total_queries += 1

            top = matches[0] if matches else None
            if top is not None and top.source == SEMANTIC:
                result.semantic_wins += 1

            if case.expected_question is None:
                if top is None:
                    result.true_negatives += 1
                else:
                    result.false_positives += 1
            elif top is None:
                result.false_negatives += 1
            elif top.question == case.expected_question:
                result.true_positives += 1
            else:
                result.false_positives += 1

        if result.total_queries > 0:
            result.avg_lookup_time_ms = total_lookup_time / result.total_queries

        self.results.append(result)
        return result

    async def sweep_thresholds(
        self,
        tenant_id: str,
        cases: list[QueryCase],
        min_threshold: float = 0.5,
        max_threshold: float = 0.9,
        steps: int = 5,
        language: str = "en",
    ) -> list[EvalResult]:
        """
        Evaluate across evenly spaced similarity thresholds.

        Args:
            tenant_id: Tenant whose knowledge base is searched.
            cases: Labelled queries.
            min_threshold: Lowest threshold to test.
            max_threshold: Highest threshold to test.
            steps: Number of thresholds to test.
            language: Language code of the queries.

        Returns:
            List of EvalResult, one per threshold.
        """
        self.results = []
        for threshold in np.linspace(min_threshold, max_threshold, steps):
            await self.evaluate(tenant_id, cases, round(float(threshold), 4), language)
        return self.results

    def find_optimal_threshold(self, metric: str = "f1_score") -> tuple[float, EvalResult]:
        """
        Find the best threshold for a metric.

        Args:
            metric: 'f1_score', 'precision', 'recall' or 'hit_rate'.

        Returns:
            Tuple of (threshold, result).
        """
        if not self.results:
            raise ValueError("No evaluation results available. Run sweep_thresholds first.")

        best_result = max(self.results, key=lambda r: getattr(r, metric))
        return best_result.threshold, best_result

    def summary(self) -> str:
        """Format all results as a table."""
        if not self.results:
            return "No evaluation results available."

        lines = [
            f"{'Threshold':<12} {'Hit Rate':<12} {'Precision':<12} {'Recall':<12} {'F1 Score':<12}",
            "-" * 60,
        ]
        for result in self.results:
            lines.append(
                f"{result.threshold:<12.3f} "
                f"{result.hit_rate:<12.2%} "
                f"{result.precision:<12.2%} "
                f"{result.recall:<12.2%} "
                f"{result.f1_score:<12.2%}"
            )
        return "\n".join(lines)
