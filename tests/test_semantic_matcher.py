"""
Tests for embedding-similarity matching.
"""

import asyncio
import math

import pytest

from conftest import FakeEmbeddingProvider
from kb_retrieval.entities import SEMANTIC
from kb_retrieval.services import SemanticMatcher, cosine_similarity
from kb_retrieval.services.semantic_matcher import entry_embedding_text, similarity_to_score
from kb_retrieval.utils import EmbeddingCache

QUERY = "arriving early?"
CHECK_IN_TEXT = "what time is check-in? checkin, arrival"
PARKING_TEXT = "is parking available? parking, car, valet"
BREAKFAST_TEXT = "is breakfast included? breakfast, food, dining"


@pytest.fixture
def provider():
    return FakeEmbeddingProvider(
        vectors={
            QUERY: [1.0, 0.0],
            CHECK_IN_TEXT: [4.0, 3.0],  # similarity 0.8
            BREAKFAST_TEXT: [3.0, 4.0],  # similarity 0.6
            PARKING_TEXT: [0.0, 1.0],  # similarity 0.0
        }
    )


def make_matcher(provider, **kwargs):
    kwargs.setdefault("cache", EmbeddingCache())
    kwargs.setdefault("timeout", 1.0)
    kwargs.setdefault("threshold", 0.7)
    return SemanticMatcher(embedding_provider=provider, **kwargs)


class TestCosineSimilarity:
    def test_identical_vectors(self):
        assert cosine_similarity([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) == pytest.approx(1.0)

    def test_orthogonal_vectors(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_opposite_vectors(self):
        assert cosine_similarity([1.0, 0.0], [-2.0, 0.0]) == pytest.approx(-1.0)

    def test_non_finite_vectors_score_zero(self):
        assert cosine_similarity([math.nan, 1.0], [1.0, 1.0]) == 0.0
        assert cosine_similarity([1.0, 1.0], [math.inf, 1.0]) == 0.0
        assert cosine_similarity([math.inf, 0.0], [math.inf, 0.0]) == 0.0

    def test_degenerate_vectors_score_zero(self):
        assert cosine_similarity([], [1.0]) == 0.0
        assert cosine_similarity([1.0], []) == 0.0
        assert cosine_similarity([1.0, 0.0], [1.0, 0.0, 0.0]) == 0.0
        assert cosine_similarity([0.0, 0.0], [1.0, 1.0]) == 0.0

    @pytest.mark.parametrize(
        "a, b",
        [
            ([0.3, -0.7, 2.5], [1e9, 1e-9, -3.0]),
            ([1e-12, 1e-12], [1e-12, 1e-12]),
            ([5.0, 5.0, 5.0, 5.0], [-1.0, -1.0, -1.0, -1.0]),
        ],
    )
    def test_bounds(self, a, b):
        assert -1.0 <= cosine_similarity(a, b) <= 1.0


def test_similarity_to_score_rounds_half_up():
    assert similarity_to_score(0.125) == 13
    assert similarity_to_score(0.124) == 12
    assert similarity_to_score(0.875) == 88
    assert similarity_to_score(1.0) == 100
    assert similarity_to_score(0.0) == 0


def test_entry_embedding_text(check_in_entry):
    assert entry_embedding_text(check_in_entry) == CHECK_IN_TEXT


def test_match_ranks_by_similarity(provider, hotel_entries):
    matcher = make_matcher(provider)

    matches = asyncio.run(matcher.match(QUERY, hotel_entries, threshold=0.5))

    assert [(m.entry_id, m.score) for m in matches] == [("check-in", 80), ("breakfast", 60)]
    assert all(m.source == SEMANTIC for m in matches)


def test_threshold_filters_weak_matches(provider, hotel_entries):
    matcher = make_matcher(provider)

    matches = asyncio.run(matcher.match(QUERY, hotel_entries, threshold=0.7))

    assert [m.entry_id for m in matches] == ["check-in"]


def test_default_threshold_comes_from_matcher(provider, hotel_entries):
    matcher = make_matcher(provider, threshold=0.9)

    assert asyncio.run(matcher.match(QUERY, hotel_entries)) == []


def test_limit_truncates_results(provider, hotel_entries):
    matcher = make_matcher(provider)

    matches = asyncio.run(matcher.match(QUERY, hotel_entries, threshold=0.0, limit=1))

    assert len(matches) == 1
    assert matches[0].entry_id == "check-in"


def test_query_is_lowercased_before_embedding(provider, hotel_entries):
    matcher = make_matcher(provider)

    matches = asyncio.run(matcher.match("Arriving EARLY?", hotel_entries))

    assert matches[0].entry_id == "check-in"
    assert QUERY in provider.calls


def test_unconfigured_provider_makes_no_calls(hotel_entries):
    provider = FakeEmbeddingProvider(default=[1.0, 0.0], configured=False)
    matcher = make_matcher(provider)

    assert not matcher.is_enabled
    assert asyncio.run(matcher.match(QUERY, hotel_entries)) == []
    assert provider.calls == []


def test_missing_provider_disables_matching(hotel_entries):
    matcher = make_matcher(None)

    assert not matcher.is_enabled
    assert asyncio.run(matcher.match(QUERY, hotel_entries)) == []


def test_empty_inputs_return_nothing(provider, hotel_entries):
    matcher = make_matcher(provider)

    assert asyncio.run(matcher.match(QUERY, [])) == []
    assert asyncio.run(matcher.match("   ", hotel_entries)) == []
    assert provider.calls == []


def test_query_embedding_failure_returns_nothing(hotel_entries):
    provider = FakeEmbeddingProvider(default=[1.0, 0.0], failing={QUERY})
    matcher = make_matcher(provider)

    assert asyncio.run(matcher.match(QUERY, hotel_entries)) == []


def test_candidate_failure_scores_zero_without_aborting(provider, hotel_entries):
    provider.failing = {CHECK_IN_TEXT}
    matcher = make_matcher(provider)

    matches = asyncio.run(matcher.match(QUERY, hotel_entries, threshold=0.5))

    assert [m.entry_id for m in matches] == ["breakfast"]


def test_failed_candidate_counts_as_zero_with_zero_threshold(provider, hotel_entries):
    provider.failing = {CHECK_IN_TEXT}
    matcher = make_matcher(provider)

    matches = asyncio.run(matcher.match(QUERY, hotel_entries, threshold=0.0))

    scores = {m.entry_id: m.score for m in matches}
    assert scores["check-in"] == 0
    assert scores["breakfast"] == 60


def test_timeout_degrades_to_empty(hotel_entries):
    provider = FakeEmbeddingProvider(default=[1.0, 0.0], slow={QUERY})
    matcher = make_matcher(provider, timeout=0.05)

    assert asyncio.run(matcher.match(QUERY, hotel_entries)) == []


def test_embeddings_are_cached_across_calls(provider, hotel_entries):
    matcher = make_matcher(provider)

    first = asyncio.run(matcher.match(QUERY, hotel_entries))
    calls_after_first = len(provider.calls)
    second = asyncio.run(matcher.match(QUERY, hotel_entries))

    assert calls_after_first == 4
    assert len(provider.calls) == calls_after_first
    assert first == second


def test_failed_embeddings_are_not_cached(provider, hotel_entries):
    provider.failing = {PARKING_TEXT}
    matcher = make_matcher(provider)

    asyncio.run(matcher.match(QUERY, hotel_entries))
    asyncio.run(matcher.match(QUERY, hotel_entries))

    assert provider.calls.count(PARKING_TEXT) == 2
    assert provider.calls.count(CHECK_IN_TEXT) == 1
    assert PARKING_TEXT not in matcher.cache


def test_shared_cache_spans_matchers(provider, hotel_entries):
    cache = EmbeddingCache()
    asyncio.run(make_matcher(provider, cache=cache).match(QUERY, hotel_entries))
    asyncio.run(make_matcher(provider, cache=cache).match(QUERY, hotel_entries))

    assert len(provider.calls) == 4
    assert len(cache) == 4


def test_scores_stay_within_range(hotel_entries):
    provider = FakeEmbeddingProvider(default=[math.pi, -1.0, 2.0])
    matcher = make_matcher(provider)

    matches = asyncio.run(matcher.match(QUERY, hotel_entries, threshold=0.01))

    assert matches
    assert all(0 <= m.score <= 100 for m in matches)


def test_non_finite_candidate_scores_zero_without_aborting(provider, hotel_entries):
    provider.vectors[BREAKFAST_TEXT] = [math.nan, 1.0]
    matcher = make_matcher(provider)

    matches = asyncio.run(matcher.match(QUERY, hotel_entries, threshold=0.0))

    scores = {m.entry_id: m.score for m in matches}
    assert scores == {"check-in": 80, "breakfast": 0, "parking": 0}
    assert BREAKFAST_TEXT not in matcher.cache
