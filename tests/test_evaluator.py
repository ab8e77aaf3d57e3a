"""
Tests for search quality evaluation and threshold sweeps.
"""

import asyncio

import pytest

from conftest import FakeEmbeddingProvider, FakeKnowledgeStore, make_entry
from kb_retrieval.evaluator import EvalResult, QueryCase, SearchEvaluator

PARKING_TEXT = "is parking available? parking, car, valet"
BREAKFAST_TEXT = "is breakfast included? breakfast, food, dining"

CASES = [
    QueryCase("is parking available?", "Is parking available?"),
    QueryCase("breakfast", "Is breakfast included?"),
    QueryCase("zzz", None),
    QueryCase("vehicle storage", "Is parking available?"),
    QueryCase("car", "Is breakfast included?"),
]


@pytest.fixture
def eval_store():
    return FakeKnowledgeStore(
        [
            make_entry("Is parking available?", "parking, car, valet", entry_id="parking"),
            make_entry("Is breakfast included?", "breakfast, food, dining", entry_id="breakfast"),
        ]
    )


@pytest.fixture
def provider():
    return FakeEmbeddingProvider(
        vectors={
            "vehicle storage": [1.0, 0.0, 0.0],
            PARKING_TEXT: [2.0, 1.0, 0.0],  # 0.89 vs "vehicle storage", 0.45 vs the default
            BREAKFAST_TEXT: [0.0, 0.0, 1.0],
        },
        default=[0.0, 1.0, 0.0],
    )


def test_lexical_only_evaluation(eval_store):
    evaluator = SearchEvaluator(eval_store)

    result = asyncio.run(evaluator.evaluate("hotel-1", CASES, threshold=0.7))

    assert result.total_queries == 5
    assert result.true_positives == 2
    assert result.false_positives == 1
    assert result.true_negatives == 1
    assert result.false_negatives == 1
    assert result.semantic_wins == 0
    assert result.hit_rate == pytest.approx(0.4)
    assert result.precision == pytest.approx(2 / 3)
    assert result.recall == pytest.approx(2 / 3)


def test_evaluation_does_not_touch_usage(eval_store):
    asyncio.run(SearchEvaluator(eval_store).evaluate("hotel-1", CASES, threshold=0.7))

    assert eval_store.increments == {}


def test_sweep_and_optimal_threshold(eval_store, provider):
    evaluator = SearchEvaluator(eval_store, embedding_provider=provider)

    results = asyncio.run(evaluator.sweep_thresholds("hotel-1", CASES, 0.5, 0.9, 5))

    assert [r.threshold for r in results] == [0.5, 0.6, 0.7, 0.8, 0.9]
    assert [r.true_positives for r in results] == [3, 3, 3, 3, 2]
    assert results[0].semantic_wins == 1
    assert results[-1].false_negatives == 1

    threshold, best = evaluator.find_optimal_threshold("f1_score")
    assert threshold == 0.5
    assert best.f1_score == pytest.approx(6 / 7)


def test_sweep_reuses_embeddings(eval_store, provider):
    evaluator = SearchEvaluator(eval_store, embedding_provider=provider)

    asyncio.run(evaluator.sweep_thresholds("hotel-1", CASES, steps=3))

    assert len(provider.calls) == len(set(provider.calls))


def test_find_optimal_threshold_requires_results(eval_store):
    with pytest.raises(ValueError):
        SearchEvaluator(eval_store).find_optimal_threshold()


def test_summary(eval_store):
    evaluator = SearchEvaluator(eval_store)
    assert evaluator.summary() == "No evaluation results available."

    asyncio.run(evaluator.evaluate("hotel-1", CASES, threshold=0.7))

    lines = evaluator.summary().splitlines()
    assert lines[0].startswith("Threshold")
    assert lines[2].startswith("0.700")


def test_eval_result_metrics_with_no_data():
    result = EvalResult(threshold=0.5)

    assert result.hit_rate == 0.0
    assert result.precision == 0.0
    assert result.recall == 0.0
    assert result.f1_score == 0.0
    assert result.to_dict()["threshold"] == 0.5
