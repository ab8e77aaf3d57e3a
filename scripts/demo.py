#!/usr/bin/env python3
"""
Demo script for knowledge-base retrieval.

Seeds a hotel starter knowledge base into Redis under a demo tenant, runs a
few guest questions through the search and sweeps the semantic threshold.
Semantic fallback only kicks in when an embedding provider is configured
(e.g. OPENAI_API_KEY is set).
"""

import asyncio

from kb_retrieval.evaluator import QueryCase, SearchEvaluator
from kb_retrieval.repositories import RedisKnowledgeRepository, create_embedding_provider
from kb_retrieval.seed import seed_starter_entries
from kb_retrieval.services import KnowledgeSearchService, format_matches_for_prompt
from kb_retrieval.utils import EmbeddingCache

TENANT_ID = "demo-hotel"


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def demo_search(service: KnowledgeSearchService) -> None:
    """Run guest questions through the search."""
    print_section("Guest Questions")

    queries = [
        "what time is check in",  # strong keyword match
        "is there somewhere to leave my car",  # keyword overlap on "car"
        "can I get something to eat in the morning",  # weak keywords, semantic fallback
        "do you allow pets",  # nothing relevant
    ]

    for query in queries:
        matches = await service.search(TENANT_ID, query, limit=2)
        print(f"\n  Query: {query}")
        if not matches:
            print("  ✗ No match")
            continue
        for match in matches:
            print(f"  ✓ [{match.source} {match.score}] {match.question}")

    matches = await service.search(TENANT_ID, "is breakfast included")
    print("\n📝 Prompt section for the top result:\n")
    print(format_matches_for_prompt(matches))


async def demo_threshold_tuning(repository: RedisKnowledgeRepository, cache: EmbeddingCache) -> None:
    """Sweep the semantic similarity threshold over labelled questions."""
    print_section("Threshold Tuning")

    provider = create_embedding_provider()
    if not provider.is_configured:
        print("\n  Embedding provider not configured, skipping.")
        return

    cases = [
        QueryCase("what time is check in", "What time is check-in?"),
        QueryCase("when can we arrive", "What time is check-in?"),
        QueryCase("can I get something to eat in the morning", "Is breakfast included?"),
        QueryCase("is there a gym", "What amenities do you offer?"),
        QueryCase("how far is the airport", None),
    ]

    evaluator = SearchEvaluator(repository, embedding_provider=provider, cache=cache)
    await evaluator.sweep_thresholds(TENANT_ID, cases, min_threshold=0.5, max_threshold=0.9, steps=5)
    print()
    print(evaluator.summary())

    threshold, best = evaluator.find_optimal_threshold("f1_score")
    print(f"\n🎯 Best threshold by F1: {threshold:.2f} ({best.f1_score:.2%})")


async def run() -> None:
    repository = RedisKnowledgeRepository.create()
    if repository.count_all(TENANT_ID) == 0:
        count = seed_starter_entries(repository, TENANT_ID, "hotel")
        print(f"\n📚 Seeded {count} hotel entries for {TENANT_ID}")

    cache = EmbeddingCache()
    service = KnowledgeSearchService.create(
        repository=repository,
        embedding_provider=create_embedding_provider(),
        cache=cache,
        track_usage=False,
    )
    print(f"\n🔎 Semantic fallback enabled: {service.semantic_enabled}")

    await demo_search(service)
    await demo_threshold_tuning(repository, cache)


def main() -> None:
    """Run all demos."""
    print("\n🚀 Knowledge Retrieval Demo")
    print("=" * 70)

    try:
        asyncio.run(run())

        print("\n" + "=" * 70)
        print("✅ Demo completed successfully!")
        print("=" * 70)

    except Exception as e:
        print(f"\n❌ Error: {e}")
        print("\nMake sure Redis is running:")
        print("  docker run -d -p 6379:6379 redis:7")
        print("\nOr set REDIS_URL to your Redis instance.")


if __name__ == "__main__":
    main()
