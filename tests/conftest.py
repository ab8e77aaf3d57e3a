"""Shared fakes for knowledge-base search tests."""

import asyncio
from dataclasses import replace

import pytest

from kb_retrieval.entities import KnowledgeEntryEntity


def make_entry(
    question: str,
    keywords: str = "",
    priority: int = 0,
    entry_id: str | None = None,
    tenant_id: str = "hotel-1",
    answer: str | None = None,
    category: str = "general",
    language: str = "en",
    is_active: bool = True,
) -> KnowledgeEntryEntity:
    """Build an entry with sensible defaults."""
    return KnowledgeEntryEntity(
        id=entry_id or question.lower().replace(" ", "-"),
        tenant_id=tenant_id,
        question=question,
        answer=answer or f"Answer to: {question}",
        category=category,
        keywords=keywords,
        language=language,
        priority=priority,
        is_active=is_active,
    )


class FakeKnowledgeStore:
    """In-memory KnowledgeStore with switchable failures."""

    def __init__(self, entries: list[KnowledgeEntryEntity] | None = None) -> None:
        self.entries: dict[str, KnowledgeEntryEntity] = {}
        self.increments: dict[str, int] = {}
        self.fail_fetch = False
        self.fail_increment = False
        self.healthy = True
        for entry in entries or []:
            self.save(entry)

    def fetch_active_entries(self, tenant_id: str, language: str) -> list[KnowledgeEntryEntity]:
        if self.fail_fetch:
            raise ConnectionError("store unavailable")
        entries = [
            e
            for e in self.entries.values()
            if e.tenant_id == tenant_id and e.is_active and e.language == language
        ]
        entries.sort(key=lambda e: (-e.priority, -e.usage_count))
        return entries

    def increment_usage(self, entry_id: str) -> None:
        if self.fail_increment:
            raise ConnectionError("store unavailable")
        self.increments[entry_id] = self.increments.get(entry_id, 0) + 1
        entry = self.entries.get(entry_id)
        if entry is not None:
            self.entries[entry_id] = replace(entry, usage_count=entry.usage_count + 1)

    def save(self, entry: KnowledgeEntryEntity) -> str:
        self.entries[entry.id] = entry
        return entry.id

    def get(self, entry_id: str) -> KnowledgeEntryEntity | None:
        return self.entries.get(entry_id)

    def delete(self, entry_id: str) -> bool:
        return self.entries.pop(entry_id, None) is not None

    def count_all(self, tenant_id: str) -> int:
        return sum(1 for e in self.entries.values() if e.tenant_id == tenant_id)

    def health_check(self) -> bool:
        return self.healthy

    def get_stats(self) -> dict:
        return {"total_entries": len(self.entries)}


class FakeEmbeddingProvider:
    """Scripted EmbeddingProvider.

    Texts found in ``vectors`` get that vector, anything else gets
    ``default`` (or raises when ``default`` is None). Texts in ``failing``
    always raise; texts in ``slow`` sleep past any sane timeout.
    """

    def __init__(
        self,
        vectors: dict[str, list[float]] | None = None,
        default: list[float] | None = None,
        failing: set[str] | None = None,
        slow: set[str] | None = None,
        configured: bool = True,
    ) -> None:
        self.vectors = vectors or {}
        self.default = default
        self.failing = failing or set()
        self.slow = slow or set()
        self.configured = configured
        self.calls: list[str] = []

    @property
    def model_name(self) -> str:
        return "fake-embedding"

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def encode(self, text: str) -> list[float]:
        self.calls.append(text)
        if text in self.slow:
            await asyncio.sleep(10)
        if text in self.failing:
            raise RuntimeError(f"cannot embed {text!r}")
        if text in self.vectors:
            return self.vectors[text]
        if self.default is not None:
            return self.default
        raise RuntimeError(f"no vector for {text!r}")

    async def is_available(self) -> bool:
        return self.configured


@pytest.fixture
def check_in_entry() -> KnowledgeEntryEntity:
    """The check-in entry guests ask about most."""
    return make_entry(
        "What time is check-in?",
        keywords="checkin, arrival",
        priority=2,
        entry_id="check-in",
        category="check_in",
    )


@pytest.fixture
def hotel_entries(check_in_entry) -> list[KnowledgeEntryEntity]:
    """A small hotel knowledge base."""
    return [
        check_in_entry,
        make_entry(
            "Is parking available?",
            keywords="parking, car, valet",
            entry_id="parking",
            category="parking",
        ),
        make_entry(
            "Is breakfast included?",
            keywords="breakfast, food, dining",
            priority=1,
            entry_id="breakfast",
            category="breakfast",
        ),
    ]


@pytest.fixture
def store(hotel_entries) -> FakeKnowledgeStore:
    """In-memory store holding the hotel knowledge base."""
    return FakeKnowledgeStore(hotel_entries)
