"""Knowledge-base entry domain entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class KnowledgeEntryEntity:
    """One authored Q&A record belonging to a single tenant.

    The retrieval core only reads these. Usage telemetry is updated
    through the store, never by mutating the entity.

    Attributes:
        id: Identifier, unique within the tenant
        tenant_id: Owning business
        question: Canonical phrasing of the question
        answer: Text handed back to the guest (never scored)
        category: Free-text grouping label
        keywords: Comma-separated synonyms and phrases
        language: Language code the entry is written in
        priority: Tenant-assigned importance, 0-10
        is_active: Inactive entries are filtered out by the store
        usage_count: How many times the entry won a search
        last_used: When the entry last won a search
    """

    id: str
    tenant_id: str
    question: str
    answer: str
    category: str = ""
    keywords: str = ""
    language: str = "en"
    priority: int = 0
    is_active: bool = True
    usage_count: int = 0
    last_used: datetime | None = None
