"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import CreateEntryRequest, SearchKnowledgeRequest, SeedKnowledgeRequest
from .responses import (
    EntryStoreResponse,
    HealthCheckResponse,
    KnowledgeContextResponse,
    KnowledgeMatchItem,
    KnowledgeSearchResponse,
    StatsResponse,
)

__all__ = [
    "SearchKnowledgeRequest",
    "CreateEntryRequest",
    "SeedKnowledgeRequest",
    "KnowledgeMatchItem",
    "KnowledgeSearchResponse",
    "KnowledgeContextResponse",
    "EntryStoreResponse",
    "StatsResponse",
    "HealthCheckResponse",
]
