"""Response DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class KnowledgeMatchItem(BaseModel):
    """Single match item (in matches array)."""

    id: str = Field(..., description="Id of the matched entry")
    question: str = Field(..., description="The matched entry's question")
    answer: str = Field(..., description="The entry's answer")
    category: str = Field(..., description="The entry's category")
    score: int = Field(..., description="Relevance score on the source matcher's scale")
    source: str = Field(..., description="'lexical' or 'semantic'")


class KnowledgeSearchResponse(BaseModel):
    """Response DTO for knowledge search."""

    tenant_id: str
    query: str = Field(..., description="The original guest question")
    language: str
    strategy: str = Field(..., description="Matcher that produced the results, or 'none'")
    matches: list[KnowledgeMatchItem] = Field(
        default_factory=list,
        description="Matched entries, best first",
    )
    lookup_time_ms: float = Field(..., description="Time taken for the search in milliseconds")


class KnowledgeContextResponse(BaseModel):
    """Response DTO for the full knowledge context of a tenant."""

    tenant_id: str
    language: str
    context: str = Field(..., description="Prompt-ready knowledge base text ('' when empty)")


class EntryStoreResponse(BaseModel):
    """Response DTO for entry creation and seeding."""

    success: bool = Field(..., description="Whether the operation succeeded")
    id: str | None = Field(None, description="Id of the stored entry")
    count: int = Field(1, description="Number of entries stored", ge=0)
    message: str = Field(..., description="Human-readable status message")


class StatsResponse(BaseModel):
    """Response DTO for service statistics."""

    store: dict[str, Any]
    search: dict[str, Any]
    semantic_enabled: bool
    similarity_threshold: float = Field(..., ge=0.0, le=1.0)
    quality_bar: int
    embedding_cache: dict[str, Any] | None = None


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    store_healthy: bool = Field(..., description="Whether the knowledge store is reachable")
    semantic_enabled: bool = Field(..., description="Whether semantic fallback is configured")
