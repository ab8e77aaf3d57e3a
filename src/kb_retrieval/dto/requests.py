"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class SearchKnowledgeRequest(BaseModel):
    """Request DTO for searching a tenant's knowledge base.

    The handler will convert this to internal calls to the service layer.
    """

    tenant_id: str = Field(..., description="The tenant whose knowledge base is searched", min_length=1)
    query: str = Field(..., description="The guest question", min_length=1)
    language: str = Field("en", description="Language code of the question", min_length=2)
    limit: int = Field(3, description="Maximum number of matches", ge=1, le=20)


class CreateEntryRequest(BaseModel):
    """Request DTO for creating a knowledge-base entry."""

    tenant_id: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    keywords: str = Field("", description="Comma-separated synonyms and phrases")
    priority: int = Field(0, description="Importance boost", ge=0, le=10)
    language: str = Field("en", min_length=2)
    is_active: bool = True


class SeedKnowledgeRequest(BaseModel):
    """Request DTO for loading a starter knowledge base."""

    tenant_id: str = Field(..., min_length=1)
    business_type: str = Field(..., description="hotel, tour or rental")
    language: str = Field("en", min_length=2)
