"""HTTP handlers for knowledge-base operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

import time
import uuid

from fastapi import HTTPException, status

from kb_retrieval.dto import (
    CreateEntryRequest,
    EntryStoreResponse,
    HealthCheckResponse,
    KnowledgeContextResponse,
    KnowledgeMatchItem,
    KnowledgeSearchResponse,
    SearchKnowledgeRequest,
    SeedKnowledgeRequest,
    StatsResponse,
)
from kb_retrieval.entities import KnowledgeEntryEntity
from kb_retrieval.seed import seed_starter_entries
from kb_retrieval.services import KnowledgeSearchService


class KnowledgeHandler:
    """HTTP handlers for knowledge-base operations.

    This handler delegates business logic to KnowledgeSearchService
    and handles HTTP-specific concerns like:
    - Converting entities to DTOs
    - Setting appropriate status codes
    - Error handling and responses
    """

    def __init__(self, search_service: KnowledgeSearchService) -> None:
        """Initialize the knowledge handler.

        Args:
            search_service: The search service for business logic (required).
        """
        self._service = search_service

    async def search(self, request: SearchKnowledgeRequest) -> KnowledgeSearchResponse:
        """Handle POST /knowledge/search requests.

        Never fails: the service turns internal errors into an empty result.

        Args:
            request: The search request DTO

        Returns:
            KnowledgeSearchResponse with the matches, best first
        """
        start_time = time.time()

        matches = await self._service.search(
            tenant_id=request.tenant_id,
            query=request.query,
            language=request.language,
            limit=request.limit,
        )

        lookup_time_ms = (time.time() - start_time) * 1000

        return KnowledgeSearchResponse(
            tenant_id=request.tenant_id,
            query=request.query,
            language=request.language,
            strategy=matches[0].source if matches else "none",
            matches=[
                KnowledgeMatchItem(
                    id=match.entry_id,
                    question=match.question,
                    answer=match.answer,
                    category=match.category,
                    score=match.score,
                    source=match.source,
                )
                for match in matches
            ],
            lookup_time_ms=lookup_time_ms,
        )

    async def get_context(self, tenant_id: str, language: str = "en") -> KnowledgeContextResponse:
        """Handle GET /knowledge/context/{tenant_id} requests."""
        context = await self._service.build_context(tenant_id, language)
        return KnowledgeContextResponse(tenant_id=tenant_id, language=language, context=context)

    async def create_entry(self, request: CreateEntryRequest) -> EntryStoreResponse:
        """Handle POST /knowledge/entries requests.

        Args:
            request: The create entry request DTO

        Returns:
            EntryStoreResponse with the new entry id

        Raises:
            HTTPException: If the store rejects the write
        """
        entry = KnowledgeEntryEntity(
            id=uuid.uuid4().hex,
            tenant_id=request.tenant_id,
            question=request.question,
            answer=request.answer,
            category=request.category,
            keywords=request.keywords,
            language=request.language,
            priority=request.priority,
            is_active=request.is_active,
        )

        try:
            entry_id = self._service.repository.save(entry)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to store entry: {e}",
            ) from e

        return EntryStoreResponse(success=True, id=entry_id, message="Entry stored successfully")

    async def delete_entry(self, entry_id: str) -> dict:
        """Handle DELETE /knowledge/entries/{entry_id} requests.

        Raises:
            HTTPException: 404 if the entry does not exist, 500 on store errors
        """
        try:
            deleted = self._service.repository.delete(entry_id)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to delete entry: {e}",
            ) from e

        if not deleted:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Entry not found")

        return {"success": True, "id": entry_id, "message": "Entry deleted"}

    async def seed(self, request: SeedKnowledgeRequest) -> EntryStoreResponse:
        """Handle POST /knowledge/seed requests.

        Raises:
            HTTPException: 400 for an unknown business type, 500 on store errors
        """
        try:
            count = seed_starter_entries(
                self._service.repository,
                tenant_id=request.tenant_id,
                business_type=request.business_type,
                language=request.language,
            )
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to seed knowledge base: {e}",
            ) from e

        return EntryStoreResponse(
            success=True,
            count=count,
            message=f"Seeded {count} {request.business_type} entries",
        )

    async def get_stats(self) -> StatsResponse:
        """Handle GET /stats requests.

        Raises:
            HTTPException: If an error occurs while fetching stats
        """
        try:
            return StatsResponse(**self._service.get_stats())
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to get stats: {e}",
            ) from e

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        is_healthy = self._service.is_healthy()

        return HealthCheckResponse(
            status="healthy" if is_healthy else "unhealthy",
            store_healthy=is_healthy,
            semantic_enabled=self._service.semantic_enabled,
        )
