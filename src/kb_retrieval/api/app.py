from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kb_retrieval.api.dependencies import HandlerDep, lifespan
from kb_retrieval.config import settings
from kb_retrieval.dto import (
    CreateEntryRequest,
    EntryStoreResponse,
    HealthCheckResponse,
    KnowledgeContextResponse,
    KnowledgeSearchResponse,
    SearchKnowledgeRequest,
    SeedKnowledgeRequest,
    StatsResponse,
)

API_NAME = "Knowledge Retrieval API"
API_VERSION = "0.1.0"


def create_app(use_lifespan: bool = True) -> FastAPI:
    """Build the FastAPI application.

    Args:
        use_lifespan: Wire services from settings on startup. Tests pass False
            and put their own handler in ``app.state.knowledge_handler``.
    """
    app = FastAPI(
        title=API_NAME,
        description="Knowledge-base retrieval for guest chat: keyword scoring with semantic fallback",
        version=API_VERSION,
        lifespan=lifespan if use_lifespan else None,
    )

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": API_NAME,
            "version": API_VERSION,
            "endpoints": {
                "search": "/knowledge/search",
                "context": "/knowledge/context/{tenant_id}",
                "entries": "/knowledge/entries",
                "seed": "/knowledge/seed",
                "stats": "/stats",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: HandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return await handler.health_check()

    @app.post("/knowledge/search", response_model=KnowledgeSearchResponse)
    async def search(request: SearchKnowledgeRequest, handler: HandlerDep) -> KnowledgeSearchResponse:
        """Find the knowledge-base entries that best answer a guest question."""
        return await handler.search(request)

    @app.get("/knowledge/context/{tenant_id}", response_model=KnowledgeContextResponse)
    async def context(tenant_id: str, handler: HandlerDep, language: str = "en") -> KnowledgeContextResponse:
        """Get a tenant's whole knowledge base as prompt context."""
        return await handler.get_context(tenant_id, language)

    @app.post("/knowledge/entries", response_model=EntryStoreResponse, status_code=201)
    async def create_entry(request: CreateEntryRequest, handler: HandlerDep) -> EntryStoreResponse:
        """Create a knowledge-base entry."""
        return await handler.create_entry(request)

    @app.delete("/knowledge/entries/{entry_id}")
    async def delete_entry(entry_id: str, handler: HandlerDep) -> dict[str, Any]:
        """Delete a knowledge-base entry."""
        return await handler.delete_entry(entry_id)

    @app.post("/knowledge/seed", response_model=EntryStoreResponse, status_code=201)
    async def seed(request: SeedKnowledgeRequest, handler: HandlerDep) -> EntryStoreResponse:
        """Load the starter knowledge base for a business type."""
        return await handler.seed(request)

    @app.get("/stats", response_model=StatsResponse)
    async def stats(handler: HandlerDep) -> StatsResponse:
        """Get search and store statistics."""
        return await handler.get_stats()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "kb_retrieval.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
