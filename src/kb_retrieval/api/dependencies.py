"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from kb_retrieval.config import settings
from kb_retrieval.handlers import KnowledgeHandler
from kb_retrieval.repositories import RedisKnowledgeRepository, create_embedding_provider
from kb_retrieval.services import KnowledgeSearchService
from kb_retrieval.utils import EmbeddingCache, get_logger

logger = get_logger(__name__)


def get_handler(request: Request) -> KnowledgeHandler:
    """Dependency injection for KnowledgeHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "knowledge_handler", None)
    if handler is None:
        raise RuntimeError("KnowledgeHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Embedding provider + process-wide embedding cache
    2. Repository (data access)
    3. Service (business logic) - app.state.search_service
    4. Handler (HTTP endpoints) - app.state.knowledge_handler

    Cleanup:
        Closes the embedding client and removes everything from app.state
    """
    embedding_provider = create_embedding_provider(settings.embedding_provider)
    if not embedding_provider.is_configured:
        logger.info(
            "embedding provider not configured, semantic search disabled",
            extra={"provider": settings.embedding_provider},
        )

    repository = RedisKnowledgeRepository.create()
    search_service = KnowledgeSearchService.create(
        repository=repository,
        embedding_provider=embedding_provider,
        cache=EmbeddingCache(max_size=settings.embedding_cache_size),
    )

    app.state.search_service = search_service
    app.state.knowledge_handler = KnowledgeHandler(search_service=search_service)
    app.state.embedding_provider = embedding_provider
    app.state.repository = repository

    logger.info(
        "knowledge search initialized",
        extra={
            "provider": settings.embedding_provider,
            "model": embedding_provider.model_name,
            "semantic_enabled": search_service.semantic_enabled,
            "similarity_threshold": search_service.similarity_threshold,
            "store_healthy": search_service.is_healthy(),
        },
    )

    yield

    close = getattr(embedding_provider, "close", None)
    if close is not None:
        await close()

    del app.state.knowledge_handler
    del app.state.search_service
    del app.state.embedding_provider
    del app.state.repository
    logger.info("knowledge search shut down")


# Type alias for cleaner dependency injection
HandlerDep = Annotated[KnowledgeHandler, Depends(get_handler)]