"""KB Retrieval - Knowledge-base search for hospitality guest chat.

Finds the authored Q&A entries that best answer a guest question: keyword
scoring first, embedding similarity as a fallback when keywords are weak.

Layers:
    - protocols: Interface contracts (KnowledgeStore, EmbeddingProvider)
    - repositories: Redis store and embedding providers
    - services: Matchers and search orchestration
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from kb_retrieval.repositories import RedisKnowledgeRepository, create_embedding_provider
    from kb_retrieval.services import KnowledgeSearchService

    service = KnowledgeSearchService.create(
        repository=RedisKnowledgeRepository.create(),
        embedding_provider=create_embedding_provider(),
    )
    matches = await service.search("hotel-42", "what time is check in")
    ```

For HTTP API:
    ```python
    from kb_retrieval.api.app import app
    ```
"""

from kb_retrieval.config import get_redis_client, settings
from kb_retrieval.dto import CreateEntryRequest, SearchKnowledgeRequest
from kb_retrieval.entities import KnowledgeEntryEntity, MatchCandidateEntity
from kb_retrieval.handlers import KnowledgeHandler
from kb_retrieval.protocols import EmbeddingProvider, KnowledgeStore
from kb_retrieval.repositories import RedisKnowledgeRepository, create_embedding_provider
from kb_retrieval.services import KnowledgeSearchService, LexicalMatcher, SemanticMatcher

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "KnowledgeStore",
    "EmbeddingProvider",
    # Services (business logic)
    "KnowledgeSearchService",
    "LexicalMatcher",
    "SemanticMatcher",
    # Handlers (HTTP)
    "KnowledgeHandler",
    # Repositories (data access)
    "RedisKnowledgeRepository",
    "create_embedding_provider",
    # Entities (domain models)
    "KnowledgeEntryEntity",
    "MatchCandidateEntity",
    # DTOs (API contracts)
    "SearchKnowledgeRequest",
    "CreateEntryRequest",
]
