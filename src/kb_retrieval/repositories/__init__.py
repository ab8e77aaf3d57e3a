"""Repository layer for data access.

This layer abstracts external dependencies (Redis, embedding APIs)
behind protocol-based interfaces. This enables:
- Easy swapping of implementations (Redis -> SQL, OpenAI -> Ollama, etc.)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
"""

from kb_retrieval.config import settings
from kb_retrieval.protocols import EmbeddingProvider, KnowledgeStore

from .local_embedding_provider import LocalEmbeddingProvider
from .ollama_embedding_provider import OllamaEmbeddingProvider
from .openai_embedding_provider import OpenAIEmbeddingProvider
from .redis_repository import RedisKnowledgeRepository


def create_embedding_provider(name: str | None = None) -> EmbeddingProvider:
    """Build the embedding provider selected by name or settings.

    Args:
        name: "openai", "ollama" or "local". Defaults to settings.embedding_provider.

    Returns:
        An EmbeddingProvider (possibly not configured, e.g. OpenAI without a key)
    """
    name = (name or settings.embedding_provider).lower()
    if name == "openai":
        return OpenAIEmbeddingProvider.create()
    if name == "ollama":
        return OllamaEmbeddingProvider.create()
    if name == "local":
        return LocalEmbeddingProvider.create()
    raise ValueError(f"Unknown embedding provider: {name!r}")


__all__ = [
    "EmbeddingProvider",
    "KnowledgeStore",
    "RedisKnowledgeRepository",
    "OpenAIEmbeddingProvider",
    "OllamaEmbeddingProvider",
    "LocalEmbeddingProvider",
    "create_embedding_provider",
]
