"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis -> SQL, OpenAI -> Ollama, etc.)
- Unit testing with fake implementations
- Clear separation of concerns
"""

from .embedding_provider import EmbeddingProvider
from .knowledge_store import KnowledgeStore

__all__ = [
    "EmbeddingProvider",
    "KnowledgeStore",
]
