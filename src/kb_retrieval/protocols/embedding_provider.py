"""Embedding provider protocol.

Defines the interface for any embedding generation service that can
convert text to vector embeddings.

Implementations include:
- OpenAI embeddings (API, default)
- Ollama (local HTTP server)
- sentence-transformers (in-process)
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class EmbeddingProvider(Protocol):
    """Protocol for embedding generation services.

    Any type that implements these members satisfies the protocol,
    no explicit inheritance needed.

    ``encode`` is allowed to raise. Callers in the search path wrap it
    and treat a failure as an empty vector.
    """

    @property
    def model_name(self) -> str:
        """Return the name/identifier of the model."""
        ...

    @property
    def is_configured(self) -> bool:
        """Return whether the provider has what it needs to run.

        A provider that is not configured (e.g. missing API key) is never
        called; semantic matching is switched off instead.
        """
        ...

    async def encode(self, text: str) -> list[float]:
        """Generate embedding vector for a single text.

        Args:
            text: The text to encode

        Returns:
            The embedding vector as a list of floats
        """
        ...

    async def is_available(self) -> bool:
        """Check if the embedding provider is reachable.

        Returns:
            True if available, False otherwise
        """
        ...
