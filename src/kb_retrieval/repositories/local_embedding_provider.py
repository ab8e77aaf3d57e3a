"""Local sentence-transformers embedding provider.

Runs the model in-process, no API calls required. Encoding is CPU-bound,
so it is pushed to a worker thread to keep the event loop free.
"""

import asyncio
import time

import numpy as np
from sentence_transformers import SentenceTransformer

from kb_retrieval.config import settings
from kb_retrieval.utils import get_logger

logger = get_logger(__name__)

DEFAULT_LOCAL_MODEL = "paraphrase-multilingual-MiniLM-L12-v2"


class LocalEmbeddingProvider:
    """Local sentence-transformers implementation of EmbeddingProvider.

    Default model: paraphrase-multilingual-MiniLM-L12-v2 (384 dimensions),
    which handles the multilingual knowledge bases tenants author.
    """

    def __init__(self, model_name: str | None = None) -> None:
        """Initialize the local embedding provider.

        Args:
            model_name: Name of the sentence-transformers model.
        """
        self._model_name = model_name or settings.embedding_model or DEFAULT_LOCAL_MODEL
        self._model: SentenceTransformer | None = None

    @classmethod
    def create(cls, model_name: str | None = None) -> "LocalEmbeddingProvider":
        """Factory method to create LocalEmbeddingProvider with defaults."""
        return cls(model_name=model_name)

    @property
    def model(self) -> SentenceTransformer:
        """Lazy-load the embedding model."""
        if self._model is None:
            logger.info("loading embedding model", extra={"model": self._model_name})
            start_time = time.time()
            self._model = SentenceTransformer(self._model_name)
            logger.info(
                "embedding model loaded",
                extra={"model": self._model_name, "load_seconds": round(time.time() - start_time, 2)},
            )
        return self._model

    @property
    def model_name(self) -> str:
        """Get the model name/identifier."""
        return self._model_name

    @property
    def is_configured(self) -> bool:
        """Always True, the model is fetched on first use."""
        return True

    def _encode_sync(self, text: str) -> list[float]:
        embedding = self.model.encode(
            text,
            show_progress_bar=False,
            normalize_embeddings=True,
        )
        if isinstance(embedding, np.ndarray):
            if embedding.ndim == 1:
                return embedding.tolist()
            return embedding[0].tolist()
        return list(embedding)

    async def encode(self, text: str) -> list[float]:
        """Generate embedding vector for a single text.

        Args:
            text: The text to encode

        Returns:
            The embedding vector as a list of floats
        """
        return await asyncio.to_thread(self._encode_sync, text)

    async def is_available(self) -> bool:
        """Check if the model can be loaded.

        Returns:
            True if the model loads, False otherwise
        """
        try:
            await asyncio.to_thread(lambda: self.model)
            return True
        except Exception:
            logger.exception("embedding model failed to load", extra={"model": self._model_name})
            return False
