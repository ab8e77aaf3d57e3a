"""Utility modules for knowledge-base retrieval."""

from .embedding_cache import EmbeddingCache
from .logging_config import get_logger

__all__ = [
    "EmbeddingCache",
    "get_logger",
]
