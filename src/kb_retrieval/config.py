import os
from dataclasses import dataclass
from functools import lru_cache

import redis
from dotenv import load_dotenv

load_dotenv()

EMBEDDING_PROVIDERS = ("openai", "ollama", "local")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis (knowledge-base store)
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")
    kb_key_prefix: str = os.getenv("KB_KEY_PREFIX", "kb")

    # Embedding
    embedding_provider: str = os.getenv("EMBEDDING_PROVIDER", "openai").lower()
    # Each provider falls back to its own default model when unset
    embedding_model: str | None = os.getenv("EMBEDDING_MODEL") or None
    embedding_timeout: float = float(os.getenv("EMBEDDING_TIMEOUT", "5.0"))
    # 0 disables eviction
    embedding_cache_size: int = int(os.getenv("EMBEDDING_CACHE_SIZE", "10000"))

    # OpenAI (semantic matching is disabled without a key)
    openai_api_key: str | None = os.getenv("OPENAI_API_KEY") or None

    # Ollama
    ollama_base_url: str = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")

    # Search
    semantic_similarity_threshold: float = float(os.getenv("SEMANTIC_SIMILARITY_THRESHOLD", "0.7"))
    lexical_quality_bar: int = int(os.getenv("LEXICAL_QUALITY_BAR", "30"))
    confident_match_score: int = int(os.getenv("CONFIDENT_MATCH_SCORE", "30"))
    default_search_limit: int = int(os.getenv("DEFAULT_SEARCH_LIMIT", "3"))
    context_max_entries: int = int(os.getenv("CONTEXT_MAX_ENTRIES", "50"))

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if not 0 <= self.semantic_similarity_threshold <= 1:
            raise ValueError("SEMANTIC_SIMILARITY_THRESHOLD must be between 0 and 1")

        if self.embedding_provider not in EMBEDDING_PROVIDERS:
            raise ValueError(
                f"EMBEDDING_PROVIDER must be one of {list(EMBEDDING_PROVIDERS)}, "
                f"got {self.embedding_provider!r}"
            )

        if self.embedding_timeout <= 0:
            raise ValueError("EMBEDDING_TIMEOUT must be positive")

        if self.embedding_cache_size < 0:
            raise ValueError("EMBEDDING_CACHE_SIZE must be >= 0")

        if self.default_search_limit < 1:
            raise ValueError("DEFAULT_SEARCH_LIMIT must be at least 1")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create a Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=True,
    )
