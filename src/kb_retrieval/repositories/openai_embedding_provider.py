"""OpenAI embedding provider.

Uses the cheapest OpenAI embedding model (text-embedding-3-small) by
default. Without an API key the provider reports itself as not configured
and semantic matching is switched off.
"""

from openai import AsyncOpenAI, OpenAIError

from kb_retrieval.config import settings

DEFAULT_OPENAI_MODEL = "text-embedding-3-small"


class OpenAIEmbeddingProvider:
    """OpenAI implementation of the EmbeddingProvider protocol.

    Example:
        ```python
        provider = OpenAIEmbeddingProvider.create()
        if provider.is_configured:
            vector = await provider.encode("what time is check-in?")
        ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        model_name: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the OpenAI embedding provider.

        Args:
            api_key: OpenAI API key. Defaults to settings.openai_api_key.
            model_name: Embedding model. Defaults to settings.embedding_model.
            timeout: Request timeout in seconds. Defaults to settings.embedding_timeout.
        """
        self._api_key = api_key or settings.openai_api_key
        self._model_name = model_name or settings.embedding_model or DEFAULT_OPENAI_MODEL
        self._timeout = timeout or settings.embedding_timeout
        self._client: AsyncOpenAI | None = None

    @classmethod
    def create(
        cls,
        api_key: str | None = None,
        model_name: str | None = None,
    ) -> "OpenAIEmbeddingProvider":
        """Factory method to create OpenAIEmbeddingProvider with defaults."""
        return cls(api_key=api_key, model_name=model_name)

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy-load the async OpenAI client.

        Retries are disabled: a failed embedding degrades one candidate's
        score instead of stretching the chat turn.
        """
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                timeout=self._timeout,
                max_retries=0,
            )
        return self._client

    @property
    def model_name(self) -> str:
        """Get the model name/identifier."""
        return self._model_name

    @property
    def is_configured(self) -> bool:
        """True when an API key is present."""
        return bool(self._api_key)

    async def encode(self, text: str) -> list[float]:
        """Generate embedding vector for a single text.

        Args:
            text: The text to encode

        Returns:
            The embedding vector as a list of floats

        Raises:
            RuntimeError: If the provider is not configured or the API call fails
        """
        if not self.is_configured:
            raise RuntimeError("OpenAI API key not configured")

        try:
            response = await self.client.embeddings.create(
                model=self._model_name,
                input=text,
                encoding_format="float",
            )
        except OpenAIError as e:
            raise RuntimeError(f"OpenAI embedding error: {e}") from e

        if not response.data:
            raise ValueError("OpenAI returned no embedding data")
        return list(response.data[0].embedding)

    async def is_available(self) -> bool:
        """Check if the OpenAI embedding endpoint answers.

        Returns:
            True if a test embedding succeeds, False otherwise
        """
        if not self.is_configured:
            return False
        try:
            await self.encode("test")
            return True
        except (RuntimeError, ValueError):
            return False

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.close()
            self._client = None
