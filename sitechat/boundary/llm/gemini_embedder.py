"""
Gemini embedding provider.

Turns query text into a dense vector with GoogleGenerativeAIEmbeddings.
No retry here: an unavailable provider fails the retrieval.

Dependencies: langchain_google_genai, sitechat.configs
System role: Query embedding for similarity search
"""

import asyncio
import logging

from langchain_google_genai import GoogleGenerativeAIEmbeddings

from sitechat.configs.embedding import EmbeddingSettings
from sitechat.core.exceptions import EmbeddingUnavailableError

logger = logging.getLogger(__name__)


class GeminiEmbedder:
    """
    Query embedder bounded by a per-call timeout.

    Any provider error, timeout or empty vector raises EmbeddingUnavailableError.
    """

    def __init__(
        self,
        model: str = "models/text-embedding-004",
        output_dimensionality: int | None = None,
        timeout_seconds: float = 10.0,
        client: GoogleGenerativeAIEmbeddings | None = None,
        google_api_key: str | None = None,
    ) -> None:
        """
        Initialize embedder.

        Args:
            model: Google embedding model ID
            output_dimensionality: Reduced dimension, or None for the model default
            timeout_seconds: Upper bound for one embedding call
            client: Preconfigured embeddings client (tests inject a mock)
            google_api_key: API key; GOOGLE_API_KEY is used when omitted
        """
        self.model = model
        self._output_dimensionality = output_dimensionality
        self._timeout = timeout_seconds
        if client is None:
            kwargs = {"model": model}
            if google_api_key:
                kwargs["google_api_key"] = google_api_key
            client = GoogleGenerativeAIEmbeddings(**kwargs)
        self._client = client
        logger.info(
            f"{__name__}:__init__ - Initialized with model={model}, "
            f"output_dimensionality={output_dimensionality}"
        )

    @classmethod
    def from_settings(cls, settings: EmbeddingSettings) -> "GeminiEmbedder":
        api_key = settings.google_api_key.get_secret_value() if settings.google_api_key else None
        return cls(
            model=settings.model,
            output_dimensionality=settings.output_dimensionality,
            timeout_seconds=settings.timeout_seconds,
            google_api_key=api_key,
        )

    async def embed(self, text: str) -> list[float]:
        """
        Embed a query.

        Args:
            text: Query text

        Returns:
            list[float]: Query vector

        Raises:
            EmbeddingUnavailableError: On provider error, timeout or empty result
        """
        kwargs = {}
        if self._output_dimensionality is not None:
            kwargs["output_dimensionality"] = self._output_dimensionality

        try:
            vector = await asyncio.wait_for(
                self._client.aembed_query(text, **kwargs),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"{__name__}:embed - Timed out after {self._timeout}s")
            raise EmbeddingUnavailableError(
                f"Embedding call timed out after {self._timeout}s",
                model=self.model,
            ) from e
        except Exception as e:
            logger.error(f"{__name__}:embed - Provider error: {type(e).__name__}: {e}")
            raise EmbeddingUnavailableError(
                f"Embedding provider failed: {type(e).__name__}",
                model=self.model,
                details={"error": str(e)},
            ) from e

        if not vector:
            raise EmbeddingUnavailableError("Embedding provider returned an empty vector", model=self.model)

        return [float(value) for value in vector]
