"""Text embedding with preprocessing, timeouts and bounded batch fan-out."""

import asyncio
import logging
import math
import re
from typing import Any, Optional

from ragcore.errors import DimensionMismatchError, InvalidInputError, ProviderError, RAGError
from ragcore.utils.config import EmbeddingConfig

from .base import BaseEmbedding
from .vectorstore import cosine_similarity

logger = logging.getLogger(__name__)

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")
_WHITESPACE = re.compile(r"\s+")

TRUNCATION_MARKER = "..."


class Embedder:
    """Turns text into vectors through an embedding provider.

    Every provider call carries the configured timeout. Batches are embedded
    one text per call, at most `max_concurrency` at a time, and fail as a
    whole if any single text fails.

    Example:
        ```python
        embedder = Embedder(FakeEmbedding(dimension=64))
        vector = await embedder.embed("Paid leave accrues monthly")
        vectors = await embedder.embed_batch(["first text", "second text"])
        ```
    """

    def __init__(
        self,
        provider: BaseEmbedding,
        config: Optional[EmbeddingConfig] = None,
    ):
        """Initialize the embedder.

        Args:
            provider: Embedding model to call
            config: Preprocessing, concurrency and timeout settings
        """
        self.provider = provider
        self.config = config or EmbeddingConfig()

    @property
    def dimension(self) -> int:
        return self.provider.dimension

    def preprocess(self, text: Optional[str]) -> str:
        """Normalize text before it is sent to the provider.

        Control characters are stripped, whitespace runs collapse to a single
        space, and text longer than max_input_chars is cut with a "..." marker.
        """
        if not text:
            return ""

        cleaned = _CONTROL_CHARS.sub("", text)
        cleaned = _WHITESPACE.sub(" ", cleaned).strip()

        limit = self.config.max_input_chars
        if len(cleaned) > limit:
            logger.warning(f"Truncating text of {len(cleaned)} characters to {limit} for embedding")
            cleaned = cleaned[:limit] + TRUNCATION_MARKER

        return cleaned

    async def embed(self, text: str) -> list[float]:
        """Embed a single text.

        Raises:
            InvalidInputError: If the text is blank after preprocessing
            ProviderError: If the provider fails, times out or returns nothing
        """
        cleaned = self.preprocess(text)
        if not cleaned:
            raise InvalidInputError("Text to embed must not be empty")

        timeout = self.config.timeout_seconds
        try:
            vector = await asyncio.wait_for(self.provider.embed_text(cleaned), timeout=timeout)
        except asyncio.TimeoutError as e:
            raise ProviderError(self.provider.name, f"embedding timed out after {timeout}s") from e
        except RAGError:
            raise
        except Exception as e:
            raise ProviderError(self.provider.name, str(e)) from e

        if not vector:
            raise ProviderError(self.provider.name, "embedding provider returned no result")

        return list(vector)

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Embed texts concurrently, returning vectors in input order.

        Waits for every call to finish; if any failed, the first failure in
        input order is raised and no vectors are returned.
        """
        if not texts:
            return []

        semaphore = asyncio.Semaphore(self.config.max_concurrency)

        async def _embed_one(text: str) -> list[float]:
            async with semaphore:
                return await self.embed(text)

        results = await asyncio.gather(
            *(_embed_one(text) for text in texts),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            logger.warning(f"Embedding batch failed: {len(failures)} of {len(texts)} texts errored")
            raise failures[0]

        return results

    def similarity(self, a: list[float], b: list[float]) -> float:
        """Cosine similarity of two vectors; 0.0 if either has zero norm."""
        if len(a) != len(b):
            raise DimensionMismatchError(len(a), len(b))
        return cosine_similarity(a, b)

    def is_valid_dimension(self, vector: list[float]) -> bool:
        """Check the vector has the provider's dimension and only finite values."""
        return len(vector) == self.dimension and all(math.isfinite(x) for x in vector)

    def model_info(self) -> dict[str, Any]:
        """Describe the embedding model in use."""
        return {
            "provider": self.provider.name,
            "model": self.provider.model_name,
            "dimension": self.dimension,
            "max_input_chars": self.config.max_input_chars,
        }
