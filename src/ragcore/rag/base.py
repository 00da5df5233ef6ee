"""Base classes and abstract interfaces for RAG components."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .document import Chunk, Document, IndexEntry, MetadataValue, RetrievedDocument
    from .filters import SearchFilter


class BaseEmbedding(ABC):
    """Abstract base class for embedding models.

    Embedding models convert text into dense vector representations.
    """

    name: str = "embedding"

    @abstractmethod
    async def embed_text(self, text: str) -> list[float]:
        """Embed a single piece of text.

        Args:
            text: Text to embed (already preprocessed)

        Returns:
            Embedding vector
        """
        pass

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Return the dimension of the embedding vectors."""
        pass

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Return the identifier of the underlying model."""
        pass


class BaseVectorStore(ABC):
    """Abstract base class for vector stores.

    Vector stores persist and search entry embeddings. Filters are evaluated
    with `ragcore.rag.filters` so every store agrees on which entries match.
    """

    store_type: str = "unknown"

    @abstractmethod
    async def add(
        self,
        entries: list["IndexEntry"],
        embeddings: list[list[float]],
    ) -> list[str]:
        """Add entries with their embeddings to the store.

        Args:
            entries: Entries to add; an existing ID is overwritten
            embeddings: Corresponding embedding vectors

        Returns:
            List of added entry IDs
        """
        pass

    @abstractmethod
    async def search(
        self,
        query_embedding: list[float],
        k: int = 5,
        filters: Optional[list["SearchFilter"]] = None,
        min_score: Optional[float] = None,
    ) -> list["RetrievedDocument"]:
        """Search for similar entries.

        Args:
            query_embedding: Query embedding vector
            k: Maximum number of results to return
            filters: Metadata filters, all of which must match
            min_score: Minimum similarity score to include

        Returns:
            Results in descending score order, ties in insertion order
        """
        pass

    @abstractmethod
    async def delete(self, ids: list[str]) -> None:
        """Delete entries by their IDs. Unknown IDs are ignored."""
        pass

    @abstractmethod
    async def delete_by_metadata(self, field: str, value: "MetadataValue") -> int:
        """Delete every entry whose metadata field is exactly value.

        Unlike an EQUALS filter, no numeric coercion applies, so IDs such
        as "1" and "1.0" stay distinct.

        Returns:
            Number of entries removed
        """
        pass

    async def count(self) -> int:
        """Return the number of entries in the store, or -1 if unknown."""
        return -1


class BaseChunker(ABC):
    """Abstract base class for document chunkers.

    Chunkers split documents into smaller pieces for indexing.
    """

    chunk_size: int
    overlap: int
    max_chunks: Optional[int]

    @abstractmethod
    def chunk(self, document: "Document") -> list["Chunk"]:
        """Split a document into chunks.

        Args:
            document: Document to chunk

        Returns:
            List of chunks
        """
        pass
