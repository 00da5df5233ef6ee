"""Vector store implementations."""

import asyncio
import json
import logging
import math
from typing import Any, Callable, Optional

from ragcore.errors import DimensionMismatchError, InvalidInputError, ProviderError

from .base import BaseVectorStore
from .document import IndexEntry, Metadata, MetadataValue, RetrievedDocument
from .filters import SearchFilter, matches_all

logger = logging.getLogger(__name__)


def _same_value(actual: Any, expected: MetadataValue) -> bool:
    """Exact, type-sensitive equality: "1" never equals "1.0" or 1."""
    return type(actual) is type(expected) and actual == expected


def cosine_similarity(a: list[float], b: list[float]) -> float:
    """Calculate cosine similarity between two vectors."""
    if len(a) != len(b):
        raise DimensionMismatchError(len(a), len(b))

    dot_product = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(x * x for x in b))

    if norm_a == 0 or norm_b == 0:
        return 0.0

    return dot_product / (norm_a * norm_b)


def _rank(
    scored: list[tuple[IndexEntry, float]],
    k: int,
    min_score: Optional[float],
) -> list[RetrievedDocument]:
    """Apply the score cutoff and keep the k best, stable on ties."""
    if min_score is not None:
        scored = [(entry, score) for entry, score in scored if score >= min_score]

    # list.sort is stable, so equal scores keep insertion order
    scored.sort(key=lambda x: x[1], reverse=True)

    return [
        RetrievedDocument(
            id=entry.id,
            content=entry.content,
            score=score,
            metadata=dict(entry.metadata),
        )
        for entry, score in scored[:k]
    ]


class MemoryVectorStore(BaseVectorStore):
    """In-memory vector store for testing and small datasets.

    Stores all vectors in memory and performs exact similarity search.
    Not suitable for large-scale production use.
    """

    store_type = "memory"

    def __init__(self) -> None:
        """Initialize the memory vector store."""
        self._entries: dict[str, IndexEntry] = {}
        self._embeddings: dict[str, list[float]] = {}
        self._dimension: Optional[int] = None

    def _check_dimension(self, vector: list[float]) -> None:
        if self._dimension is not None and len(vector) != self._dimension:
            raise DimensionMismatchError(self._dimension, len(vector))

    async def add(
        self,
        entries: list[IndexEntry],
        embeddings: list[list[float]],
    ) -> list[str]:
        """Add entries with embeddings to the store."""
        if len(entries) != len(embeddings):
            raise InvalidInputError("Number of entries must match number of embeddings")
        if not entries:
            return []

        if self._dimension is None:
            self._dimension = len(embeddings[0])
        for embedding in embeddings:
            self._check_dimension(embedding)

        ids = []
        for entry, embedding in zip(entries, embeddings):
            # Re-adding an ID moves it to the end of the insertion order
            self._entries.pop(entry.id, None)
            self._entries[entry.id] = entry
            self._embeddings[entry.id] = list(embedding)
            ids.append(entry.id)

        logger.debug(f"Added {len(ids)} entries to memory store")
        return ids

    async def search(
        self,
        query_embedding: list[float],
        k: int = 5,
        filters: Optional[list[SearchFilter]] = None,
        min_score: Optional[float] = None,
    ) -> list[RetrievedDocument]:
        """Search for similar entries using cosine similarity."""
        if k <= 0 or not self._entries:
            return []

        self._check_dimension(query_embedding)

        scored = []
        for entry_id, entry in self._entries.items():
            if not matches_all(entry.metadata, filters):
                continue
            score = cosine_similarity(query_embedding, self._embeddings[entry_id])
            scored.append((entry, score))

        return _rank(scored, k, min_score)

    async def delete(self, ids: list[str]) -> None:
        """Delete entries by their IDs."""
        for id in ids:
            self._entries.pop(id, None)
            self._embeddings.pop(id, None)

    async def delete_by_metadata(self, field: str, value: MetadataValue) -> int:
        """Delete entries whose metadata field is exactly value."""
        doomed = [
            entry_id
            for entry_id, entry in self._entries.items()
            if _same_value(entry.metadata.get(field), value)
        ]
        await self.delete(doomed)
        return len(doomed)

    async def count(self) -> int:
        """Return the number of entries."""
        return len(self._entries)


class ChromaVectorStore(BaseVectorStore):
    """ChromaDB vector store implementation.

    Uses ChromaDB for persistent vector storage.
    Requires the 'vector' extra to be installed.

    ChromaDB only stores scalar metadata, so list values are written as JSON
    strings and the names of those fields are kept under LIST_FIELDS_KEY.
    Filters run in Python over a candidate window that widens until k entries
    match or the collection is exhausted.
    """

    store_type = "chroma"
    LIST_FIELDS_KEY = "_list_fields"

    def __init__(
        self,
        collection_name: str = "documents",
        persist_directory: Optional[str] = None,
        client: Any = None,
    ):
        """Initialize the ChromaDB vector store.

        Args:
            collection_name: Name of the ChromaDB collection
            persist_directory: Directory for persistent storage (None for in-memory)
            client: Pre-built chromadb client (overrides persist_directory)
        """
        self.collection_name = collection_name
        self.persist_directory = persist_directory
        self._client = client
        self._collection = None

    def _get_client(self):
        """Get or create the ChromaDB client."""
        if self._client is None:
            try:
                import chromadb

                if self.persist_directory:
                    self._client = chromadb.PersistentClient(
                        path=self.persist_directory,
                    )
                else:
                    self._client = chromadb.Client()

            except ImportError:
                raise ImportError(
                    "ChromaDB vector store requires 'chromadb'. "
                    "Install it with: pip install 'ragcore[vector]'"
                )
        return self._client

    def _get_collection(self):
        """Get or create the collection."""
        if self._collection is None:
            client = self._get_client()

            self._collection = client.get_or_create_collection(
                name=self.collection_name,
                metadata={"hnsw:space": "cosine"},
            )
        return self._collection

    async def _run(self, operation: str, func: Callable[[Any], Any]) -> Any:
        """Run a blocking collection call in a thread, wrapping failures."""
        try:
            collection = self._get_collection()
            loop = asyncio.get_event_loop()
            return await loop.run_in_executor(None, lambda: func(collection))
        except ImportError:
            raise
        except Exception as e:
            raise ProviderError("chroma", f"{operation} failed: {e}") from e

    def _encode_metadata(self, metadata: Metadata) -> dict[str, Any]:
        encoded: dict[str, Any] = {}
        list_fields = []
        for key, value in metadata.items():
            if value is None:
                continue
            if isinstance(value, list):
                encoded[key] = json.dumps(value)
                list_fields.append(key)
            else:
                encoded[key] = value
        # Always present, so the metadata dict is never empty
        encoded[self.LIST_FIELDS_KEY] = json.dumps(list_fields)
        return encoded

    def _decode_metadata(self, metadata: Optional[dict[str, Any]]) -> Metadata:
        decoded = dict(metadata or {})
        list_fields = json.loads(decoded.pop(self.LIST_FIELDS_KEY, "[]"))
        for key in list_fields:
            if key in decoded:
                decoded[key] = json.loads(decoded[key])
        return decoded

    async def add(
        self,
        entries: list[IndexEntry],
        embeddings: list[list[float]],
    ) -> list[str]:
        """Add entries with embeddings to ChromaDB."""
        if len(entries) != len(embeddings):
            raise InvalidInputError("Number of entries must match number of embeddings")
        if not entries:
            return []

        ids = [entry.id for entry in entries]
        documents = [entry.content for entry in entries]
        metadatas = [self._encode_metadata(entry.metadata) for entry in entries]

        await self._run(
            "add",
            lambda collection: collection.upsert(
                ids=ids,
                documents=documents,
                embeddings=[list(e) for e in embeddings],
                metadatas=metadatas,
            ),
        )

        logger.debug(f"Added {len(ids)} entries to ChromaDB collection '{self.collection_name}'")
        return ids

    async def search(
        self,
        query_embedding: list[float],
        k: int = 5,
        filters: Optional[list[SearchFilter]] = None,
        min_score: Optional[float] = None,
    ) -> list[RetrievedDocument]:
        """Search for similar entries in ChromaDB."""
        if k <= 0:
            return []

        total = await self.count()
        if total == 0:
            return []

        window = min(total, k * 4 if filters else k)
        while True:
            results = await self._run(
                "search",
                lambda collection: collection.query(
                    query_embeddings=[list(query_embedding)],
                    n_results=window,
                    include=["documents", "metadatas", "distances"],
                ),
            )

            scored = []
            if results and results["ids"] and results["ids"][0]:
                for i, entry_id in enumerate(results["ids"][0]):
                    metadata = self._decode_metadata(
                        results["metadatas"][0][i] if results["metadatas"] else None
                    )
                    if not matches_all(metadata, filters):
                        continue

                    # ChromaDB returns distance, convert to similarity
                    distance = results["distances"][0][i] if results["distances"] else 0
                    entry = IndexEntry(
                        id=entry_id,
                        content=results["documents"][0][i] or "",
                        metadata=metadata,
                    )
                    scored.append((entry, 1 - distance))

            if len(scored) >= k or window >= total:
                return _rank(scored, k, min_score)
            window = min(total, window * 2)

    async def delete(self, ids: list[str]) -> None:
        """Delete entries from ChromaDB."""
        if not ids:
            return
        await self._run("delete", lambda collection: collection.delete(ids=ids))

    async def delete_by_metadata(self, field: str, value: MetadataValue) -> int:
        """Delete entries whose metadata field is exactly value."""
        results = await self._run("get", lambda collection: collection.get(include=["metadatas"]))

        doomed = [
            entry_id
            for entry_id, metadata in zip(results["ids"], results["metadatas"] or [])
            if _same_value(self._decode_metadata(metadata).get(field), value)
        ]
        await self.delete(doomed)
        return len(doomed)

    async def count(self) -> int:
        """Return the number of entries in the collection."""
        return await self._run("count", lambda collection: collection.count())
