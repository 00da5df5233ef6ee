"""Vector index: embeds text and keeps it searchable in a vector store."""

import logging
import math
import uuid
from typing import Optional

from ragcore.errors import DimensionMismatchError, InvalidInputError, ProviderError

from .base import BaseVectorStore
from .document import IndexEntry, Metadata, MetadataValue, RetrievedDocument
from .embedder import Embedder
from .filters import SearchFilter
from .responses import IndexStats

logger = logging.getLogger(__name__)


class VectorIndex:
    """Stores (vector, text, metadata) entries and searches them.

    Every vector is checked against the embedder's dimension before it
    reaches the store, so one index never mixes dimensions.
    """

    def __init__(self, embedder: Embedder, store: BaseVectorStore):
        self.embedder = embedder
        self.store = store

    def _check_vector(self, vector: list[float]) -> None:
        if len(vector) != self.embedder.dimension:
            raise DimensionMismatchError(self.embedder.dimension, len(vector))
        if not all(math.isfinite(x) for x in vector):
            raise ProviderError(self.embedder.provider.name, "embedding contains non-finite values")

    async def add(
        self,
        text: str,
        metadata: Optional[Metadata] = None,
        id: Optional[str] = None,
    ) -> str:
        """Embed and store one text; returns its ID (a new UUID unless given)."""
        entry_id = id or str(uuid.uuid4())
        vector = await self.embedder.embed(text)
        self._check_vector(vector)

        await self.store.add(
            [IndexEntry(id=entry_id, content=text, metadata=metadata or {})],
            [vector],
        )
        return entry_id

    async def add_batch(
        self,
        entries: list[tuple[str, Metadata]],
        ids: Optional[list[str]] = None,
    ) -> list[str]:
        """Embed all texts, then store every entry.

        Embedding is all-or-nothing: if any text fails, nothing is written.
        """
        if ids is not None and len(ids) != len(entries):
            raise InvalidInputError("Number of ids must match number of entries")
        if not entries:
            return []

        entry_ids = list(ids) if ids is not None else [str(uuid.uuid4()) for _ in entries]
        vectors = await self.embedder.embed_batch([text for text, _ in entries])
        for vector in vectors:
            self._check_vector(vector)

        index_entries = [
            IndexEntry(id=entry_id, content=text, metadata=metadata or {})
            for entry_id, (text, metadata) in zip(entry_ids, entries)
        ]
        await self.store.add(index_entries, vectors)
        return entry_ids

    async def delete_by_ids(self, ids: list[str]) -> None:
        """Remove entries; unknown IDs are ignored."""
        await self.store.delete(ids)

    async def delete_by_metadata(self, field: str, value: MetadataValue) -> int:
        """Remove every entry whose metadata field equals value."""
        removed = await self.store.delete_by_metadata(field, value)
        logger.debug(f"Removed {removed} entries where {field} == {value!r}")
        return removed

    async def search(
        self,
        query_vector: list[float],
        k: int = 5,
        filters: Optional[list[SearchFilter]] = None,
        min_score: Optional[float] = None,
    ) -> list[RetrievedDocument]:
        """Top-k entries passing all filters with score >= min_score."""
        self._check_vector(query_vector)
        return await self.store.search(query_vector, k, filters, min_score)

    async def stats(self) -> IndexStats:
        """Index statistics.

        document_count is the number of stored entries, so each chunk of a
        chunked document counts once; -1 if the store cannot tell.
        """
        return IndexStats(
            document_count=await self.store.count(),
            dimension=self.embedder.dimension,
            similarity_metric="cosine",
            store_type=self.store.store_type,
        )
