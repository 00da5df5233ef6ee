"""Retriever: indexes documents and finds passages relevant to a query."""

import logging
import time
import uuid
from typing import Optional

from ragcore.errors import InvalidInputError

from .base import BaseChunker
from .chunking import FixedSizeChunker
from .document import Document, Metadata, RetrievedDocument
from .embedder import Embedder
from .filters import SearchFilter
from .index import VectorIndex

logger = logging.getLogger(__name__)


class VectorRetriever:
    """Vector similarity retriever.

    Documents no longer than the chunker's chunk_size are stored as a single
    entry under the document ID. Longer documents are split, and each chunk
    is stored as `{document_id}_chunk_{i}` with its parent recorded in
    `parent_document_id`. Failures propagate to the caller unchanged.
    """

    def __init__(
        self,
        embedder: Embedder,
        index: VectorIndex,
        chunker: Optional[BaseChunker] = None,
    ):
        """Initialize the vector retriever.

        Args:
            embedder: Embedder used for queries
            index: Index holding documents and chunks
            chunker: Chunker for long documents (default: FixedSizeChunker)
        """
        self.embedder = embedder
        self.index = index
        self.chunker = chunker or FixedSizeChunker()

    async def index_document(
        self,
        text: str,
        metadata: Optional[Metadata] = None,
        document_id: Optional[str] = None,
    ) -> str:
        """Index a document, chunking it when it exceeds the chunk size.

        Args:
            text: Document text
            metadata: Caller metadata, copied onto every stored entry
            document_id: ID to use (a new UUID when omitted). Any entries
                previously indexed under this ID are removed first.

        Returns:
            The document ID
        """
        if not text or not text.strip():
            raise InvalidInputError("Document content must not be empty")

        if document_id:
            # Re-indexing replaces the whole previous version, chunks included
            await self.delete_document(document_id)
        else:
            document_id = str(uuid.uuid4())

        enriched = {
            **(metadata or {}),
            "document_id": document_id,
            "indexed_at": int(time.time() * 1000),
        }

        if len(text) <= self.chunker.chunk_size:
            await self.index.add(text, enriched, id=document_id)
            logger.debug(f"Indexed document {document_id} as a single entry")
            return document_id

        document = Document(id=document_id, content=text, metadata=enriched)
        chunks = self.chunker.chunk(document)

        await self.index.add_batch(
            [(chunk.content, chunk.metadata) for chunk in chunks],
            ids=[chunk.id for chunk in chunks],
        )
        logger.debug(f"Indexed document {document_id} as {len(chunks)} chunks")
        return document_id

    async def search_documents(
        self,
        query: str,
        k: int = 5,
        filters: Optional[list[SearchFilter]] = None,
        threshold: Optional[float] = None,
    ) -> list[RetrievedDocument]:
        """Embed the query and return the best matching entries."""
        query_vector = await self.embedder.embed(query)
        return await self.index.search(query_vector, k, filters, threshold)

    async def delete_document(self, document_id: str) -> None:
        """Delete a document and every chunk created from it."""
        await self.index.delete_by_ids([document_id])
        removed = await self.index.delete_by_metadata("parent_document_id", document_id)
        logger.debug(f"Deleted document {document_id} ({removed} chunks)")
