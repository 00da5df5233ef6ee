"""Document, Chunk and index entry data structures."""

from datetime import datetime, timezone
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

MetadataValue = Union[str, int, float, bool, list[str]]
Metadata = dict[str, MetadataValue]


class Document(BaseModel):
    """A document to be indexed and retrieved.

    Attributes:
        id: Unique identifier for the document
        content: The text content of the document
        metadata: Additional metadata about the document
        created_at: When the document was created (UTC)
    """

    id: str
    content: str
    metadata: Metadata = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def __repr__(self) -> str:
        content_preview = self.content[:50] + "..." if len(self.content) > 50 else self.content
        return f"Document(id={self.id!r}, content={content_preview!r})"


class Chunk(BaseModel):
    """A chunk of a document.

    Chunks are created transiently during indexing and are never mutated;
    the index stores them as independent searchable entries.

    Attributes:
        id: Unique identifier for the chunk
        document_id: ID of the parent document
        chunk_index: Zero-based position within the parent
        total_chunks: Number of chunks the parent was split into
        content: The text content of the chunk
        metadata: Parent metadata plus chunk markers
        start_index: Start character index in the original document
        end_index: End character index in the original document
    """

    model_config = ConfigDict(frozen=True)

    id: str
    document_id: str
    chunk_index: int
    total_chunks: int
    content: str
    metadata: Metadata = Field(default_factory=dict)
    start_index: int = 0
    end_index: int = 0

    def __repr__(self) -> str:
        content_preview = self.content[:30] + "..." if len(self.content) > 30 else self.content
        return f"Chunk(id={self.id!r}, doc_id={self.document_id!r}, content={content_preview!r})"


class IndexEntry(BaseModel):
    """A unit of text written to a vector store."""

    id: str
    content: str
    metadata: Metadata = Field(default_factory=dict)


class RetrievedDocument(BaseModel):
    """A search hit.

    Attributes:
        id: ID of the stored entry (a document or one of its chunks)
        content: Stored text
        score: Similarity score (higher is better)
        metadata: Stored metadata
    """

    id: str
    content: str
    score: float
    metadata: Metadata = Field(default_factory=dict)

    def __repr__(self) -> str:
        return f"RetrievedDocument(id={self.id!r}, score={self.score:.4f})"
