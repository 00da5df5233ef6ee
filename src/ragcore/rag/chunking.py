"""Document chunking strategies."""

import logging
from typing import Optional

from ragcore.errors import InvalidConfigurationError

from .base import BaseChunker
from .document import Chunk, Document

logger = logging.getLogger(__name__)


def _validate(max_size: int, overlap: int, max_chunks: Optional[int]) -> None:
    if max_size <= 0:
        raise InvalidConfigurationError(f"Chunk size must be positive, got {max_size}")
    if overlap < 0 or overlap >= max_size:
        raise InvalidConfigurationError(
            f"Overlap must be between 0 and chunk size - 1, got {overlap} for size {max_size}"
        )
    if max_chunks is not None and max_chunks <= 0:
        raise InvalidConfigurationError(f"Max chunks must be positive, got {max_chunks}")


def _word_boundary_end(text: str, start: int, end: int, overlap: int) -> int:
    """Pull end back to just after the last whitespace in the window.

    The next chunk starts at end - overlap, so end never moves to or before
    start + overlap.
    """
    if text[end].isspace() or text[end - 1].isspace():
        return end
    for i in range(end - 1, start + overlap, -1):
        if text[i].isspace():
            return i + 1
    return end


def split_spans(
    text: str,
    max_size: int,
    overlap: int,
    max_chunks: Optional[int] = None,
    respect_word_boundaries: bool = False,
) -> list[tuple[int, int]]:
    """Compute (start, end) character spans of the chunks of text."""
    _validate(max_size, overlap, max_chunks)

    spans: list[tuple[int, int]] = []
    start = 0

    while start < len(text):
        if max_chunks is not None and len(spans) >= max_chunks:
            logger.warning(
                f"Text of {len(text)} characters exceeds {max_chunks} chunks; "
                f"dropping content after character {spans[-1][1]}"
            )
            break

        end = min(start + max_size, len(text))
        if respect_word_boundaries and end < len(text):
            end = _word_boundary_end(text, start, end, overlap)

        spans.append((start, end))

        # Next chunk repeats the last `overlap` characters
        start = end - overlap if end < len(text) else end

    return spans


def split_text(
    text: str,
    max_size: int,
    overlap: int,
    max_chunks: Optional[int] = None,
    respect_word_boundaries: bool = False,
) -> list[str]:
    """Split text into overlapping chunks of at most max_size characters.

    Each chunk starts `max_size - overlap` characters after the previous one
    (earlier when word boundaries are respected), so adjacent chunks share
    exactly `overlap` characters. Chunks beyond max_chunks are dropped.

    Args:
        text: Text to split
        max_size: Maximum characters per chunk
        overlap: Characters shared by consecutive chunks
        max_chunks: Optional cap on the number of chunks
        respect_word_boundaries: End chunks after whitespace where possible

    Returns:
        Chunk texts in document order

    Raises:
        InvalidConfigurationError: If the size parameters are inconsistent
    """
    return [
        text[start:end]
        for start, end in split_spans(text, max_size, overlap, max_chunks, respect_word_boundaries)
    ]


class FixedSizeChunker(BaseChunker):
    """Chunk documents into fixed-size pieces with overlap.

    Simple but effective chunking strategy that splits text into
    chunks of a specified character count.
    """

    strategy = "fixed_size"
    respect_word_boundaries = False

    def __init__(
        self,
        chunk_size: int = 1000,
        overlap: int = 200,
        max_chunks: Optional[int] = 50,
    ):
        """Initialize the chunker.

        Args:
            chunk_size: Maximum characters per chunk
            overlap: Number of characters to overlap between chunks
            max_chunks: Maximum chunks kept per document (None for no cap)
        """
        _validate(chunk_size, overlap, max_chunks)

        self.chunk_size = chunk_size
        self.overlap = overlap
        self.max_chunks = max_chunks

    def chunk(self, document: Document) -> list[Chunk]:
        """Split document into chunks carrying parent and position markers."""
        spans = split_spans(
            document.content,
            self.chunk_size,
            self.overlap,
            self.max_chunks,
            self.respect_word_boundaries,
        )
        total = len(spans)

        return [
            Chunk(
                id=f"{document.id}_chunk_{chunk_index}",
                document_id=document.id,
                chunk_index=chunk_index,
                total_chunks=total,
                content=document.content[start:end],
                metadata={
                    **document.metadata,
                    "parent_document_id": document.id,
                    "chunk_index": chunk_index,
                    "total_chunks": total,
                    "is_chunk": True,
                    "chunker": self.strategy,
                },
                start_index=start,
                end_index=end,
            )
            for chunk_index, (start, end) in enumerate(spans)
        ]


class WordBoundaryChunker(FixedSizeChunker):
    """Fixed-size chunker that prefers to end chunks after whitespace.

    Chunks may be shorter than chunk_size, but consecutive chunks still
    share exactly `overlap` characters.
    """

    strategy = "word_boundary"
    respect_word_boundaries = True
