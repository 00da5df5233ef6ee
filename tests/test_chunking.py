"""Tests for text chunking."""

import pytest
from pydantic import ValidationError

from ragcore.errors import InvalidConfigurationError
from ragcore.rag import Document, FixedSizeChunker, WordBoundaryChunker, split_text
from ragcore.rag.chunking import split_spans


LOREM = (
    "Employees accrue paid leave monthly. Unused leave carries over up to a cap. "
    "Requests must be filed two weeks ahead and approved by a manager. "
    "Sick leave is tracked separately and does not expire at year end."
)


def assert_overlap(chunks: list[str], overlap: int) -> None:
    for current, following in zip(chunks, chunks[1:]):
        assert current[-overlap:] == following[:overlap]


class TestSplitText:
    """Tests for split_text."""

    def test_empty_text(self):
        assert split_text("", 10, 2) == []

    def test_short_text_single_chunk(self):
        assert split_text("short", 10, 2) == ["short"]

    def test_consecutive_chunks_share_overlap(self):
        text = "abcdefghijklmnopqrstuvwxyz" * 3
        chunks = split_text(text, 10, 3)

        assert all(len(c) <= 10 for c in chunks)
        assert_overlap(chunks, 3)
        assert chunks[1].startswith(text[7:10])

    def test_chunks_reconstruct_text(self):
        chunks = split_text(LOREM, 40, 8)
        rebuilt = chunks[0] + "".join(c[8:] for c in chunks[1:])
        assert rebuilt == LOREM

    def test_zero_overlap(self):
        assert split_text("abcdefghij", 4, 0) == ["abcd", "efgh", "ij"]

    def test_step_is_size_minus_overlap(self):
        assert split_text("abcdefghij", 4, 1) == ["abcd", "defg", "ghij"]

    def test_max_chunks_truncates_in_order(self):
        text = "x" * 50 + "y" * 50
        full = split_text(text, 10, 2)
        capped = split_text(text, 10, 2, max_chunks=3)

        assert len(full) > 3
        assert capped == full[:3]

    @pytest.mark.parametrize("size,overlap", [(0, 0), (-5, 0), (10, 10), (10, 11), (10, -1)])
    def test_invalid_configuration(self, size, overlap):
        with pytest.raises(InvalidConfigurationError):
            split_text("some text", size, overlap)

    def test_invalid_max_chunks(self):
        with pytest.raises(InvalidConfigurationError):
            split_text("some text", 5, 1, max_chunks=0)

    def test_word_boundaries_keep_overlap(self):
        chunks = split_text(LOREM, 40, 8, respect_word_boundaries=True)

        assert all(len(c) <= 40 for c in chunks)
        assert_overlap(chunks, 8)

    def test_word_boundary_spans_end_between_words(self):
        spans = split_spans(LOREM, 40, 8, respect_word_boundaries=True)

        for _, end in spans[:-1]:
            assert LOREM[end - 1].isspace() or LOREM[end].isspace()
        assert spans[-1][1] == len(LOREM)

    def test_word_boundaries_fall_back_without_spaces(self):
        text = "a" * 25
        assert split_text(text, 10, 2, respect_word_boundaries=True) == split_text(text, 10, 2)


class TestFixedSizeChunker:
    """Tests for FixedSizeChunker."""

    def test_defaults(self):
        chunker = FixedSizeChunker()
        assert chunker.chunk_size == 1000
        assert chunker.overlap == 200
        assert chunker.max_chunks == 50

    def test_rejects_bad_overlap(self):
        with pytest.raises(InvalidConfigurationError):
            FixedSizeChunker(chunk_size=100, overlap=100)

    def test_chunk_metadata(self):
        doc = Document(id="doc-1", content=LOREM, metadata={"source": "handbook"})
        chunks = FixedSizeChunker(chunk_size=60, overlap=10).chunk(doc)

        assert len(chunks) > 1
        for i, chunk in enumerate(chunks):
            assert chunk.id == f"doc-1_chunk_{i}"
            assert chunk.document_id == "doc-1"
            assert chunk.chunk_index == i
            assert chunk.total_chunks == len(chunks)
            assert chunk.content == LOREM[chunk.start_index:chunk.end_index]
            assert chunk.metadata["source"] == "handbook"
            assert chunk.metadata["parent_document_id"] == "doc-1"
            assert chunk.metadata["chunk_index"] == i
            assert chunk.metadata["total_chunks"] == len(chunks)
            assert chunk.metadata["is_chunk"] is True
            assert chunk.metadata["chunker"] == "fixed_size"

    def test_chunk_cap(self):
        doc = Document(id="doc", content="z" * 1000)
        chunks = FixedSizeChunker(chunk_size=50, overlap=10, max_chunks=4).chunk(doc)

        assert len(chunks) == 4
        assert [c.chunk_index for c in chunks] == [0, 1, 2, 3]
        assert all(c.total_chunks == 4 for c in chunks)

    def test_chunks_are_frozen(self):
        chunk = FixedSizeChunker(chunk_size=10, overlap=2).chunk(Document(id="d", content="hello world!"))[0]
        with pytest.raises(ValidationError):
            chunk.content = "changed"


class TestWordBoundaryChunker:
    """Tests for WordBoundaryChunker."""

    def test_does_not_split_words(self):
        doc = Document(id="doc", content=LOREM)
        chunks = WordBoundaryChunker(chunk_size=50, overlap=0).chunk(doc)

        words = set(LOREM.split())
        for chunk in chunks:
            for word in chunk.content.split():
                assert word in words
        assert chunks[0].metadata["chunker"] == "word_boundary"
