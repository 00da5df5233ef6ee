"""Request and response models for pipeline operations."""

import math
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .document import Metadata, RetrievedDocument
from .filters import SearchFilter

DEFAULT_MAX_RESULTS = 5
MAX_RESULTS_LIMIT = 20
DEFAULT_THRESHOLD = 0.7


class QueryRequest(BaseModel):
    """A question plus retrieval settings.

    Out-of-range max_results and threshold values are reset to their
    defaults rather than rejected.
    """

    question: str
    filters: list[SearchFilter] = Field(default_factory=list)
    max_results: int = DEFAULT_MAX_RESULTS
    threshold: float = DEFAULT_THRESHOLD

    @field_validator("filters", mode="before")
    @classmethod
    def _default_filters(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("max_results", mode="before")
    @classmethod
    def _normalize_max_results(cls, value: Any) -> int:
        if isinstance(value, bool):
            return DEFAULT_MAX_RESULTS
        try:
            number = int(value)
        except (TypeError, ValueError):
            return DEFAULT_MAX_RESULTS
        return number if 1 <= number <= MAX_RESULTS_LIMIT else DEFAULT_MAX_RESULTS

    @field_validator("threshold", mode="before")
    @classmethod
    def _normalize_threshold(cls, value: Any) -> float:
        if isinstance(value, bool):
            return DEFAULT_THRESHOLD
        try:
            number = float(value)
        except (TypeError, ValueError):
            return DEFAULT_THRESHOLD
        if math.isnan(number) or not 0.0 <= number <= 1.0:
            return DEFAULT_THRESHOLD
        return number


class QueryMetadata(BaseModel):
    """How a query was resolved."""
    documents_found: int = 0
    status: Literal["success", "no_results", "error"] = "success"
    error_message: Optional[str] = None


class QueryResponse(BaseModel):
    """Synthesized answer with the sources it was grounded on."""
    answer: str
    sources: list[RetrievedDocument] = Field(default_factory=list)
    confidence: float = 0.0
    processing_time_ms: int = 0
    metadata: QueryMetadata = Field(default_factory=QueryMetadata)


class SearchResponse(BaseModel):
    """Raw retrieval results without answer synthesis."""
    documents: list[RetrievedDocument] = Field(default_factory=list)
    total_found: int = 0
    max_score: float = 0.0
    min_score: float = 0.0
    search_time_ms: int = 0


class DocumentInput(BaseModel):
    """One document in a batch indexing request."""
    id: Optional[str] = None
    content: str
    metadata: Metadata = Field(default_factory=dict)


class BatchIndexResult(BaseModel):
    """Outcome of indexing several documents independently."""
    total_documents: int
    successful_documents: int
    failed_documents: int
    document_ids: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    processing_time_ms: int = 0


class BatchDeleteResult(BaseModel):
    """Outcome of deleting several documents independently."""
    total_requested: int
    successful_deletions: int
    failed_deletions: int
    errors: list[str] = Field(default_factory=list)
    processing_time_ms: int = 0


class IndexStats(BaseModel):
    """Read-only description of the index and chunking setup.

    document_count counts stored index entries: a chunked document
    contributes one entry per chunk.
    """
    document_count: int = Field(
        default=-1,
        description="Number of stored entries (chunks count individually), -1 if unknown",
    )
    dimension: int
    similarity_metric: str = "cosine"
    store_type: str
    chunk_size: Optional[int] = None
    chunk_overlap: Optional[int] = None
    max_chunks_per_document: Optional[int] = None
