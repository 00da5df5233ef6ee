"""RAG (Retrieval-Augmented Generation) pipeline.

This module provides:
- Document, chunk and search result data structures
- Chunking with a fixed overlap (character or word-boundary based)
- Embedding providers (OpenAI, local, fake) behind a batching Embedder
- Vector stores (memory, ChromaDB) with typed metadata filters
- A retriever, an answer synthesizer and the pipeline tying them together

Example:
    ```python
    from ragcore.rag import create_pipeline
    from ragcore.utils.config import RAGConfig

    pipeline = create_pipeline(RAGConfig())

    doc_id = await pipeline.index_document(
        "Paid leave accrues at 1 day per 30 days worked.",
        {"source": "policy-42"},
    )
    response = await pipeline.query("How does leave accrue?", threshold=0.0)
    print(response.answer, response.confidence)
    ```
"""

# Data structures
from .document import Chunk, Document, IndexEntry, Metadata, MetadataValue, RetrievedDocument
from .filters import FilterOperator, SearchFilter, matches, matches_all
from .responses import (
    BatchDeleteResult,
    BatchIndexResult,
    DocumentInput,
    IndexStats,
    QueryMetadata,
    QueryRequest,
    QueryResponse,
    SearchResponse,
)

# Base classes
from .base import BaseChunker, BaseEmbedding, BaseVectorStore

# Chunking
from .chunking import FixedSizeChunker, WordBoundaryChunker, split_text

# Embeddings
from .embedder import Embedder
from .embeddings import FakeEmbedding, LocalEmbedding, OpenAIEmbedding

# Vector stores
from .index import VectorIndex
from .vectorstore import ChromaVectorStore, MemoryVectorStore, cosine_similarity

# Retrieval and generation
from .retriever import VectorRetriever
from .synthesizer import AnswerSynthesizer

# Pipeline
from .factory import create_pipeline
from .pipeline import ERROR_ANSWER, NO_RESULTS_ANSWER, RAGPipeline

__all__ = [
    # Data structures
    "Chunk",
    "Document",
    "IndexEntry",
    "Metadata",
    "MetadataValue",
    "RetrievedDocument",
    "FilterOperator",
    "SearchFilter",
    "matches",
    "matches_all",
    "BatchDeleteResult",
    "BatchIndexResult",
    "DocumentInput",
    "IndexStats",
    "QueryMetadata",
    "QueryRequest",
    "QueryResponse",
    "SearchResponse",
    # Base classes
    "BaseChunker",
    "BaseEmbedding",
    "BaseVectorStore",
    # Chunking
    "FixedSizeChunker",
    "WordBoundaryChunker",
    "split_text",
    # Embeddings
    "Embedder",
    "FakeEmbedding",
    "LocalEmbedding",
    "OpenAIEmbedding",
    # Vector stores
    "VectorIndex",
    "ChromaVectorStore",
    "MemoryVectorStore",
    "cosine_similarity",
    # Retrieval and generation
    "VectorRetriever",
    "AnswerSynthesizer",
    # Pipeline
    "create_pipeline",
    "ERROR_ANSWER",
    "NO_RESULTS_ANSWER",
    "RAGPipeline",
]
