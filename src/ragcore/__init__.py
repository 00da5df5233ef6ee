"""
ragcore - retrieval-augmented generation core.

Chunks, embeds and indexes documents, retrieves the passages relevant to a
question and synthesizes a grounded answer with a confidence score.
"""

from ragcore.errors import (
    DimensionMismatchError,
    InvalidConfigurationError,
    InvalidInputError,
    ProviderError,
    RAGError,
)
from ragcore.rag import (
    DocumentInput,
    FilterOperator,
    QueryRequest,
    QueryResponse,
    RAGPipeline,
    SearchFilter,
    create_pipeline,
)
from ragcore.utils.config import RAGConfig, load_config

__version__ = "0.1.0"

__all__ = [
    "DimensionMismatchError",
    "DocumentInput",
    "FilterOperator",
    "InvalidConfigurationError",
    "InvalidInputError",
    "ProviderError",
    "QueryRequest",
    "QueryResponse",
    "RAGConfig",
    "RAGError",
    "RAGPipeline",
    "SearchFilter",
    "create_pipeline",
    "load_config",
]
