"""Build a RAGPipeline from configuration."""

import logging
from typing import Optional

from ragcore.errors import InvalidConfigurationError
from ragcore.providers.anthropic import AnthropicProvider
from ragcore.providers.base import LLMProvider
from ragcore.providers.openai import OpenAIProvider
from ragcore.utils.config import (
    ChunkingConfig,
    EmbeddingConfig,
    GenerationConfig,
    RAGConfig,
    VectorStoreConfig,
)
from ragcore.utils.logging import set_log_level

from .base import BaseChunker, BaseEmbedding, BaseVectorStore
from .chunking import FixedSizeChunker, WordBoundaryChunker
from .embedder import Embedder
from .embeddings import FakeEmbedding, LocalEmbedding, OpenAIEmbedding
from .index import VectorIndex
from .pipeline import RAGPipeline
from .retriever import VectorRetriever
from .synthesizer import AnswerSynthesizer
from .vectorstore import ChromaVectorStore, MemoryVectorStore

logger = logging.getLogger(__name__)


def create_chunker(config: ChunkingConfig) -> BaseChunker:
    if config.strategy == "fixed":
        chunker_cls = FixedSizeChunker
    elif config.strategy == "word":
        chunker_cls = WordBoundaryChunker
    else:
        raise InvalidConfigurationError(f"Unknown chunking strategy: {config.strategy}")

    return chunker_cls(
        chunk_size=config.chunk_size,
        overlap=config.chunk_overlap,
        max_chunks=config.max_chunks_per_document,
    )


def create_embedding(config: EmbeddingConfig) -> BaseEmbedding:
    if config.provider == "openai":
        native = OpenAIEmbedding.MODEL_DIMENSIONS.get(config.model)
        return OpenAIEmbedding(
            model=config.model,
            api_key=config.api_key,
            base_url=config.base_url,
            dimensions=None if config.dimension == native else config.dimension,
        )
    elif config.provider == "local":
        return LocalEmbedding(model_name=config.model)
    elif config.provider == "fake":
        return FakeEmbedding(dimension=config.dimension)
    raise InvalidConfigurationError(f"Unknown embedding provider: {config.provider}")


def create_vectorstore(config: VectorStoreConfig) -> BaseVectorStore:
    if config.provider == "memory":
        return MemoryVectorStore()
    elif config.provider == "chroma":
        return ChromaVectorStore(
            collection_name=config.collection,
            persist_directory=config.persist_directory,
        )
    raise InvalidConfigurationError(f"Unknown vector store provider: {config.provider}")


def create_llm_provider(config: GenerationConfig) -> LLMProvider:
    if config.provider == "openai":
        return OpenAIProvider(api_key=config.api_key, base_url=config.base_url)
    elif config.provider == "anthropic":
        return AnthropicProvider(api_key=config.api_key, base_url=config.base_url)
    raise InvalidConfigurationError(f"Unknown generation provider: {config.provider}")


def create_pipeline(
    config: Optional[RAGConfig] = None,
    *,
    embedding: Optional[BaseEmbedding] = None,
    vectorstore: Optional[BaseVectorStore] = None,
    llm_provider: Optional[LLMProvider] = None,
) -> RAGPipeline:
    """
    Wire a pipeline from configuration.

    Args:
        config: Pipeline configuration (defaults when omitted)
        embedding: Embedding model to use instead of the configured one
        vectorstore: Vector store to use instead of the configured one
        llm_provider: Generation provider to use instead of the configured one

    Returns:
        A ready RAGPipeline

    Raises:
        InvalidConfigurationError: For bad chunking values or unknown providers
    """
    config = config or RAGConfig()
    set_log_level(config.log_level)

    chunker = create_chunker(config.chunking)
    embedder = Embedder(embedding or create_embedding(config.embedding), config.embedding)
    index = VectorIndex(embedder, vectorstore or create_vectorstore(config.vectorstore))
    synthesizer = AnswerSynthesizer(
        llm_provider or create_llm_provider(config.generation),
        config.generation,
    )

    logger.info(
        f"Created pipeline: embedding={embedder.provider.name}, "
        f"store={index.store.store_type}, generation={synthesizer.llm_provider.name}"
    )
    return RAGPipeline(
        retriever=VectorRetriever(embedder, index, chunker),
        synthesizer=synthesizer,
    )
