"""Tests for configuration loading, logging setup and pipeline wiring."""

import json
import logging

import pytest

from ragcore.errors import InvalidConfigurationError
from ragcore.rag import (
    ChromaVectorStore,
    FakeEmbedding,
    LocalEmbedding,
    MemoryVectorStore,
    OpenAIEmbedding,
    RAGPipeline,
    WordBoundaryChunker,
    create_pipeline,
)
from ragcore.rag.factory import create_embedding, create_llm_provider, create_vectorstore
from ragcore.providers import AnthropicProvider, OpenAIProvider
from ragcore.utils.config import (
    EmbeddingConfig,
    GenerationConfig,
    RAGConfig,
    VectorStoreConfig,
    load_config,
)
from ragcore.utils.logging import get_logger, set_log_level

from conftest import EchoLLMProvider


class TestRAGConfig:
    """Tests for RAGConfig defaults and file loading."""

    def test_defaults(self):
        config = RAGConfig()

        assert config.chunking.chunk_size == 1000
        assert config.chunking.chunk_overlap == 200
        assert config.chunking.max_chunks_per_document == 50
        assert config.embedding.dimension == 1536
        assert config.embedding.max_input_chars == 30000
        assert config.embedding.timeout_seconds == 120.0
        assert config.generation.temperature == 0.7
        assert config.generation.max_tokens == 4000
        assert config.generation.timeout_seconds == 300.0
        assert config.vectorstore.provider == "memory"

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "ragcore.yaml"
        path.write_text(
            "chunking:\n"
            "  chunk_size: 500\n"
            "  chunk_overlap: 50\n"
            "  strategy: word\n"
            "embedding:\n"
            "  provider: fake\n"
            "  dimension: 64\n"
            "log_level: DEBUG\n"
        )

        config = load_config(path)

        assert config.chunking.chunk_size == 500
        assert config.chunking.strategy == "word"
        assert config.embedding.provider == "fake"
        assert config.embedding.dimension == 64
        assert config.log_level == "DEBUG"

    def test_load_json(self, tmp_path):
        path = tmp_path / "ragcore.json"
        path.write_text(json.dumps({"generation": {"provider": "anthropic", "model": "claude"}}))

        config = load_config(path)

        assert config.generation.provider == "anthropic"
        assert config.generation.model == "claude"

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("")

        assert load_config(path) == RAGConfig()

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "absent.yaml") == RAGConfig()

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "ragcore.toml"
        path.write_text("")

        with pytest.raises(ValueError, match="Unsupported"):
            load_config(path)


class TestLogging:
    """Tests for logging helpers."""

    def test_set_log_level(self):
        set_log_level("debug")
        assert logging.getLogger("ragcore").level == logging.DEBUG

        set_log_level(logging.WARNING)
        assert logging.getLogger("ragcore").level == logging.WARNING

    def test_get_logger_adds_single_handler(self):
        logger = get_logger("ragcore.test-handler")
        get_logger("ragcore.test-handler")

        assert len(logger.handlers) == 1


class TestFactory:
    """Tests for wiring components from configuration."""

    def test_create_pipeline(self):
        config = RAGConfig(
            chunking={"chunk_size": 300, "chunk_overlap": 30, "strategy": "word"},
            embedding={"provider": "fake", "dimension": 32},
        )

        pipeline = create_pipeline(config, llm_provider=EchoLLMProvider())

        assert isinstance(pipeline, RAGPipeline)
        assert isinstance(pipeline.retriever.chunker, WordBoundaryChunker)
        assert pipeline.retriever.chunker.chunk_size == 300
        assert isinstance(pipeline.retriever.embedder.provider, FakeEmbedding)
        assert pipeline.retriever.embedder.dimension == 32
        assert isinstance(pipeline.retriever.index.store, MemoryVectorStore)

    @pytest.mark.asyncio
    async def test_created_pipeline_answers(self):
        config = RAGConfig(embedding={"provider": "fake", "dimension": 128})
        pipeline = create_pipeline(config, llm_provider=EchoLLMProvider())

        await pipeline.index_document("Paid leave accrues at 1 day per 30 days worked.")
        response = await pipeline.query("How does leave accrue?", threshold=0.0)

        assert response.metadata.status == "success"

    def test_invalid_chunking(self):
        config = RAGConfig(chunking={"chunk_size": 100, "chunk_overlap": 100}, embedding={"provider": "fake"})

        with pytest.raises(InvalidConfigurationError):
            create_pipeline(config, llm_provider=EchoLLMProvider())

    def test_unknown_strategy(self):
        config = RAGConfig(chunking={"strategy": "semantic"}, embedding={"provider": "fake"})

        with pytest.raises(InvalidConfigurationError):
            create_pipeline(config, llm_provider=EchoLLMProvider())

    def test_embedding_providers(self):
        assert isinstance(create_embedding(EmbeddingConfig(provider="fake")), FakeEmbedding)
        assert isinstance(create_embedding(EmbeddingConfig(provider="local", model="all-MiniLM-L6-v2")), LocalEmbedding)

        openai_embedding = create_embedding(EmbeddingConfig(provider="openai"))
        assert isinstance(openai_embedding, OpenAIEmbedding)
        assert openai_embedding.dimensions is None
        assert openai_embedding.dimension == 1536

        shortened = create_embedding(EmbeddingConfig(provider="openai", dimension=256))
        assert shortened.dimension == 256

        with pytest.raises(InvalidConfigurationError):
            create_embedding(EmbeddingConfig(provider="nope"))

    def test_vectorstores(self):
        assert isinstance(create_vectorstore(VectorStoreConfig()), MemoryVectorStore)

        chroma = create_vectorstore(VectorStoreConfig(provider="chroma", collection="kb"))
        assert isinstance(chroma, ChromaVectorStore)
        assert chroma.collection_name == "kb"

        with pytest.raises(InvalidConfigurationError):
            create_vectorstore(VectorStoreConfig(provider="nope"))

    def test_llm_providers(self):
        assert isinstance(create_llm_provider(GenerationConfig(provider="openai")), OpenAIProvider)
        assert isinstance(create_llm_provider(GenerationConfig(provider="anthropic")), AnthropicProvider)

        with pytest.raises(InvalidConfigurationError):
            create_llm_provider(GenerationConfig(provider="nope"))
