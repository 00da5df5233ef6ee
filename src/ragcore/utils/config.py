"""
Configuration utilities.
"""

import json
from pathlib import Path

import yaml

from pydantic import BaseModel, Field


class Config(BaseModel):
    """Base configuration class."""

    @classmethod
    def from_yaml(cls, path: Path) -> "Config":
        """Load configuration from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls(**(data or {}))

    @classmethod
    def from_file(cls, path: str | Path) -> "Config":
        """Load configuration from file (YAML or JSON)."""
        path = Path(path)

        if path.suffix in (".yaml", ".yml"):
            return cls.from_yaml(path)
        elif path.suffix == ".json":
            with open(path) as f:
                data = json.load(f)
            return cls(**data)
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")


class ChunkingConfig(BaseModel):
    """How long documents are split before indexing."""
    chunk_size: int = 1000
    chunk_overlap: int = 200
    max_chunks_per_document: int = 50
    strategy: str = "fixed"


class EmbeddingConfig(BaseModel):
    """Embedding provider settings."""
    provider: str = "openai"
    model: str = "text-embedding-3-small"
    dimension: int = 1536
    max_input_chars: int = 30000
    max_concurrency: int = 8
    timeout_seconds: float = 120.0
    api_key: str | None = None
    base_url: str | None = None


class VectorStoreConfig(BaseModel):
    """Vector store settings."""
    provider: str = "memory"
    collection: str = "documents"
    persist_directory: str | None = None


class GenerationConfig(BaseModel):
    """Answer generation settings."""
    provider: str = "openai"
    model: str = "gpt-4o-mini"
    temperature: float = 0.7
    max_tokens: int = 4000
    timeout_seconds: float = 300.0
    api_key: str | None = None
    base_url: str | None = None


class RAGConfig(Config):
    """Configuration for a RAG pipeline."""
    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
    embedding: EmbeddingConfig = Field(default_factory=EmbeddingConfig)
    vectorstore: VectorStoreConfig = Field(default_factory=VectorStoreConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    log_level: str = "INFO"


def load_config(path: str | Path = "ragcore.yaml") -> RAGConfig:
    """
    Load pipeline configuration from file.

    Args:
        path: Path to config file

    Returns:
        RAGConfig instance
    """
    path = Path(path)

    if not path.exists():
        return RAGConfig()

    return RAGConfig.from_file(path)
