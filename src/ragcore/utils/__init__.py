"""
Utility modules.
"""

from ragcore.utils.config import (
    ChunkingConfig,
    Config,
    EmbeddingConfig,
    GenerationConfig,
    RAGConfig,
    VectorStoreConfig,
    load_config,
)
from ragcore.utils.logging import get_logger, set_log_level

__all__ = [
    "ChunkingConfig",
    "Config",
    "EmbeddingConfig",
    "GenerationConfig",
    "RAGConfig",
    "VectorStoreConfig",
    "get_logger",
    "load_config",
    "set_log_level",
]
