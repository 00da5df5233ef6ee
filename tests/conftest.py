"""
Test configuration and fixtures.
"""

import asyncio
from typing import Any

import pytest

from ragcore.core.message import Message
from ragcore.providers.base import LLMProvider
from ragcore.rag import (
    AnswerSynthesizer,
    BaseEmbedding,
    Embedder,
    FakeEmbedding,
    FixedSizeChunker,
    MemoryVectorStore,
    RAGPipeline,
    VectorIndex,
    VectorRetriever,
)
from ragcore.utils.config import EmbeddingConfig, GenerationConfig

DIMENSION = 256


class EchoLLMProvider(LLMProvider):
    """Answers by repeating the Content lines of the prompt."""

    name = "echo"

    def __init__(self):
        self.calls: list[dict[str, Any]] = []

    async def complete(self, messages, *, model, temperature=0.7, max_tokens=4000, **kwargs):
        self.calls.append({
            "messages": messages,
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        prompt = messages[-1]["content"]
        contents = [
            line[len("Content: "):]
            for line in prompt.splitlines()
            if line.startswith("Content: ")
        ]
        return {
            "message": Message.assistant("According to the context: " + " ".join(contents)),
            "usage": {},
            "finish_reason": "stop",
        }


class FailingLLMProvider(LLMProvider):
    name = "failing"

    async def complete(self, messages, *, model, temperature=0.7, max_tokens=4000, **kwargs):
        raise RuntimeError("generation backend down")


class EmptyLLMProvider(LLMProvider):
    name = "empty"

    async def complete(self, messages, *, model, temperature=0.7, max_tokens=4000, **kwargs):
        return {"message": None, "usage": {}, "finish_reason": "stop"}


class SlowLLMProvider(LLMProvider):
    name = "slow"

    async def complete(self, messages, *, model, temperature=0.7, max_tokens=4000, **kwargs):
        await asyncio.sleep(5)
        return {"message": Message.assistant("too late")}


class FlakyEmbedding(FakeEmbedding):
    """Fake embedding that fails for any text containing 'explode'."""

    name = "flaky"

    def __init__(self, dimension: int = DIMENSION):
        super().__init__(dimension=dimension)
        self.calls: list[str] = []

    async def embed_text(self, text: str) -> list[float]:
        self.calls.append(text)
        if "explode" in text:
            raise RuntimeError(f"cannot embed {text!r}")
        return await super().embed_text(text)


class FixedEmbedding(BaseEmbedding):
    """Returns pre-registered vectors, for exact score control."""

    name = "fixed"

    def __init__(self, vectors: dict[str, list[float]], dimension: int = 3):
        self.vectors = vectors
        self._dimension = dimension

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def model_name(self) -> str:
        return "fixed"

    async def embed_text(self, text: str) -> list[float]:
        return self.vectors[text]


@pytest.fixture
def embedder():
    """Embedder over a deterministic fake model."""
    return Embedder(FakeEmbedding(dimension=DIMENSION), EmbeddingConfig(provider="fake", dimension=DIMENSION))


@pytest.fixture
def store():
    return MemoryVectorStore()


@pytest.fixture
def index(embedder, store):
    return VectorIndex(embedder, store)


@pytest.fixture
def retriever(embedder, index):
    """Retriever with small chunks so tests can exercise chunking."""
    return VectorRetriever(embedder, index, FixedSizeChunker(chunk_size=100, overlap=20, max_chunks=10))


@pytest.fixture
def echo_llm():
    return EchoLLMProvider()


@pytest.fixture
def pipeline(retriever, echo_llm):
    """Pipeline wired with in-memory components and an echoing LLM."""
    return RAGPipeline(
        retriever=retriever,
        synthesizer=AnswerSynthesizer(echo_llm, GenerationConfig(model="echo-model")),
    )
