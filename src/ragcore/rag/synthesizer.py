"""Answer synthesis from retrieved passages."""

import asyncio
import logging
from typing import Optional

from ragcore.core.message import Message
from ragcore.errors import ProviderError, RAGError
from ragcore.providers.base import LLMProvider
from ragcore.utils.config import GenerationConfig

from .document import RetrievedDocument

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """You are a helpful AI assistant. Answer the user's question based on the provided context documents. If the context doesn't contain enough information to answer the question, say so clearly. Be concise but comprehensive in your response.

Context Documents:
{context}

User Question: {question}

Please provide a clear, accurate answer based on the context documents above:"""


class AnswerSynthesizer:
    """Builds a grounded prompt and asks an LLM to answer from it."""

    def __init__(
        self,
        llm_provider: LLMProvider,
        config: Optional[GenerationConfig] = None,
    ):
        """Initialize the synthesizer.

        Args:
            llm_provider: Provider used for generation
            config: Model, sampling and timeout settings
        """
        self.llm_provider = llm_provider
        self.config = config or GenerationConfig()

    def build_context(self, documents: list[RetrievedDocument]) -> str:
        """Render documents, in order, as numbered context blocks."""
        parts = []
        for i, doc in enumerate(documents, start=1):
            block = f"Document {i}:\n"
            if doc.metadata.get("title"):
                block += f"Title: {doc.metadata['title']}\n"
            if doc.metadata.get("source"):
                block += f"Source: {doc.metadata['source']}\n"
            block += f"Content: {doc.content}\n"
            block += f"Relevance Score: {doc.score:.3f}\n\n"
            parts.append(block)
        return "".join(parts)

    def build_prompt(self, question: str, documents: list[RetrievedDocument]) -> str:
        return PROMPT_TEMPLATE.format(context=self.build_context(documents), question=question)

    async def generate_answer(self, question: str, documents: list[RetrievedDocument]) -> str:
        """Generate an answer grounded on the documents.

        Raises:
            ProviderError: If generation fails, times out or returns no content
        """
        prompt = self.build_prompt(question, documents)
        name = self.llm_provider.name
        timeout = self.config.timeout_seconds

        try:
            response = await asyncio.wait_for(
                self.llm_provider.complete(
                    messages=[Message.user(prompt).to_api_format()],
                    model=self.config.model,
                    temperature=self.config.temperature,
                    max_tokens=self.config.max_tokens,
                ),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            raise ProviderError(name, f"generation timed out after {timeout}s") from e
        except RAGError:
            raise
        except Exception as e:
            raise ProviderError(name, str(e)) from e

        message = response.get("message") if response else None
        content = message.content if message else None
        if not content or not content.strip():
            raise ProviderError(name, "generation provider returned no content")

        logger.debug(f"Generated answer of {len(content)} characters from {len(documents)} documents")
        return content

    @staticmethod
    def calculate_confidence(documents: list[RetrievedDocument]) -> float:
        """Mean score of the top three documents, clamped to [0, 1]."""
        if not documents:
            return 0.0
        top = [doc.score for doc in documents[:3]]
        average = sum(top) / len(top)
        return max(0.0, min(1.0, average))
