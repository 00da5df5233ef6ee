"""RAG pipeline: the entry point for indexing and question answering."""

import logging
import time
from typing import Optional

from ragcore.errors import InvalidInputError

from .document import Metadata
from .filters import SearchFilter
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
from .retriever import VectorRetriever
from .synthesizer import AnswerSynthesizer

logger = logging.getLogger(__name__)

NO_RESULTS_ANSWER = (
    "I couldn't find any relevant documents to answer your question. "
    "Please try rephrasing your question or check if the relevant documents "
    "are available in the knowledge base."
)
ERROR_ANSWER = "I encountered an error while processing your question. Please try again later."


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class RAGPipeline:
    """Complete RAG (Retrieval-Augmented Generation) pipeline.

    Queries never raise: any failure while retrieving, synthesizing or
    scoring becomes an apologetic answer with no sources and zero
    confidence. Single-document index and delete calls raise on failure;
    their batch variants record each failure and carry on.

    Example:
        ```python
        embedder = Embedder(FakeEmbedding(dimension=256))
        index = VectorIndex(embedder, MemoryVectorStore())
        pipeline = RAGPipeline(
            retriever=VectorRetriever(embedder, index),
            synthesizer=AnswerSynthesizer(OpenAIProvider()),
        )

        await pipeline.index_document("Paid leave accrues monthly.", {"source": "hr"})
        response = await pipeline.query("How does leave accrue?", threshold=0.0)
        ```
    """

    def __init__(
        self,
        retriever: VectorRetriever,
        synthesizer: AnswerSynthesizer,
    ):
        """Initialize the RAG pipeline.

        Args:
            retriever: Retriever for indexing and finding relevant documents
            synthesizer: Synthesizer that turns documents into an answer
        """
        self.retriever = retriever
        self.synthesizer = synthesizer

    async def index_document(self, text: str, metadata: Optional[Metadata] = None) -> str:
        """Index one document and return its ID. Failures are raised."""
        document_id = await self.retriever.index_document(text, metadata)
        logger.info(f"Indexed document {document_id}")
        return document_id

    async def index_documents_batch(self, documents: list[DocumentInput]) -> BatchIndexResult:
        """Index documents one by one, collecting failures instead of raising."""
        start = time.perf_counter()
        document_ids: list[str] = []
        errors: list[str] = []

        for document in documents:
            try:
                document_id = await self.retriever.index_document(
                    document.content,
                    document.metadata,
                    document_id=document.id,
                )
                document_ids.append(document_id)
            except Exception as e:
                error = f"Failed to index document {document.id or 'unknown'}: {e}"
                logger.warning(error)
                errors.append(error)

        logger.info(f"Batch indexed {len(document_ids)} of {len(documents)} documents")
        return BatchIndexResult(
            total_documents=len(documents),
            successful_documents=len(document_ids),
            failed_documents=len(errors),
            document_ids=document_ids,
            errors=errors,
            processing_time_ms=_elapsed_ms(start),
        )

    async def delete_document(self, document_id: str) -> None:
        """Delete a document and its chunks. Failures are raised."""
        if not document_id or not document_id.strip():
            raise InvalidInputError("Document ID must not be empty")
        await self.retriever.delete_document(document_id)
        logger.info(f"Deleted document {document_id}")

    async def delete_documents_batch(self, document_ids: list[str]) -> BatchDeleteResult:
        """Delete documents one by one, collecting failures instead of raising."""
        start = time.perf_counter()
        deleted = 0
        errors: list[str] = []

        for document_id in document_ids:
            try:
                await self.delete_document(document_id)
                deleted += 1
            except Exception as e:
                error = f"Failed to delete document {document_id}: {e}"
                logger.warning(error)
                errors.append(error)

        return BatchDeleteResult(
            total_requested=len(document_ids),
            successful_deletions=deleted,
            failed_deletions=len(errors),
            errors=errors,
            processing_time_ms=_elapsed_ms(start),
        )

    async def query(
        self,
        question: str,
        filters: Optional[list[SearchFilter]] = None,
        max_results: Optional[int] = None,
        threshold: Optional[float] = None,
    ) -> QueryResponse:
        """Answer a question from the indexed documents.

        max_results outside 1..20 falls back to 5 and threshold outside
        [0, 1] falls back to 0.7.
        """
        request = QueryRequest(
            question=question or "",
            filters=filters,
            max_results=max_results,
            threshold=threshold,
        )
        return await self.process_query(request)

    async def process_query(self, request: QueryRequest) -> QueryResponse:
        """Retrieve, synthesize and score; never raises."""
        start = time.perf_counter()

        try:
            documents = await self.retriever.search_documents(
                request.question,
                request.max_results,
                request.filters,
                request.threshold,
            )

            if not documents:
                logger.info("No relevant documents found for query")
                return QueryResponse(
                    answer=NO_RESULTS_ANSWER,
                    sources=[],
                    confidence=0.0,
                    processing_time_ms=_elapsed_ms(start),
                    metadata=QueryMetadata(documents_found=0, status="no_results"),
                )

            answer = await self.synthesizer.generate_answer(request.question, documents)
            confidence = self.synthesizer.calculate_confidence(documents)

            return QueryResponse(
                answer=answer,
                sources=documents,
                confidence=confidence,
                processing_time_ms=_elapsed_ms(start),
                metadata=QueryMetadata(documents_found=len(documents), status="success"),
            )

        except Exception as e:
            logger.exception(f"Query failed, returning degraded answer: {e}")
            return QueryResponse(
                answer=ERROR_ANSWER,
                sources=[],
                confidence=0.0,
                processing_time_ms=_elapsed_ms(start),
                metadata=QueryMetadata(documents_found=0, status="error", error_message=str(e)),
            )

    async def search(
        self,
        question: str,
        filters: Optional[list[SearchFilter]] = None,
        max_results: Optional[int] = None,
        threshold: Optional[float] = None,
    ) -> SearchResponse:
        """Run retrieval only. Failures are raised."""
        start = time.perf_counter()
        request = QueryRequest(
            question=question,
            filters=filters,
            max_results=max_results,
            threshold=threshold,
        )

        documents = await self.retriever.search_documents(
            request.question,
            request.max_results,
            request.filters,
            request.threshold,
        )
        scores = [doc.score for doc in documents]

        return SearchResponse(
            documents=documents,
            total_found=len(documents),
            max_score=max(scores, default=0.0),
            min_score=min(scores, default=0.0),
            search_time_ms=_elapsed_ms(start),
        )

    async def get_stats(self) -> IndexStats:
        """Describe the index and the chunking settings."""
        stats = await self.retriever.index.stats()
        chunker = self.retriever.chunker
        return stats.model_copy(update={
            "chunk_size": chunker.chunk_size,
            "chunk_overlap": chunker.overlap,
            "max_chunks_per_document": chunker.max_chunks,
        })
