"""
RAG pipeline exceptions.
"""


class RAGError(Exception):
    """Base exception for RAG pipeline errors."""

    def __init__(self, message: str, code: str = "RAG_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class InvalidInputError(RAGError, ValueError):
    """Raised for empty or malformed text and request fields."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, code="INVALID_INPUT")


class InvalidConfigurationError(RAGError, ValueError):
    """Raised when chunking or pipeline settings are inconsistent."""

    def __init__(self, message: str = "Invalid configuration"):
        super().__init__(message, code="INVALID_CONFIGURATION")


class DimensionMismatchError(RAGError, ValueError):
    """Raised when vector lengths disagree."""

    def __init__(self, expected: int, actual: int, message: str | None = None):
        self.expected = expected
        self.actual = actual
        super().__init__(
            message or f"Vector dimension mismatch: expected {expected}, got {actual}",
            code="DIMENSION_MISMATCH",
        )


class ProviderError(RAGError):
    """Raised when an embedding, generation or index provider fails."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"Provider '{provider}' failed: {message}", code="PROVIDER_FAILURE")
