"""
Base LLM Provider interface.
"""

from abc import ABC, abstractmethod
from typing import Any


class LLMProvider(ABC):
    """
    Abstract base class for answer generation providers.
    """

    name: str = "llm"

    @abstractmethod
    async def complete(
        self,
        messages: list[dict[str, Any]],
        *,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 4000,
        **kwargs: Any
    ) -> dict[str, Any]:
        """
        Get a completion from the LLM.

        Args:
            messages: List of messages in API format
            model: Model identifier
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            **kwargs: Additional provider-specific options

        Returns:
            Dictionary with 'message', 'usage' and 'finish_reason'
        """
        pass
