"""
LLM Providers module.
"""

from ragcore.providers.anthropic import AnthropicProvider
from ragcore.providers.base import LLMProvider
from ragcore.providers.openai import OpenAIProvider

__all__ = [
    "AnthropicProvider",
    "LLMProvider",
    "OpenAIProvider",
]
