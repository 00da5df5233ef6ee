"""
Anthropic Claude LLM Provider.
"""

from typing import Any

from ragcore.core.message import Message
from ragcore.providers.base import LLMProvider


class AnthropicProvider(LLMProvider):
    """
    LLM Provider for the Anthropic Messages API.
    """

    name = "anthropic"

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None
    ):
        self.api_key = api_key
        self.base_url = base_url
        self._client = None

    def _get_client(self):
        """Get or create Anthropic client."""
        if self._client is None:
            try:
                from anthropic import AsyncAnthropic
            except ImportError:
                raise ImportError(
                    "anthropic package not installed. "
                    "Install with: pip install 'ragcore[anthropic]'"
                )

            self._client = AsyncAnthropic(
                api_key=self.api_key,
                base_url=self.base_url
            )
        return self._client

    def _convert_messages(
        self,
        messages: list[dict[str, Any]]
    ) -> tuple[str, list[dict[str, Any]]]:
        """
        Split out system messages, which Anthropic takes as a separate parameter.
        Returns (system_prompt, messages)
        """
        system_prompt = ""
        converted = []

        for msg in messages:
            role = msg.get("role", "")
            content = msg.get("content", "")

            if role == "system":
                system_prompt += content + "\n"
            elif role in ("user", "assistant"):
                converted.append({"role": role, "content": content})

        return system_prompt.strip(), converted

    async def complete(
        self,
        messages: list[dict[str, Any]],
        *,
        model: str = "claude-3-5-sonnet-20241022",
        temperature: float = 0.7,
        max_tokens: int = 4000,
        **kwargs: Any
    ) -> dict[str, Any]:
        """Get a completion from Anthropic."""
        client = self._get_client()

        system_prompt, converted_messages = self._convert_messages(messages)

        params: dict[str, Any] = {
            "model": model,
            "messages": converted_messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        if system_prompt:
            params["system"] = system_prompt

        params.update(kwargs)

        response = await client.messages.create(**params)

        result: dict[str, Any] = {
            "message": None,
            "usage": {
                "prompt_tokens": response.usage.input_tokens,
                "completion_tokens": response.usage.output_tokens,
                "total_tokens": response.usage.input_tokens + response.usage.output_tokens
            },
            "finish_reason": response.stop_reason or "stop"
        }

        text_content = [block.text for block in response.content if block.type == "text"]
        if text_content:
            result["message"] = Message.assistant("\n".join(text_content))

        return result
