"""OpenAI chat-completions wire format."""

from __future__ import annotations

from typing import Any

from elite.llm.base import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    AIRequest,
    ProviderConfig,
    ProviderStrategy,
)


class OpenAIStrategy(ProviderStrategy):
    """Maps requests to ``/v1/chat/completions`` and back."""

    def format_request(self, request: AIRequest, config: ProviderConfig) -> dict[str, Any]:
        temperature = request.temperature
        if temperature is None:
            temperature = DEFAULT_TEMPERATURE
        max_tokens = request.max_tokens
        if max_tokens is None:
            max_tokens = DEFAULT_MAX_TOKENS

        return {
            "model": config.model,
            "messages": [{"role": "user", "content": request.question}],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

    def parse_response(self, body: Any) -> str:
        if not isinstance(body, dict):
            raise ValueError("response body is not a JSON object")

        choices = body.get("choices")
        if not isinstance(choices, list) or not choices:
            raise ValueError("response has no choices")

        first = choices[0]
        message = first.get("message") if isinstance(first, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise ValueError("first choice has no message content")
        return content
