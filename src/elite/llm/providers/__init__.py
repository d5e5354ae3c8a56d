"""Provider wire-format strategies, keyed by provider kind.

- OpenAIStrategy - OpenAI chat completions
"""

from __future__ import annotations

from elite.llm.base import ProviderStrategy
from elite.llm.providers.openai import OpenAIStrategy

PROVIDER_STRATEGIES: dict[str, ProviderStrategy] = {
    "openai": OpenAIStrategy(),
}


def get_strategy(kind: str) -> ProviderStrategy | None:
    return PROVIDER_STRATEGIES.get(kind)


__all__ = ["OpenAIStrategy", "PROVIDER_STRATEGIES", "get_strategy"]
