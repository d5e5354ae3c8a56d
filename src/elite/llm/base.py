"""Core data shapes shared by the registry, dispatcher and providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1000
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY_MS = 1000


class ProviderConfig(BaseModel):
    """Connection and retry settings for one registered provider.

    ``kind`` selects the request/response strategy and defaults to ``name``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    endpoint_url: str
    model: str
    auth_header_value: str = Field(repr=False)
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)
    base_retry_delay_ms: int = Field(default=DEFAULT_RETRY_DELAY_MS, gt=0)
    kind: str = ""

    @property
    def strategy_key(self) -> str:
        return self.kind or self.name


class AIRequest(BaseModel):
    """A single user submission."""

    model_config = ConfigDict(frozen=True)

    question: str
    temperature: float | None = DEFAULT_TEMPERATURE
    max_tokens: int | None = DEFAULT_MAX_TOKENS


class AIResponse(BaseModel):
    """Standardized response from any provider."""

    content: str
    source: str
    raw: Any = None


class RetryState(BaseModel):
    """Per-call retry bookkeeping, owned by one ``send`` invocation."""

    provider_name: str
    attempt_count: int = 0


class ProviderStrategy(ABC):
    """Wire-format adapter for one provider kind.

    Adding a provider means adding a subclass and one entry in
    ``elite.llm.providers.PROVIDER_STRATEGIES``.
    """

    @abstractmethod
    def format_request(self, request: AIRequest, config: ProviderConfig) -> dict[str, Any]:
        """Build the JSON body for *request*."""
        ...

    @abstractmethod
    def parse_response(self, body: Any) -> str:
        """Extract the answer text from a successful response body.

        Raises:
            ValueError: if *body* does not have the expected shape.
        """
        ...
