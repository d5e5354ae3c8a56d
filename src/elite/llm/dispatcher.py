"""Dispatcher - sends a question to a registered provider with bounded retry.

Only HTTP 429 is retried, with exponential backoff::

    delay = base_retry_delay_ms * 2 ** (attempt - 1)     # 1x, 2x, 4x, ...

Attempts for one call are strictly sequential.  Concurrent calls share
nothing except the read-only registry.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

from elite.llm.base import AIRequest, AIResponse, RetryState
from elite.llm.errors import (
    AIServiceError,
    AuthError,
    BadRequestError,
    InvalidRequestError,
    MalformedResponseError,
    RateLimitedError,
    RequestCancelledError,
    TransportError,
    UnknownProviderError,
    UnregisteredProviderError,
    UpstreamUnavailableError,
)
from elite.llm.providers import get_strategy
from elite.llm.registry import ProviderRegistry, get_registry
from elite.llm.transport import HttpxTransport, Transport, TransportResult

logger = logging.getLogger(__name__)

RATE_LIMIT_STATUS = 429
UNAVAILABLE_STATUSES = frozenset({500, 502, 503, 504})

SleepFunc = Callable[[float], Awaitable[Any]]


class CancellationToken:
    """Signals that the caller has abandoned a submission.

    Once cancelled, the dispatcher stops scheduling retries for the call
    holding this token.  Requests already sent are not undone.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()


def backoff_delay_ms(base_delay_ms: int, attempt: int) -> int:
    """Delay before retry number *attempt* (1-based)."""
    return base_delay_ms * 2 ** (attempt - 1)


def _upstream_error_detail(error_body: Any) -> str:
    """Pull a human-readable message out of a provider error body."""
    if isinstance(error_body, dict):
        error = error_body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
        if error_body.get("message"):
            return str(error_body["message"])
        return ""
    if isinstance(error_body, str):
        return error_body.strip()
    return ""


class Dispatcher:
    """Routes questions to registered providers and normalizes the outcome."""

    def __init__(
        self,
        registry: ProviderRegistry | None = None,
        transport: Transport | None = None,
        sleep: SleepFunc | None = None,
    ):
        self.registry = registry or get_registry()
        self.transport = transport or HttpxTransport()
        self._sleep = sleep or asyncio.sleep

    async def send(
        self,
        provider_name: str,
        request: AIRequest,
        cancel_token: CancellationToken | None = None,
    ) -> AIResponse:
        """Send *request* to *provider_name* and return the normalized answer.

        Raises:
            AIServiceError: a subclass identifying the failure kind.
        """
        config = self.registry.lookup(provider_name)
        if config is None:
            raise UnregisteredProviderError(
                f"AI service '{provider_name}' not registered", provider_name
            )

        if not request.question or not request.question.strip():
            raise InvalidRequestError("Please enter an exam question first", provider_name)

        strategy = get_strategy(config.strategy_key)
        if strategy is None:
            raise UnregisteredProviderError(
                f"Unknown AI service: {config.strategy_key}", provider_name
            )

        payload = strategy.format_request(request, config)
        headers = {
            "Authorization": config.auth_header_value,
            "Content-Type": "application/json",
        }
        state = RetryState(provider_name=provider_name)

        while True:
            if cancel_token is not None and cancel_token.cancelled:
                raise RequestCancelledError("Request cancelled", provider_name)

            logger.debug(
                "AI request: provider=%s, model=%s, attempt=%d",
                provider_name,
                config.model,
                state.attempt_count + 1,
            )
            result = await self.transport.post(config.endpoint_url, payload, headers)

            if result.success:
                try:
                    content = strategy.parse_response(result.body)
                except ValueError as exc:
                    logger.error("Malformed response from %s: %s", provider_name, exc)
                    raise MalformedResponseError(
                        f"Unexpected response format from {provider_name}",
                        provider_name,
                        result.http_status,
                    ) from exc
                logger.info(
                    "AI response: provider=%s, attempts=%d, chars=%d",
                    provider_name,
                    state.attempt_count + 1,
                    len(content),
                )
                return AIResponse(content=content, source=provider_name, raw=result.body)

            if result.http_status == RATE_LIMIT_STATUS and state.attempt_count < config.max_retries:
                state.attempt_count += 1
                delay_ms = backoff_delay_ms(config.base_retry_delay_ms, state.attempt_count)
                logger.warning(
                    "Rate limit exceeded for %s. Retrying in %dms (attempt %d/%d)",
                    provider_name,
                    delay_ms,
                    state.attempt_count,
                    config.max_retries,
                )
                await self._backoff(delay_ms / 1000, cancel_token, provider_name)
                continue

            error = self._classify(provider_name, result)
            logger.error(
                "Error calling %s API (status=%s, attempts=%d): %s",
                provider_name,
                result.http_status,
                state.attempt_count + 1,
                error.detail,
            )
            raise error

    async def _backoff(
        self,
        delay_s: float,
        cancel_token: CancellationToken | None,
        provider_name: str,
    ) -> None:
        """Suspend for *delay_s*, waking early if *cancel_token* fires."""
        if cancel_token is None:
            await self._sleep(delay_s)
            return

        sleeper = asyncio.ensure_future(self._sleep(delay_s))
        canceller = asyncio.ensure_future(cancel_token.wait())
        try:
            await asyncio.wait({sleeper, canceller}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (sleeper, canceller):
                if not task.done():
                    task.cancel()

        if cancel_token.cancelled:
            logger.info("Retry for %s abandoned by caller", provider_name)
            raise RequestCancelledError("Request cancelled", provider_name)

    @staticmethod
    def _classify(provider_name: str, result: TransportResult) -> AIServiceError:
        status = result.http_status

        if status is None:
            return TransportError(f"Network error: {result.message}", provider_name)
        if status == RATE_LIMIT_STATUS:
            return RateLimitedError(
                "Rate limit exceeded. Please try again later.", provider_name, status
            )
        if status == 401:
            return AuthError(
                "Authentication failed. Please check your API key.", provider_name, status
            )
        if status == 400:
            detail = _upstream_error_detail(result.error_body)
            message = f"Bad request: {detail}" if detail else "Bad request."
            return BadRequestError(message, provider_name, status)
        if status in UNAVAILABLE_STATUSES:
            return UpstreamUnavailableError(
                f"The AI service is temporarily unavailable (HTTP {status}).",
                provider_name,
                status,
            )
        return UnknownProviderError(
            f"Unexpected error from provider (HTTP {status}): {result.message}",
            provider_name,
            status,
        )
