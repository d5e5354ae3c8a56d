"""Classified failures raised by the AI dispatcher.

Every failure a caller can see from :meth:`Dispatcher.send` is an
:class:`AIServiceError` carrying an :class:`ErrorKind`.  Only
:class:`RateLimitedError` is ever retried, and only inside the dispatcher.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    UNREGISTERED_PROVIDER = "unregistered_provider"
    INVALID_REQUEST = "invalid_request"
    MALFORMED_RESPONSE = "malformed_response"
    RATE_LIMITED = "rate_limited"
    AUTH_ERROR = "auth_error"
    BAD_REQUEST = "bad_request"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    UNKNOWN_PROVIDER_ERROR = "unknown_provider_error"
    TRANSPORT_ERROR = "transport_error"
    CANCELLED = "cancelled"


class AIServiceError(Exception):
    """Base class for all dispatcher failures.

    ``str(error)`` renders as ``"Failed to get response from <provider>:
    <detail>"``; :func:`elite.llm.formatting.format_error_message` strips
    the prefix for display.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN_PROVIDER_ERROR

    def __init__(
        self,
        detail: str,
        provider: str = "",
        status_code: int | None = None,
    ):
        self.detail = detail
        self.provider = provider
        self.status_code = status_code
        super().__init__(self._render())

    def _render(self) -> str:
        if self.provider:
            return f"Failed to get response from {self.provider}: {self.detail}"
        return f"Failed to get AI response: {self.detail}"


class UnregisteredProviderError(AIServiceError):
    kind = ErrorKind.UNREGISTERED_PROVIDER


class InvalidRequestError(AIServiceError):
    kind = ErrorKind.INVALID_REQUEST


class MalformedResponseError(AIServiceError):
    kind = ErrorKind.MALFORMED_RESPONSE


class RateLimitedError(AIServiceError):
    kind = ErrorKind.RATE_LIMITED


class AuthError(AIServiceError):
    kind = ErrorKind.AUTH_ERROR


class BadRequestError(AIServiceError):
    kind = ErrorKind.BAD_REQUEST


class UpstreamUnavailableError(AIServiceError):
    kind = ErrorKind.UPSTREAM_UNAVAILABLE


class UnknownProviderError(AIServiceError):
    kind = ErrorKind.UNKNOWN_PROVIDER_ERROR


class TransportError(AIServiceError):
    kind = ErrorKind.TRANSPORT_ERROR


class RequestCancelledError(AIServiceError):
    """The caller abandoned the submission before it resolved."""

    kind = ErrorKind.CANCELLED


class ServiceInitializationError(Exception):
    """Startup could not configure the AI services (fatal, no degraded mode)."""
