"""AI request dispatch: provider registry, wire formats and retry policy."""

from elite.llm.base import AIRequest, AIResponse, ProviderConfig
from elite.llm.dispatcher import CancellationToken, Dispatcher
from elite.llm.errors import AIServiceError, ErrorKind
from elite.llm.formatting import format_error_message
from elite.llm.registry import ProviderRegistry, get_registry

__all__ = [
    "AIRequest",
    "AIResponse",
    "AIServiceError",
    "CancellationToken",
    "Dispatcher",
    "ErrorKind",
    "ProviderConfig",
    "ProviderRegistry",
    "format_error_message",
    "get_registry",
]
