"""Startup wiring: load API keys and register the AI providers."""

from __future__ import annotations

import logging

from elite.config import Settings, settings as default_settings
from elite.keys import KeyProvider, KeyReader, StaticKeyProvider
from elite.llm.base import ProviderConfig
from elite.llm.errors import ServiceInitializationError
from elite.llm.registry import ProviderRegistry, get_registry

logger = logging.getLogger(__name__)

OPENAI_KEY_PREFIX = "sk-"
OPENAI_KEY_MIN_LENGTH = 20


def default_key_provider(config: Settings) -> KeyProvider:
    """Inline key from the environment if set, otherwise the key file."""
    if config.openai_api_key:
        return StaticKeyProvider(config.openai_api_key)
    return KeyReader(timeout=config.http_timeout_seconds)


async def initialize_ai_services(
    registry: ProviderRegistry | None = None,
    key_provider: KeyProvider | None = None,
    config: Settings | None = None,
) -> ProviderRegistry:
    """Load the OpenAI key and register the ``openai`` provider.

    Any failure is fatal: the error is logged and re-raised as
    :class:`ServiceInitializationError`.
    """
    config = config or default_settings
    registry = registry or get_registry()
    key_provider = key_provider or default_key_provider(config)

    try:
        if isinstance(key_provider, StaticKeyProvider):
            logger.info("Using inline OpenAI API key from settings")
        else:
            logger.info("Attempting to read API key from: %s", config.openai_api_key_path)
        api_key = await key_provider.get_secret(config.openai_api_key_path)

        if not api_key:
            raise ServiceInitializationError("OpenAI API key is empty or not found")

        if not api_key.startswith(OPENAI_KEY_PREFIX) or len(api_key) < OPENAI_KEY_MIN_LENGTH:
            raise ServiceInitializationError("Invalid OpenAI API key format")

        logger.info("API key loaded successfully")

        registry.register(
            "openai",
            ProviderConfig(
                name="openai",
                endpoint_url=config.openai_api_url,
                model=config.openai_model,
                auth_header_value=f"Bearer {api_key}",
                max_retries=config.openai_max_retries,
                base_retry_delay_ms=config.openai_retry_delay_ms,
            ),
        )
    except ServiceInitializationError as exc:
        logger.error("Error initializing AI services: %s", exc)
        raise
    except Exception as exc:
        logger.exception("Error initializing AI services")
        raise ServiceInitializationError(f"Failed to initialize AI services: {exc}") from exc

    logger.info("AI services initialized successfully")
    return registry
