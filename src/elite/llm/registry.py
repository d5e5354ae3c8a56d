"""Provider registry - named, immutable provider configurations."""

from __future__ import annotations

import logging

from elite.llm.base import ProviderConfig

logger = logging.getLogger(__name__)

# Singleton instance
_registry_instance: ProviderRegistry | None = None


class ProviderRegistry:
    """Holds one :class:`ProviderConfig` per provider name.

    Populated once at startup, read concurrently afterwards.  Entries are
    frozen models, so lookups never observe a partially updated config.
    """

    def __init__(self) -> None:
        self._configs: dict[str, ProviderConfig] = {}

    def register(self, name: str, config: ProviderConfig) -> None:
        """Store *config* under *name*, replacing any previous entry."""
        if config.name != name:
            config = config.model_copy(update={"name": name})
        if name in self._configs:
            logger.info("Replacing provider registration: %s", name)
        self._configs[name] = config
        logger.info(
            "Registered provider %s: model=%s, max_retries=%d, base_delay=%dms",
            name,
            config.model,
            config.max_retries,
            config.base_retry_delay_ms,
        )

    def lookup(self, name: str) -> ProviderConfig | None:
        return self._configs.get(name)

    def names(self) -> list[str]:
        return sorted(self._configs)

    def __contains__(self, name: object) -> bool:
        return name in self._configs


def get_registry() -> ProviderRegistry:
    """Get or create the process-wide provider registry."""
    global _registry_instance
    if _registry_instance is None:
        _registry_instance = ProviderRegistry()
    return _registry_instance


def reset_registry() -> None:
    """Drop the process-wide registry (used by tests)."""
    global _registry_instance
    _registry_instance = None
