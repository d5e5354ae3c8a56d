"""API key providers.

Keys are looked up by a logical identifier: a filesystem path, or an
``http(s)://`` URL serving the key as plain text.  Read failures never
raise; they yield an empty string, and startup decides what to do with it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import httpx

from elite.config import settings

logger = logging.getLogger(__name__)


class KeyProvider(Protocol):
    async def get_secret(self, identifier: str) -> str: ...


class KeyReader:
    """Reads API keys from files or URLs, caching each one after first read.

    The cache lives on the instance; create one reader per process at
    startup and call :meth:`clear` to force a re-read.
    """

    def __init__(self, timeout: float | None = None):
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self._cache: dict[str, str] = {}

    async def get_secret(self, identifier: str) -> str:
        if identifier in self._cache:
            return self._cache[identifier]

        try:
            if identifier.startswith(("http://", "https://")):
                raw = await self._fetch(identifier)
            else:
                raw = Path(identifier).expanduser().read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError, httpx.HTTPError) as exc:
            logger.error("Error reading API key from %s: %s", identifier, exc)
            return ""

        key = raw.strip()
        if key:
            self._cache[identifier] = key
        return key

    async def _fetch(self, url: str) -> str:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(url)
            response.raise_for_status()
            return response.text

    def clear(self) -> None:
        self._cache.clear()


class StaticKeyProvider:
    """Serves a key supplied inline (e.g. from the environment)."""

    def __init__(self, secret: str):
        self._secret = secret.strip()

    async def get_secret(self, identifier: str) -> str:
        return self._secret
