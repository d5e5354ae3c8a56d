"""HTTP transport used by the dispatcher for single POST calls."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import httpx
from pydantic import BaseModel

from elite.config import settings

logger = logging.getLogger(__name__)


class TransportResult(BaseModel):
    """Outcome of one HTTP POST.

    ``http_status`` is ``None`` when the request never produced a response
    (DNS failure, refused connection, timeout, ...).
    """

    success: bool
    body: Any = None
    http_status: int | None = None
    error_body: Any = None
    message: str = ""


class Transport(Protocol):
    async def post(
        self, url: str, body: dict[str, Any], headers: dict[str, str]
    ) -> TransportResult: ...


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return response.text


class HttpxTransport:
    """Performs exactly one POST per call; never retries."""

    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self._transport = transport

    async def post(
        self, url: str, body: dict[str, Any], headers: dict[str, str]
    ) -> TransportResult:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(url, json=body, headers=headers)
        except httpx.RequestError as exc:
            logger.warning("POST %s failed before a response: %r", url, exc)
            return TransportResult(
                success=False,
                message=str(exc) or exc.__class__.__name__,
            )

        if response.is_success:
            return TransportResult(
                success=True,
                body=_decode_body(response),
                http_status=response.status_code,
            )

        return TransportResult(
            success=False,
            http_status=response.status_code,
            error_body=_decode_body(response),
            message=f"Http failure response for {url}: "
            f"{response.status_code} {response.reason_phrase}",
        )
