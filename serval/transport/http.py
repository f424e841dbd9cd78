"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Serval, a product of Garudex Labs

HTTP transport (default).
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

import httpx

from serval.logging_config import get_logger
from serval.payload import ProgressCallback, ProgressEvent, RequestOptions
from serval.transport.base import BaseTransport, TransportResponse

logger = get_logger(__name__)


class HttpxResponse(TransportResponse):
    """Streamed ``httpx.Response`` whose body is read on demand.

    Every received chunk is reported to ``progress`` before the next one is
    read. The underlying stream is closed once the body has been consumed.
    """

    def __init__(self, response: httpx.Response, progress: ProgressCallback) -> None:
        self._response = response
        self._progress = progress

    @property
    def ok(self) -> bool:
        return self._response.is_success

    @property
    def status(self) -> int:
        return self._response.status_code

    @property
    def status_text(self) -> str:
        return self._response.reason_phrase

    @property
    def headers(self) -> Iterable[Tuple[str, str]]:
        return self._response.headers.multi_items()

    def _content_length(self) -> Optional[int]:
        value = self._response.headers.get("content-length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    async def text(self) -> str:
        total = self._content_length()
        loaded = 0
        chunks: List[bytes] = []
        try:
            async for chunk in self._response.aiter_bytes():
                chunks.append(chunk)
                loaded += len(chunk)
                self._progress(ProgressEvent(loaded=loaded, total=total))
        finally:
            await self._response.aclose()
        return b"".join(chunks).decode(self._response.encoding or "utf-8", errors="replace")


class HttpxTransport(BaseTransport):
    """Default transport using ``httpx.AsyncClient``.

    Args:
        timeout: Request timeout in seconds, or ``None`` to wait indefinitely.
        client: Optional pre-built client (e.g. one mounted on
            ``httpx.MockTransport`` in tests).
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._timeout = timeout
        self._client = client
        self._connected = client is not None

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
            self._connected = True
        return self._client

    async def send(self, endpoint: str, options: RequestOptions) -> TransportResponse:
        client = self._ensure_client()

        request = client.build_request(
            method=options.method.value,
            url=endpoint,
            headers=dict(options.headers),
            content=options.body,
        )
        response = await client.send(request, stream=True)
        logger.debug(
            "transport_response_received",
            endpoint=endpoint,
            status=response.status_code,
        )
        return HttpxResponse(response, options.progress)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected
