"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Serval, a product of Garudex Labs

Mock transport for local testing.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from serval.payload import ProgressCallback, ProgressEvent, RequestOptions
from serval.transport.base import BaseTransport, TransportResponse


def _reason_phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


class MockResponse(TransportResponse):
    """Canned response served by ``MockTransport``.

    Args:
        status: Status code.
        body: Raw body text, returned verbatim by ``text()``.
        headers: Header pairs; duplicates are kept in order.
        status_text: Reason phrase. Defaults to the standard phrase for ``status``.
    """

    def __init__(
        self,
        status: int = 200,
        body: str = "",
        headers: Optional[Sequence[Tuple[str, str]]] = None,
        status_text: Optional[str] = None,
    ) -> None:
        self._status = status
        self._body = body
        self._headers: List[Tuple[str, str]] = list(headers or [])
        self._status_text = _reason_phrase(status) if status_text is None else status_text
        self._progress: Optional[ProgressCallback] = None

    def bind(self, progress: ProgressCallback) -> "MockResponse":
        """Return a copy that reports body progress to ``progress``."""
        bound = MockResponse(self._status, self._body, self._headers, self._status_text)
        bound._progress = progress
        return bound

    @property
    def ok(self) -> bool:
        return 200 <= self._status < 300

    @property
    def status(self) -> int:
        return self._status

    @property
    def status_text(self) -> str:
        return self._status_text

    @property
    def headers(self) -> Iterable[Tuple[str, str]]:
        return iter(self._headers)

    async def text(self) -> str:
        if self._progress is not None and self._body:
            size = len(self._body.encode("utf-8"))
            self._progress(ProgressEvent(loaded=size, total=size))
        return self._body


class MockTransport(BaseTransport):
    """In-memory transport for unit tests.

    Args:
        responses: Mapping from ``(method, endpoint)`` tuples to
            ``MockResponse`` instances. Methods match case-insensitively.

    Example::

        transport = MockTransport({
            ("GET", "https://api.test/api/v1/surveys"): MockResponse(200, '{"data": []}'),
        })
    """

    def __init__(
        self,
        responses: Optional[Dict[Tuple[str, str], MockResponse]] = None,
    ) -> None:
        self._responses: Dict[Tuple[str, str], MockResponse] = {}
        self._sent: List[Tuple[str, RequestOptions]] = []
        for (method, endpoint), response in (responses or {}).items():
            self.add(method, endpoint, response)

    def add(self, method: str, endpoint: str, response: MockResponse) -> None:
        """Register (or replace) the response for ``method endpoint``."""
        self._responses[(method.upper(), endpoint)] = response

    async def send(self, endpoint: str, options: RequestOptions) -> TransportResponse:
        self._sent.append((endpoint, options))
        key = (options.method.value, endpoint)
        if key in self._responses:
            return self._responses[key].bind(options.progress)
        return MockResponse(
            status=404,
            body='{"errors":[{"status":"404","title":"not mocked"}]}',
            headers=[("content-type", "application/vnd.api+json")],
        ).bind(options.progress)

    async def close(self) -> None:
        self._responses.clear()
        self._sent.clear()

    @property
    def is_connected(self) -> bool:
        return True

    @property
    def sent_requests(self) -> List[Tuple[str, RequestOptions]]:
        """All ``(endpoint, options)`` pairs sent through this transport."""
        return list(self._sent)
