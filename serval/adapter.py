"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Serval, a product of Garudex Labs

JSON-API HTTP adapter.

Builds requests against a single host and namespace, hands them to a
transport, and turns every response into a ``ResponsePayload``. Successful
statuses return the payload; any other status reports it to the error callback
and raises ``HttpResponseError``.
"""

from __future__ import annotations

import json
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

from serval.config.settings import AdapterConfig
from serval.exceptions import HttpResponseError
from serval.logging_config import (
    clear_correlation_id,
    get_correlation_id,
    get_logger,
    log_http_request,
    log_http_response,
    set_correlation_id,
)
from serval.payload import (
    JSON_API_MEDIA_TYPE,
    HttpMethod,
    ProgressEvent,
    RequestExtras,
    RequestOptions,
    ResponsePayload,
)
from serval.transport.base import BaseTransport, TransportResponse
from serval.transport.http import HttpxTransport

logger = get_logger(__name__)

ErrorCallback = Callable[[ResponsePayload], None]

API_ROOT = "/api/v1"
ALTERNATE_ROOT = "/survey/v1"


def _ignore_errors(payload: ResponsePayload) -> None:
    pass


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


class HttpAdapter:
    """Verb-level client for a JSON-API backend.

    Quick start::

        adapter = HttpAdapter(host="https://example.org/api/v1", namespace="/admin")
        payload = await adapter.get("/surveys")
        payload.data  # parsed JSON body

    Args:
        host: Root URL every endpoint starts with.
        base_url: Alias for ``host``; ignored when ``host`` is given.
        namespace: Path prefix appended after the host.
        headers: Extra request headers. They overlay the default
            ``content-type: application/vnd.api+json`` entry.
        on_error_callback: Called with the payload of every failed parse and
            every non-success status. Never awaited.
        transport: Transport used to send requests. Defaults to
            ``HttpxTransport``.
    """

    def __init__(
        self,
        host: Optional[str] = None,
        base_url: Optional[str] = None,
        namespace: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        on_error_callback: Optional[ErrorCallback] = None,
        transport: Optional[BaseTransport] = None,
    ) -> None:
        self.host: str = host or base_url or ""
        self.namespace: str = namespace or ""
        merged: Dict[str, str] = {"content-type": JSON_API_MEDIA_TYPE}
        merged.update(headers or {})
        self.headers: Mapping[str, str] = MappingProxyType(merged)
        self.on_error_callback: ErrorCallback = on_error_callback or _ignore_errors
        self._transport: BaseTransport = transport or HttpxTransport()

    @classmethod
    def from_config(
        cls,
        config: AdapterConfig,
        on_error_callback: Optional[ErrorCallback] = None,
        transport: Optional[BaseTransport] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> "HttpAdapter":
        """Build an adapter from the ``adapter`` section of a ``ServalConfig``.

        ``headers`` overlays the configured headers for this adapter only.
        """
        merged: Dict[str, str] = dict(config.headers)
        merged.update(headers or {})
        return cls(
            host=config.host,
            base_url=config.base_url,
            namespace=config.namespace,
            headers=merged,
            on_error_callback=on_error_callback,
            transport=transport or HttpxTransport(timeout=config.timeout_s),
        )

    @property
    def transport(self) -> BaseTransport:
        return self._transport

    # -- Request construction ------------------------------------------------

    def build_endpoint(self, path: str, extras: Optional[RequestExtras] = None) -> str:
        """Compose ``host + namespace + path``.

        With ``target_alternate_host`` the first ``/api/v1`` in the host is
        replaced by ``/survey/v1``. The path is used as given.
        """
        host = self.host
        if extras is not None and extras.target_alternate_host:
            host = host.replace(API_ROOT, ALTERNATE_ROOT, 1)
        return host + self.namespace + path

    def build_options(
        self,
        method: HttpMethod,
        data: Any = None,
        extras: Optional[RequestExtras] = None,
    ) -> RequestOptions:
        """Build transport options for one call.

        A body is attached whenever ``data`` is not ``None``, so falsy values
        such as ``0``, ``""``, ``False`` and ``{}`` are still serialized and
        sent. Only an omitted or ``None`` payload means "no body".

        Raises:
            TypeError: If ``data`` is not JSON serializable.
            ValueError: If ``data`` contains circular references or non-finite floats.
        """
        on_progress = extras.on_progress if extras is not None else None

        def forward_progress(event: ProgressEvent) -> None:
            if on_progress is not None:
                on_progress(event)

        options = RequestOptions(
            method=HttpMethod(method),
            headers=self.headers,
            progress=forward_progress,
        )
        if data is not None:
            options.body = json.dumps(data, separators=(",", ":"), allow_nan=False)
        return options

    # -- Response normalization ----------------------------------------------

    def run_callback(self, payload: ResponsePayload) -> None:
        self.on_error_callback(payload)

    @staticmethod
    def extract_response_headers(response: TransportResponse) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        for key, value in response.headers:
            headers[key] = value
        return headers

    async def normalize(
        self,
        response: TransportResponse,
        method: HttpMethod,
        endpoint: str,
    ) -> ResponsePayload:
        """Turn a transport response into a payload, or raise for a failed status.

        An unparsable body is reported to the error callback and leaves
        ``data`` unset; it only raises when the status is also unsuccessful,
        in which case the callback is called a second time. ``NaN`` and
        ``Infinity`` literals count as unparsable.

        Raises:
            HttpResponseError: If the transport reported a non-success status.
        """
        payload = ResponsePayload(
            status=response.status,
            status_text=response.status_text,
            headers=self.extract_response_headers(response),
        )

        text = await response.text()
        parsed = False
        try:
            payload.data = json.loads(text, parse_constant=_reject_constant)
            payload.has_data = True
            parsed = True
        except ValueError:
            logger.warning(
                "response_body_not_json",
                method=method.value,
                endpoint=endpoint,
                status=payload.status,
                body_length=len(text),
            )
            self.run_callback(payload)
            payload.data = None
            payload.has_data = False

        log_http_response(
            logger,
            method=method.value,
            endpoint=endpoint,
            status=payload.status,
            ok=response.ok,
            parsed=parsed,
        )

        if response.ok:
            return payload
        self.run_callback(payload)
        raise HttpResponseError(payload)

    # -- Requests --------------------------------------------------------------

    async def request(
        self,
        method: HttpMethod,
        path: str,
        data: Any = None,
        extras: Optional[RequestExtras] = None,
    ) -> ResponsePayload:
        """Send one request and normalize its response.

        Transport errors and serialization errors propagate unchanged. Log
        records of the call share one correlation id; a caller-set id is
        reused and left in place.

        Raises:
            HttpResponseError: If the response status is not in the 2xx range.
        """
        method = HttpMethod(method)
        endpoint = self.build_endpoint(path, extras)
        options = self.build_options(method, data, extras)

        owns_correlation_id = get_correlation_id() is None
        if owns_correlation_id:
            set_correlation_id()
        try:
            log_http_request(logger, method=method.value, endpoint=endpoint, has_body=options.body is not None)
            response = await self._transport.send(endpoint, options)
            return await self.normalize(response, method, endpoint)
        finally:
            if owns_correlation_id:
                clear_correlation_id()

    async def get(self, path: str) -> ResponsePayload:
        return await self.request(HttpMethod.GET, path)

    async def post(self, path: str, data: Any) -> ResponsePayload:
        return await self.request(HttpMethod.POST, path, data)

    async def put(self, path: str, data: Any) -> ResponsePayload:
        return await self.request(HttpMethod.PUT, path, data)

    async def patch(self, path: str, data: Any) -> ResponsePayload:
        return await self.request(HttpMethod.PATCH, path, data)

    async def delete(self, path: str) -> ResponsePayload:
        return await self.request(HttpMethod.DELETE, path)

    # -- Lifecycle -------------------------------------------------------------

    async def close(self) -> None:
        """Close the underlying transport."""
        await self._transport.close()

    async def __aenter__(self) -> "HttpAdapter":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
