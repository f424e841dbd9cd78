"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Serval, a product of Garudex Labs

Request and response data structures shared by the adapter and transports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional


JSON_API_MEDIA_TYPE = "application/vnd.api+json"


class HttpMethod(str, Enum):
    """HTTP verbs understood by the adapter."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


@dataclass(frozen=True)
class ProgressEvent:
    """Body transfer progress reported by a transport.

    Attributes:
        loaded: Bytes received so far.
        total: Announced body length, or ``None`` when the server sent none.
    """
    loaded: int
    total: Optional[int] = None


ProgressCallback = Callable[[ProgressEvent], None]


@dataclass(frozen=True)
class RequestExtras:
    """Per-call options reachable through ``HttpAdapter.request``.

    Attributes:
        target_alternate_host: Rewrite ``/api/v1`` in the host to
            ``/survey/v1`` before building the endpoint.
        on_progress: Receives every progress event the transport reports.
    """
    target_alternate_host: bool = False
    on_progress: Optional[ProgressCallback] = None


@dataclass
class RequestOptions:
    """Transport options built for a single call.

    ``headers`` is the adapter's own read-only mapping, not a copy.
    """
    method: HttpMethod
    headers: Mapping[str, str]
    progress: ProgressCallback
    body: Optional[str] = None


@dataclass
class ResponsePayload:
    """Uniform outcome of a request, returned on success and raised on failure.

    ``has_data`` records whether the body parsed as JSON, so a JSON ``null``
    body is told apart from an empty or unparsable one. It is set
    automatically when ``data`` is given.
    """
    status: int
    status_text: str
    headers: Dict[str, str] = field(default_factory=dict)
    data: Any = None
    has_data: bool = False

    def __post_init__(self) -> None:
        if self.data is not None:
            self.has_data = True

    def to_dict(self) -> Dict[str, Any]:
        """Render the wire shape; ``data`` is omitted when absent."""
        result: Dict[str, Any] = {
            "status": self.status,
            "statusText": self.status_text,
            "headers": dict(self.headers),
        }
        if self.has_data:
            result["data"] = self.data
        return result
