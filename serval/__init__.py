"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Serval, a product of Garudex Labs

Serval: a JSON-API HTTP adapter.

Normalizes every response into a ``ResponsePayload`` and routes failures
through a caller-supplied error callback.
"""

from serval._version import __version__
from serval.adapter import HttpAdapter
from serval.exceptions import HttpResponseError, ServalError
from serval.payload import (
    JSON_API_MEDIA_TYPE,
    HttpMethod,
    ProgressEvent,
    RequestExtras,
    RequestOptions,
    ResponsePayload,
)

__all__ = [
    "__version__",
    "HttpAdapter",
    "HttpResponseError",
    "ServalError",
    "JSON_API_MEDIA_TYPE",
    "HttpMethod",
    "ProgressEvent",
    "RequestExtras",
    "RequestOptions",
    "ResponsePayload",
]
