"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Serval, a product of Garudex Labs

Transports.
"""

from serval.transport.base import BaseTransport, TransportResponse
from serval.transport.http import HttpxResponse, HttpxTransport
from serval.transport.mock import MockResponse, MockTransport

__all__ = [
    "BaseTransport",
    "TransportResponse",
    "HttpxResponse",
    "HttpxTransport",
    "MockResponse",
    "MockTransport",
]
