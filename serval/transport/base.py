"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Serval, a product of Garudex Labs

Transport base classes.

A transport is the only piece that touches the network. The adapter hands it a
fully composed endpoint and ``RequestOptions`` and gets back a
``TransportResponse`` whose body is read separately.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Tuple

from serval.payload import RequestOptions


class TransportResponse(ABC):
    """Raw response handed back by a transport."""

    @property
    @abstractmethod
    def ok(self) -> bool:
        """Whether the status is in the 2xx range."""
        ...

    @property
    @abstractmethod
    def status(self) -> int:
        ...

    @property
    @abstractmethod
    def status_text(self) -> str:
        ...

    @property
    @abstractmethod
    def headers(self) -> Iterable[Tuple[str, str]]:
        """Header pairs in the order the server delivered them."""
        ...

    @abstractmethod
    async def text(self) -> str:
        """Read the full body as text."""
        ...


class BaseTransport(ABC):
    """Abstract base for all transports."""

    @abstractmethod
    async def send(self, endpoint: str, options: RequestOptions) -> TransportResponse:
        """Send a request and return the response."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release transport resources."""
        ...

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Whether the transport is in a usable state."""
        ...
