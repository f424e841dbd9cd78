"""
Exception hierarchy for Serval.

All custom exceptions inherit from ServalError base class. Transport and
serialization errors are not wrapped; they reach the caller as raised by
httpx or the json module.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from serval.payload import ResponsePayload


class ServalError(Exception):
    """Base exception for all Serval errors."""
    pass


# Adapter Errors
class AdapterError(ServalError):
    """Base exception for adapter-related errors."""
    pass


class HttpResponseError(AdapterError):
    """Raised when the server answers with a non-success status.

    The normalized response is available as ``payload``.
    """

    def __init__(self, payload: "ResponsePayload"):
        self.payload = payload
        super().__init__(f"Request failed with status {payload.status}: {payload.status_text}")

    @property
    def status(self) -> int:
        return self.payload.status


# Configuration Errors
class ConfigurationError(ServalError):
    """Base exception for configuration-related errors."""
    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid or malformed."""
    pass
