"""Typed failures raised by source adapters."""

from typing import Optional


class AdapterError(Exception):
    """A single source adapter failed to produce records."""

    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message


class TransportError(AdapterError):
    """Network, DNS or timeout failure reaching the upstream feed."""


class UpstreamError(AdapterError):
    """The upstream feed answered with a non-success status."""

    def __init__(self, source: str, message: str, status_code: Optional[int] = None):
        super().__init__(source, message)
        self.status_code = status_code


class SchemaError(AdapterError):
    """The payload could not be parsed into the expected structure."""
