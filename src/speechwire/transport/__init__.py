"""Transports used to reach the provider.

This package includes the `Transport` protocol along with an `httpx` based implementation.
"""

from .http_transport import HttpTransport
from .transport import Transport

__all__ = ["HttpTransport", "Transport"]
