"""Async HTTP transport for the configuration authority."""

from src.features.transport.client import HttpTransport
from src.features.transport.config import TransportConfig
from src.features.transport.models import TransportResponse
from src.features.transport.redact import redact_url_credentials


__all__ = [
    "HttpTransport",
    "TransportConfig",
    "TransportResponse",
    "redact_url_credentials",
]
