"""transports for downloading release artifacts."""
from .client import ReleaseTransport, TransportResponse
from .github import HttpxTransport, DEFAULT_TIMEOUT

__all__ = [
    "ReleaseTransport",
    "TransportResponse",
    "HttpxTransport",
    "DEFAULT_TIMEOUT",
]
