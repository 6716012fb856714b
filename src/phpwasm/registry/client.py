from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True)
class TransportResponse:
    """status, headers and body of a completed HTTP exchange, whatever the status."""
    status_code: int
    content: bytes
    headers: Dict[str, str] = field(default_factory=dict)


class ReleaseTransport(ABC):
    @abstractmethod
    def get(self, url: str, headers: Optional[Dict[str, str]] = None) -> TransportResponse:
        """
        perform a GET request.

        4xx/5xx responses are returned, not raised. only failures that leave
        no response at all (dns, connection, timeout) raise TransportError.
        """
        pass

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
