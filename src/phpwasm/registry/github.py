import logging
from typing import Dict, Optional

import httpx

from ..domain.errors import TransportError
from .client import ReleaseTransport, TransportResponse

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class HttpxTransport(ReleaseTransport):
    """fetches release assets with httpx, following GitHub's redirects to its CDN."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, client: Optional[httpx.Client] = None):
        self.timeout = timeout
        self._owns_client = client is None
        self.client = client or httpx.Client(follow_redirects=True, timeout=timeout)

    def get(self, url: str, headers: Optional[Dict[str, str]] = None) -> TransportResponse:
        logger.debug("GET %s", url)
        try:
            response = self.client.get(url, headers=headers, follow_redirects=True)
        except httpx.HTTPError as e:
            logger.debug("GET %s failed: %s", url, e)
            raise TransportError(url, str(e) or type(e).__name__) from e

        logger.debug("GET %s -> %s (%d bytes)", url, response.status_code, len(response.content))
        return TransportResponse(
            status_code=response.status_code,
            content=response.content,
            headers={key.lower(): value for key, value in response.headers.items()},
        )

    def close(self) -> None:
        # injected clients belong to the caller
        if self._owns_client:
            self.client.close()
