"""Shared HTTP client.

One pooled ``httpx.AsyncClient`` lives for the whole process. The media host
is its main consumer; uploads can take minutes, so the timeout is
configurable and every request is logged with its duration at debug level.
"""

import time
from typing import Any

import httpx

from app.core.logging import get_logger

logger = get_logger(__name__)


class HTTPClient:
    """Managed HTTP client with connection reuse.

    Created once by the container, closed by ``shutdown_container``.

    Example:
        http_client = HTTPClient(timeout=120.0)
        response = await http_client.post(url, data=params, files=files)
        await http_client.close()
    """

    def __init__(
        self,
        timeout: float = 30.0,
        max_connections: int = 20,
        max_keepalive_connections: int = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize HTTP client.

        Args:
            timeout: Request timeout in seconds
            max_connections: Maximum number of connections
            max_keepalive_connections: Maximum keepalive connections
            transport: Optional transport override (httpx.MockTransport in tests)
        """
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            limits=httpx.Limits(
                max_connections=max_connections,
                max_keepalive_connections=max_keepalive_connections,
            ),
            follow_redirects=True,
            transport=transport,
        )
        logger.info("HTTP client initialized", timeout=timeout, max_connections=max_connections)

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send a request and log its status and duration.

        Transport errors propagate as ``httpx.HTTPError``; status codes are
        left to the caller.
        """
        started = time.perf_counter()
        response = await self._client.request(method, url, **kwargs)
        logger.debug(
            "HTTP request completed",
            method=method,
            host=response.request.url.host,
            path=response.request.url.path,
            status=response.status_code,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return response

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        await self._client.aclose()
        logger.info("HTTP client closed")


__all__ = ["HTTPClient"]
