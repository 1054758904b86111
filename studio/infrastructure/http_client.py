"""Shared HTTP connection management.

Wraps one ``httpx.AsyncClient`` bound to the REST service's base URL so
connections are pooled across every collection the console talks to.
"""

from typing import Any

import httpx

from studio.core.config import Config, get_config
from studio.core.logging import get_logger

logger = get_logger(__name__)


class HTTPClient:
    """Managed HTTP client with connection reuse.

    Create once, share between API clients, close at shutdown (or use it as
    an async context manager).

    Example:
        async with HTTPClient.from_config() as http:
            response = await http.get("/channels")
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 30.0,
        max_connections: int = 20,
        max_keepalive_connections: int = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize HTTP client.

        Args:
            base_url: Prefix for relative request paths
            timeout: Request timeout in seconds
            max_connections: Maximum number of connections
            max_keepalive_connections: Maximum keepalive connections
            transport: Custom transport (``httpx.MockTransport`` in tests)
        """
        self.base_url = base_url
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            limits=httpx.Limits(
                max_connections=max_connections,
                max_keepalive_connections=min(max_keepalive_connections, max_connections),
            ),
            follow_redirects=True,
            transport=transport,
        )
        logger.info(
            "HTTP client initialized",
            base_url=base_url,
            timeout=timeout,
            max_connections=max_connections,
        )

    @classmethod
    def from_config(
        cls,
        config: Config | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "HTTPClient":
        """Build a client for the configured REST service."""
        config = config or get_config()
        return cls(
            base_url=config.api_base_url,
            timeout=config.api_timeout,
            max_connections=config.api_max_connections,
            transport=transport,
        )

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        return await self._client.request(method, url, **kwargs)

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self._client.get(url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self._client.post(url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self._client.put(url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self._client.delete(url, **kwargs)

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        await self._client.aclose()
        logger.info("HTTP client closed", base_url=self.base_url)

    async def __aenter__(self) -> "HTTPClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


__all__ = ["HTTPClient"]
