"""Concrete HTTP client implementation for async requests.

Wraps aiohttp behind IHttpClient abstraction.
"""

import json
from typing import Any

import aiohttp

from token_merge.ingestion.config.value_objects import HttpClientConfig
from token_merge.ingestion.ports.http import HttpResponse, IHttpClient


class AiohttpClient(IHttpClient):
    """HTTP client implementation using aiohttp."""

    def __init__(self, config: HttpClientConfig):
        """Initialize HTTP client.

        Args:
            config: HTTP client configuration
        """
        self.config = config
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> HttpResponse:
        """Execute GET request.

        The body is JSON-decoded when possible, otherwise kept as text.

        Raises:
            aiohttp.ClientError: On connection errors
            asyncio.TimeoutError: When the request exceeds the timeout
        """
        session = await self._get_session()
        timeout_obj = aiohttp.ClientTimeout(total=timeout or self.config.timeout)

        async with session.get(
            url,
            params=params,
            headers=headers,
            timeout=timeout_obj,
        ) as resp:
            text = await resp.text()
            try:
                body = json.loads(text)
            except ValueError:
                body = text
            return HttpResponse(
                status_code=resp.status,
                body=body,
                headers=dict(resp.headers),
                url=str(resp.url),
            )

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None
