"""
JSON-over-HTTP client for remote classification services.
"""

import asyncio
from typing import Any

import aiohttp


class AsyncHTTPClient:
    """Async JSON client with bearer authentication and a total request timeout."""

    def __init__(self, timeout: int = 30, api_key: str | None = None) -> None:
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.headers: dict[str, str] = {"Content-Type": "application/json", "Accept": "application/json"}
        if api_key:
            self.headers["Authorization"] = f"Bearer {api_key}"
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "AsyncHTTPClient":
        self.session = aiohttp.ClientSession(timeout=self.timeout, headers=self.headers)
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self.session:
            await self.session.close()
            self.session = None

    @staticmethod
    async def _resolve(result: Any) -> Any:
        """Await aiohttp results that may be coroutines or plain objects."""
        if asyncio.iscoroutine(result):
            return await result
        return result

    async def post_json(self, url: str, payload: dict[str, Any]) -> Any:
        """
        POST a JSON body and decode the JSON reply.

        Raises:
            RuntimeError: If used outside the async context manager
            aiohttp.ClientResponseError: On a non-2xx status
            aiohttp.ContentTypeError: If the reply is not JSON
        """
        if not self.session:
            raise RuntimeError("HTTP client not initialized. Use async context manager.")

        request_ctx = await self._resolve(self.session.post(url, json=payload))
        async with request_ctx as response:
            await self._resolve(response.raise_for_status())
            return await response.json()
