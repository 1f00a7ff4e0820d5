"""
Shared async JSON-over-HTTP plumbing.

One aiohttp session per client instance, created lazily and released with
``close()`` or by leaving the ``async with`` block. Requests are issued once:
there is no retry or backoff, so every error is terminal for the call.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, NoReturn

import aiohttp

from hlperps.errors import ExchangeError, HlPerpsError

if TYPE_CHECKING:
    from types import TracebackType
    from typing import Self

logger = logging.getLogger(__name__)


class JsonHttpClient:
    """Base class for clients that POST JSON and receive JSON."""

    error_type: type[HlPerpsError] = ExchangeError

    def __init__(self, base_url: str, timeout_s: float = 10.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._timeout_s)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    def _raise(self, message: str, status: int | None, body: str | None) -> NoReturn:
        if issubclass(self.error_type, ExchangeError):
            raise self.error_type(message, status=status, body=body)
        raise self.error_type(message)

    async def _post(self, endpoint: str, payload: dict[str, Any]) -> Any:
        """
        POST a JSON payload and return the decoded JSON response.

        Args:
            endpoint: Path appended to the base URL.
            payload: JSON-serializable request body.

        Returns:
            Decoded JSON (dict, list or scalar depending on endpoint).

        Raises:
            error_type: On HTTP status >= 400 or an undecodable body.
            aiohttp.ClientError: On network errors.
        """
        url = f"{self._base_url}{endpoint}"
        session = await self._get_session()
        async with session.post(url, json=payload) as response:
            if response.status >= 400:
                text = await response.text()
                logger.error(
                    "HTTP error",
                    extra={"status": response.status, "endpoint": endpoint, "body": text[:500]},
                )
                self._raise(f"HTTP {response.status}: {text[:200]}", response.status, text[:200])

            try:
                return await response.json(content_type=None)
            except ValueError:
                text = await response.text()
                logger.error(
                    "Malformed JSON response",
                    extra={"status": response.status, "endpoint": endpoint},
                )
                self._raise(f"Malformed response from {endpoint}", response.status, text[:200])
