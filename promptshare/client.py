"""Share service client: exchange inline strings for short codes and back.

Talks to the short code service's two endpoints:
- ``GET {base}/{code}``  -> ``{"data": "<inline string>"}``
- ``POST {base}``        -> ``{"code": "<short code>"}``

The strict methods (:meth:`ShareApiClient.lookup`, :meth:`ShareApiClient.register`)
raise :class:`ShareServiceError`. The lenient ones return None instead, which
is what the resolve and publish flows want.
"""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from .errors import ShareNotFoundError, ShareServiceError

logger = logging.getLogger("promptshare.client")


class ShareApiClient:
    """Client for the short code service."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> "ShareApiClient":
        return cls(settings.api_url, timeout=settings.request_timeout, transport=transport)

    async def _request_json(self, method: str, url: str, **kwargs) -> dict[str, Any]:
        """Send one request and return the JSON object body.

        Raises:
            ShareServiceError: on transport failure, HTTP error status or a
                body that is not a JSON object
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.request(method, url, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ShareServiceError(f"{method} {url!r} failed: {e}") from e

        if resp.status_code >= 400:
            raise ShareServiceError(
                f"{method} {url} returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            body = resp.json()
        except ValueError as e:
            raise ShareServiceError(f"{method} {url} returned invalid JSON", status_code=resp.status_code) from e

        if not isinstance(body, dict):
            raise ShareServiceError(f"{method} {url} returned {type(body).__name__}, expected object")
        return body

    async def lookup(self, code: str) -> str:
        """Fetch the inline string stored under a short code.

        Raises:
            ShareNotFoundError: if the service has no data for ``code``
            ShareServiceError: on transport or response failures
        """
        # The code is one opaque path segment, never a sub-path or query
        body = await self._request_json("GET", f"{self.base_url}/{quote(code, safe='')}")
        data = body.get("data")
        if not data or not isinstance(data, str):
            raise ShareNotFoundError(f"No data for share code {code!r}")
        return data

    async def register(self, data: str) -> str:
        """Store an inline string and return its short code.

        Raises:
            ShareServiceError: on transport failures or a response without ``code``
        """
        body = await self._request_json("POST", self.base_url, json={"data": data})
        code = body.get("code")
        if not code or not isinstance(code, str):
            raise ShareServiceError("Share service response has no code")
        return code

    async def fetch_data(self, code: str) -> Optional[str]:
        """Lenient :meth:`lookup`: None when the code cannot be exchanged."""
        try:
            return await self.lookup(code)
        except ShareNotFoundError:
            logger.info(f"Share code {code!r} not found (expired or legacy link)")
            return None
        except ShareServiceError as e:
            logger.warning(f"Short code fetch failed, might be legacy link: {e}")
            return None

    async def create_short_code(self, data: str) -> Optional[str]:
        """Lenient :meth:`register`: None when no short code could be obtained."""
        try:
            return await self.register(data)
        except ShareServiceError as e:
            logger.warning(f"Failed to get short code: {e}")
            return None
