"""Google Drive media backend."""

from __future__ import annotations

from collections.abc import AsyncIterator
from urllib.parse import quote

import httpx

from folio.lib.upstream.base import UpstreamStatusError, UpstreamTransportError

DRIVE_FILES_URL = "https://www.googleapis.com/drive/v3/files"
DEFAULT_CONTENT_TYPE = "application/octet-stream"


class DriveAsset:
    """Streaming body of a successful Drive media response."""

    def __init__(self, response: httpx.Response, chunk_size: int = 64 * 1024) -> None:
        self._response = response
        self._chunk_size = chunk_size
        self.content_type = response.headers.get("content-type") or DEFAULT_CONTENT_TYPE

    async def iter_bytes(self) -> AsyncIterator[bytes]:
        try:
            async for chunk in self._response.aiter_bytes(self._chunk_size):
                yield chunk
        except httpx.RequestError as exc:
            raise UpstreamTransportError(type(exc).__name__) from exc
        finally:
            await self._response.aclose()

    async def read(self) -> bytes:
        try:
            return await self._response.aread()
        except httpx.RequestError as exc:
            raise UpstreamTransportError(type(exc).__name__) from exc
        finally:
            await self._response.aclose()

    async def close(self) -> None:
        await self._response.aclose()


class DriveMediaBackend:
    """Fetch file contents through the Drive v3 ``alt=media`` endpoint.

    The API key is supplied once at construction and sent as the ``key``
    query parameter of every request.
    """

    def __init__(
        self,
        api_key: str | None,
        base_url: str = DRIVE_FILES_URL,
        chunk_size: int = 64 * 1024,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._chunk_size = chunk_size
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def has_credential(self) -> bool:
        return bool(self._api_key)

    def media_url(self, identifier: str) -> str:
        """URL of the media endpoint for *identifier*, without query string."""
        return f"{self._base_url}/{quote(identifier, safe='')}"

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(transport=self._transport, follow_redirects=True)
        return self._client

    async def open(self, identifier: str) -> DriveAsset:
        client = self._get_client()
        request = client.build_request(
            "GET",
            self.media_url(identifier),
            params={"alt": "media", "key": self._api_key or ""},
        )
        try:
            response = await client.send(request, stream=True)
        except httpx.RequestError as exc:
            # The exception text can embed the request URL, which carries the key
            raise UpstreamTransportError(type(exc).__name__) from exc

        if not response.is_success:
            await response.aclose()
            raise UpstreamStatusError(response.status_code, response.reason_phrase)

        return DriveAsset(response, chunk_size=self._chunk_size)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
