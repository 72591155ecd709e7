"""Upstream blob-store protocol and common types."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol, runtime_checkable


class UpstreamError(Exception):
    """Base class for failures talking to the upstream store."""


class UpstreamStatusError(UpstreamError):
    """The upstream store answered with a non-success status."""

    def __init__(self, status_code: int, reason: str) -> None:
        super().__init__(f"Upstream responded {status_code} {reason}".rstrip())
        self.status_code = status_code
        self.reason = reason


class UpstreamTransportError(UpstreamError):
    """The upstream request failed at the transport level."""


@runtime_checkable
class UpstreamAsset(Protocol):
    """An open upstream response whose body has not been consumed yet."""

    content_type: str

    def iter_bytes(self) -> AsyncIterator[bytes]:
        """Yield the body in chunks, releasing the response when done."""
        ...

    async def read(self) -> bytes:
        """Read the whole body and release the response."""
        ...

    async def close(self) -> None:
        """Release the response without reading the body."""
        ...


@runtime_checkable
class UpstreamBackend(Protocol):
    """Interface for stores the asset proxy can read from."""

    @property
    def has_credential(self) -> bool:
        """Whether a credential is configured for this backend."""
        ...

    async def open(self, identifier: str) -> UpstreamAsset:
        """Start retrieving the asset named by *identifier*.

        Raises:
            UpstreamStatusError: The store rejected the request.
            UpstreamTransportError: The store could not be reached.
        """
        ...

    async def close(self) -> None:
        """Release resources held by the backend."""
        ...
