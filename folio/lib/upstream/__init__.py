"""Upstream blob-store access for the asset proxy."""

from folio.lib.upstream.base import (
    UpstreamAsset,
    UpstreamBackend,
    UpstreamError,
    UpstreamStatusError,
    UpstreamTransportError,
)
from folio.lib.upstream.drive import DriveMediaBackend
from folio.lib.upstream.factory import create_upstream_backend

__all__ = [
    "DriveMediaBackend",
    "UpstreamAsset",
    "UpstreamBackend",
    "UpstreamError",
    "UpstreamStatusError",
    "UpstreamTransportError",
    "create_upstream_backend",
]
