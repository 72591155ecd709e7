"""Upstream backend construction from configuration."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

from folio.lib.upstream.drive import DriveMediaBackend

if TYPE_CHECKING:
    import httpx

    from folio.config import Settings
    from folio.lib.upstream.base import UpstreamBackend


def create_upstream_backend(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> UpstreamBackend:
    """Instantiate the upstream backend named by ``upstream.backend``.

    ``"drive"`` selects the built-in Google Drive backend; any other value
    must be a ``module:ClassName`` spec whose class accepts ``settings``.
    """
    backend_type = settings.upstream.backend

    if backend_type == "drive":
        return DriveMediaBackend(
            api_key=settings.upstream_api_key,
            base_url=settings.upstream.media_base_url,
            chunk_size=settings.proxy.chunk_size,
            transport=transport,
        )

    # Dynamic import: "module:ClassName"
    if ":" in backend_type:
        parts = backend_type.split(":")
        if len(parts) != 2:
            raise ValueError(
                f"Invalid backend spec '{backend_type}': must contain exactly one colon"
            )
        module_path, class_name = parts
        module = importlib.import_module(module_path)
        cls = getattr(module, class_name)
        return cls(settings)

    raise ValueError(
        f"Unknown upstream backend '{backend_type}'. Use 'drive' or 'module:ClassName'."
    )
