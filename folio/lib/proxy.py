"""Asset proxy service that fetches assets upstream with the server-held credential.

Both the streaming HTTP controller and the serverless handler go through
:class:`AssetProxy`, which validates the request, calls the upstream backend
and translates upstream failures into proxy errors. Causes are logged for
operators with the credential redacted; callers only see status codes and
generic messages.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from folio.lib import observability
from folio.lib.exceptions import (
    CredentialNotConfiguredError,
    MissingIdentifierError,
    TransportFailureError,
    UpstreamRejectedError,
)
from folio.lib.resolver import normalize_identifier
from folio.lib.upstream.base import (
    UpstreamAsset,
    UpstreamBackend,
    UpstreamStatusError,
    UpstreamTransportError,
)

logger = logging.getLogger(__name__)


def _describe(exc: BaseException) -> str:
    """One-line description of an exception and its cause."""
    description = f"{type(exc).__name__}: {exc}"
    if exc.__cause__ is not None:
        description += f" (caused by {type(exc.__cause__).__name__}: {exc.__cause__})"
    return description


class AssetProxy:
    """Read-only passthrough from an identifier to upstream asset bytes."""

    def __init__(self, backend: UpstreamBackend, secret: str | None = None) -> None:
        self._backend = backend
        self._secret = secret
        observability.install_redaction(secret)

    def _log_failure(self, identifier: str, exc: BaseException) -> None:
        message = observability.redact(_describe(exc), self._secret)
        if observability.is_available():
            observability.error(
                "Asset fetch failed for {identifier}: {cause}",
                identifier=identifier,
                cause=message,
            )
        else:
            logger.error("Asset fetch failed for %s: %s", identifier, message)

    async def fetch(self, identifier: str | None) -> UpstreamAsset:
        """Open the upstream asset named by *identifier*.

        Raises:
            MissingIdentifierError: No identifier was given.
            CredentialNotConfiguredError: The process has no upstream credential.
            UpstreamRejectedError: The upstream store refused the request.
            TransportFailureError: The upstream store could not be reached.
        """
        identifier = normalize_identifier(identifier)
        if identifier is None:
            raise MissingIdentifierError()

        if not self._backend.has_credential:
            logger.error("Asset proxy request for %s refused: no upstream credential", identifier)
            raise CredentialNotConfiguredError()

        with observability.span("asset_proxy.fetch", identifier=identifier):
            try:
                asset = await self._backend.open(identifier)
            except UpstreamStatusError as exc:
                if observability.is_available():
                    observability.warning(
                        "Upstream rejected {identifier} with {status}",
                        identifier=identifier,
                        status=exc.status_code,
                    )
                else:
                    logger.warning(
                        "Upstream rejected %s with %s %s", identifier, exc.status_code, exc.reason
                    )
                raise UpstreamRejectedError(exc.status_code, exc.reason) from None
            except Exception as exc:
                # Transport errors and anything malformed in the response
                self._log_failure(identifier, exc)
                raise TransportFailureError() from None

        return asset

    async def stream(self, identifier: str, asset: UpstreamAsset) -> AsyncIterator[bytes]:
        """Relay the body of an opened asset, logging mid-stream failures."""
        try:
            async for chunk in asset.iter_bytes():
                yield chunk
        except UpstreamTransportError as exc:
            self._log_failure(identifier, exc)
            raise

    async def read(self, identifier: str | None) -> tuple[str, bytes]:
        """Fetch the whole asset as ``(content_type, body)``."""
        asset = await self.fetch(identifier)
        try:
            body = await asset.read()
        except UpstreamTransportError as exc:
            self._log_failure(str(identifier), exc)
            raise TransportFailureError() from None
        return asset.content_type, body

    async def close(self) -> None:
        await self._backend.close()
