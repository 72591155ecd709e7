import logging

from litestar import Request, Response
from litestar.exceptions import HTTPException
from litestar.status_codes import (
    HTTP_400_BAD_REQUEST,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from folio.lib import observability

logger = logging.getLogger(__name__)


class AssetProxyError(HTTPException):
    """Base class for errors the asset proxy reports to its caller."""

    status_code = HTTP_500_INTERNAL_SERVER_ERROR


class MissingIdentifierError(AssetProxyError):
    """The request did not name an asset."""

    status_code = HTTP_400_BAD_REQUEST

    def __init__(self) -> None:
        super().__init__(detail="Missing file ID")


class CredentialNotConfiguredError(AssetProxyError):
    """No upstream credential is configured for this process."""

    def __init__(self) -> None:
        super().__init__(detail="API key not configured")


class UpstreamRejectedError(AssetProxyError):
    """The storage API answered with a non-success status.

    The upstream status is forwarded; only its reason phrase is exposed.
    """

    def __init__(self, status_code: int, reason: str) -> None:
        self.upstream_reason = reason
        super().__init__(
            detail=f"Failed to fetch asset: {reason}",
            status_code=status_code,
        )


class TransportFailureError(AssetProxyError):
    """The upstream request failed before a usable response arrived."""

    def __init__(self) -> None:
        super().__init__(detail="Failed to fetch asset")


def error_body(message: str) -> dict[str, str]:
    return {"error": message}


def http_exception_handler(request: Request, exc: HTTPException) -> Response:
    """Render HTTP exceptions as ``{"error": ...}`` JSON."""
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return Response(
        content=error_body(detail),
        status_code=exc.status_code,
        media_type="application/json",
    )


def internal_server_error_handler(request: Request, exc: Exception) -> Response:
    """Log unexpected exceptions and answer with a generic 500."""
    if not observability.exception(
        "Unhandled exception on {method} {path}",
        method=request.method,
        path=request.url.path,
    ):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)

    return Response(
        content=error_body("Internal Server Error"),
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        media_type="application/json",
    )


EXCEPTION_HANDLERS = {
    HTTPException: http_exception_handler,
    Exception: internal_server_error_handler,
}
