"""ASGI application factory for the Folio asset proxy.

The upstream credential is read once here. A missing credential does not stop
the app from starting (it may be injected late by some deployment models);
every asset request then fails with a 500 until the process is restarted
with the credential set.
"""

import logging

import httpx
from litestar import Litestar
from litestar.types import ASGIApp

from folio.config import Settings, get_settings
from folio.controllers.asset import AssetController
from folio.lib import observability
from folio.lib.exceptions import EXCEPTION_HANDLERS
from folio.lib.proxy import AssetProxy
from folio.lib.upstream import create_upstream_backend

logger = logging.getLogger(__name__)


def create_litestar_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Litestar:
    """Create the Litestar app without observability wrapping.

    Litestar's own logging config is disabled so the process keeps whatever
    root handlers the host (hypercorn, a test runner) installed.
    """
    settings = settings or get_settings()

    if not settings.upstream_api_key:
        logger.warning("No upstream API key configured; asset requests will fail with 500")

    asset_proxy = AssetProxy(
        create_upstream_backend(settings, transport=transport),
        secret=settings.upstream_api_key,
    )

    if observability.is_available():
        observability.info("Asset proxy using {backend} upstream", backend=settings.upstream.backend)
    else:
        logger.info("Asset proxy using %s upstream", settings.upstream.backend)

    app = Litestar(
        route_handlers=[AssetController],
        exception_handlers=EXCEPTION_HANDLERS,
        on_shutdown=[asset_proxy.close],
        logging_config=None,
        debug=settings.debug,
    )
    app.state.asset_proxy = asset_proxy
    app.state.proxy_config = settings.proxy
    return app


def create_app() -> ASGIApp:
    """Create the ASGI app served by ``folio serve``."""
    settings = get_settings()
    observability.configure(settings)
    return observability.instrument_app(create_litestar_app(settings))


app = create_app()
