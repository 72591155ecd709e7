"""Asset proxy controller: streams upstream assets to the browser."""

from typing import Annotated

from litestar import Controller, Request, get
from litestar.params import FromPath, QueryParameter
from litestar.response import Stream

from folio.config import ProxyConfig
from folio.lib.proxy import AssetProxy


class AssetController(Controller):
    """Public, read-only asset passthrough.

    ``/drive-image/{identifier}`` is kept for documents and deployments that
    still point at the old route.
    """

    path = "/"

    async def _stream(self, request: Request, identifier: str | None) -> Stream:
        proxy: AssetProxy = request.app.state.asset_proxy
        proxy_config: ProxyConfig = request.app.state.proxy_config

        asset = await proxy.fetch(identifier)
        return Stream(
            proxy.stream(identifier, asset),
            media_type=asset.content_type,
            headers=proxy_config.response_headers(),
        )

    @get(["/asset/{identifier:str}", "/drive-image/{identifier:str}"])
    async def asset_by_path(self, request: Request, identifier: FromPath[str]) -> Stream:
        """Stream an asset named in the path."""
        return await self._stream(request, identifier)

    @get("/asset")
    async def asset_by_query(
        self,
        request: Request,
        file_id: Annotated[str | None, QueryParameter(name="id")] = None,
    ) -> Stream:
        """Stream an asset named by the ``id`` query parameter."""
        return await self._stream(request, file_id)
