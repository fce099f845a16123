"""Catch-all router serving the static asset tree."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, Response

from core.dependencies import get_static_responder
from core.exceptions import AssetForbiddenError, AssetNotFoundError
from static.responder import StaticResponder

router = APIRouter(tags=["static"])


@router.api_route(
    "/{asset_path:path}",
    methods=["GET", "HEAD"],
    include_in_schema=False,
)
async def serve_asset(
    asset_path: str,
    responder: StaticResponder = Depends(get_static_responder),
) -> Response:
    """Serve a file from the asset root; `/` serves the index document."""
    try:
        return responder.respond(f"/{asset_path}")
    except AssetForbiddenError:
        return PlainTextResponse("Forbidden", status_code=403)
    except AssetNotFoundError:
        return PlainTextResponse("File not found", status_code=404)
