"""Routes serving local and proxied images by size token."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from image_gateway.models import ImageResponse
from image_gateway.services.errors import GatewayError
from image_gateway.services.gateway import ImageGateway, get_gateway

router = APIRouter(tags=["Images"])
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _to_http_error(exc: GatewayError) -> HTTPException:
    logger.debug("Mapping %s to HTTP %d", type(exc).__name__, exc.http_status)
    return HTTPException(status_code=exc.http_status, detail=exc.public_detail)


def _image_response(image: ImageResponse, extra_headers: dict[str, str] | None = None) -> Response:
    # Set the header directly so the origin's value is relayed untouched.
    headers = {"content-type": image.content_type, **(extra_headers or {})}
    return Response(content=image.body, headers=headers)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("/local/{size}")
def local_image(size: str, gateway: ImageGateway = Depends(get_gateway)):
    """Serve ``<size>.jpg`` from the images directory."""
    try:
        image = gateway.resolve_local(size)
    except GatewayError as exc:
        raise _to_http_error(exc) from exc
    return _image_response(image, {"cache-control": "no-cache"})


@router.get("/proxy/{size}")
async def proxy_image(size: str, gateway: ImageGateway = Depends(get_gateway)):
    """Fetch ``<size>.jpg`` from the origin and relay it with its content type."""
    try:
        image = await gateway.resolve_proxy(size)
    except GatewayError as exc:
        raise _to_http_error(exc) from exc
    return _image_response(image)
