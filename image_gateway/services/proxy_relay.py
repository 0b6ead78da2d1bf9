"""Fetch ``<size>.jpg`` from the origin server and relay it.

The whole upstream body is buffered before anything is returned, so a client
never receives a partial image. A single failure is surfaced immediately;
nothing is retried.
"""
from __future__ import annotations

import logging

import httpx

from image_gateway.config import Settings
from image_gateway.models import DEFAULT_CONTENT_TYPE, ImageResponse, image_filename, is_valid_size_token
from image_gateway.services.errors import BadUpstreamBody, NotFound, UpstreamError, UpstreamUnavailable

logger = logging.getLogger(__name__)


def upstream_url(token: str, settings: Settings) -> str:
    # Plain concatenation; the base URL is expected to end with "/".
    return f"{settings.origin_url_base}{image_filename(token)}"


def _content_type(response: httpx.Response) -> str:
    value = response.headers.get("content-type", "").strip()
    # Values that cannot be sent back as a latin-1 header count as unparsable.
    if not value or not (value.isascii() and value.isprintable()):
        return DEFAULT_CONTENT_TYPE
    return value


async def resolve_proxy(
    token: str,
    settings: Settings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ImageResponse:
    """Relay the origin's image for ``token``.

    Parameters
    ----------
    token : str
        Size token from the request path.
    settings : Settings
        Gateway configuration (origin base URL, timeout, body cap).
    transport : httpx.AsyncBaseTransport, optional
        Transport for the per-call client. Tests pass an ``httpx.MockTransport``.

    Raises
    ------
    NotFound
        The token is rejected; no upstream request is made.
    UpstreamUnavailable
        The origin could not be reached.
    UpstreamError
        The origin answered with a non-2xx status.
    BadUpstreamBody
        The body failed mid-stream or exceeded ``max_upstream_bytes``.
    """

    if not is_valid_size_token(token):
        logger.error("Rejected size token %r for proxy image", token)
        raise NotFound(f"Invalid size token: {token!r}", token=token)

    url = upstream_url(token, settings)
    logger.debug("GET %s", url)

    async with httpx.AsyncClient(
        timeout=settings.upstream_timeout,
        follow_redirects=True,
        transport=transport,
    ) as client:
        try:
            request = client.build_request("GET", url)
            response = await client.send(request, stream=True)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            logger.error("Failed to fetch image from origin %s (token=%s): %s", url, token, exc)
            raise UpstreamUnavailable(str(exc), token=token, url=url) from exc

        try:
            if not response.is_success:
                logger.error("Origin returned %d for %s (token=%s)", response.status_code, url, token)
                raise UpstreamError(response.status_code, token=token, url=url)

            content_type = _content_type(response)
            body = bytearray()
            try:
                async for chunk in response.aiter_bytes():
                    body.extend(chunk)
                    if len(body) > settings.max_upstream_bytes:
                        logger.error(
                            "Origin body for %s exceeds %d bytes (token=%s)",
                            url,
                            settings.max_upstream_bytes,
                            token,
                        )
                        raise BadUpstreamBody(
                            f"Upstream body larger than {settings.max_upstream_bytes} bytes",
                            token=token,
                            url=url,
                        )
            except httpx.HTTPError as exc:
                logger.error("Failed to read response body from %s (token=%s): %s", url, token, exc)
                raise BadUpstreamBody(str(exc), token=token, url=url) from exc
        finally:
            await response.aclose()

    logger.debug("Proxied %s (%d bytes, %s)", url, len(body), content_type)
    return ImageResponse(content_type=content_type, body=bytes(body))
