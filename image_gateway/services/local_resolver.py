"""Serve ``<size>.jpg`` files from the local images directory."""
from __future__ import annotations

import logging

from image_gateway.config import Settings
from image_gateway.models import DEFAULT_CONTENT_TYPE, ImageResponse, image_filename, is_valid_size_token
from image_gateway.services.errors import NotFound

logger = logging.getLogger(__name__)


def resolve_local(token: str, settings: Settings) -> ImageResponse:
    """Read the whole local file for ``token``.

    Local files are assumed to already be JPEGs, so the content type is fixed
    and never sniffed. Raises ``NotFound`` when the token is rejected or the
    file is missing or unreadable.
    """

    if not is_valid_size_token(token):
        logger.error("Rejected size token %r for local image", token)
        raise NotFound(f"Invalid size token: {token!r}", token=token)

    path = settings.images_path / image_filename(token)
    try:
        body = path.read_bytes()
    except OSError as exc:
        logger.error("Failed to read local image %s (token=%s): %s", path, token, exc)
        raise NotFound(f"Image not found: {path}", token=token) from exc

    logger.debug("Serving local image %s (%d bytes)", path, len(body))
    return ImageResponse(content_type=DEFAULT_CONTENT_TYPE, body=body)
