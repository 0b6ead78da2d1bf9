from __future__ import annotations

from functools import lru_cache

import httpx

from image_gateway.config import Settings, get_settings
from image_gateway.models import ImageResponse
from image_gateway.services.local_resolver import resolve_local
from image_gateway.services.proxy_relay import resolve_proxy


class ImageGateway:  # pylint: disable=too-few-public-methods
    """Resolves size tokens to images against one immutable configuration."""

    def __init__(self, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._settings = settings
        self._transport = transport

    @property
    def settings(self) -> Settings:
        return self._settings

    def resolve_local(self, token: str) -> ImageResponse:
        return resolve_local(token, self._settings)

    async def resolve_proxy(self, token: str) -> ImageResponse:
        return await resolve_proxy(token, self._settings, transport=self._transport)


@lru_cache()
def get_gateway() -> ImageGateway:
    return ImageGateway(get_settings())
