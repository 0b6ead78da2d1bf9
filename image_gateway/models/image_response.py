from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_CONTENT_TYPE = "image/jpeg"


class ImageResponse(BaseModel):
    """Image bytes resolved for one request, local or relayed from the origin."""

    content_type: str = Field(DEFAULT_CONTENT_TYPE, description="MIME type sent back to the client")
    body: bytes

    @property
    def size(self) -> int:
        return len(self.body)
