from .health import HealthStatus
from .image_response import DEFAULT_CONTENT_TYPE, ImageResponse
from .size_token import SIZE_TOKEN_PATTERN, image_filename, is_valid_size_token

__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "HealthStatus",
    "ImageResponse",
    "SIZE_TOKEN_PATTERN",
    "image_filename",
    "is_valid_size_token",
]
