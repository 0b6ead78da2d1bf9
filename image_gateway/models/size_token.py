from __future__ import annotations

import re

# Tokens become a filename stem and a URL path segment.
SIZE_TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def is_valid_size_token(token: str) -> bool:
    return bool(SIZE_TOKEN_PATTERN.fullmatch(token))


def image_filename(token: str) -> str:
    """Return the ``<token>.jpg`` name shared by local files and origin paths."""

    return f"{token}.jpg"
