"""Failures an image resolution can end in.

Each error knows the HTTP status the router answers with. The client only ever
sees a generic detail message; the context (token, URL, upstream status) stays
on the exception for logging.
"""
from __future__ import annotations


class GatewayError(Exception):
    """Base class for expected, per-request resolution failures."""

    http_status: int = 500
    public_detail: str = "Internal error"

    def __init__(self, message: str, *, token: str | None = None) -> None:
        super().__init__(message)
        self.token = token


class NotFound(GatewayError):
    """No local file for the token, or the token itself is not acceptable."""

    http_status = 404
    public_detail = "Image not found"


class UpstreamUnavailable(GatewayError):
    """The origin could not be reached (DNS, refused connection, timeout)."""

    http_status = 502
    public_detail = "Bad gateway"

    def __init__(self, message: str, *, token: str | None = None, url: str | None = None) -> None:
        super().__init__(message, token=token)
        self.url = url


class UpstreamError(GatewayError):
    """The origin answered with a non-success status."""

    http_status = 502
    public_detail = "Bad gateway"

    def __init__(self, status: int, *, token: str | None = None, url: str | None = None) -> None:
        super().__init__(f"Upstream error {status}", token=token)
        self.status = status
        self.url = url


class BadUpstreamBody(GatewayError):
    """The origin answered 2xx but its body could not be read to completion."""

    http_status = 502
    public_detail = "Bad gateway"

    def __init__(self, message: str, *, token: str | None = None, url: str | None = None) -> None:
        super().__init__(message, token=token)
        self.url = url
