"""Utility functions for the GitHub CORS proxy."""

from fastapi import Request


def get_base_url(request: Request) -> str:
    """Public origin of the proxy as the client sees it.

    Behind a reverse proxy the ASGI server only sees the internal hop, so
    X-Forwarded-Proto and X-Forwarded-Host take precedence when present.
    """
    scheme = request.url.scheme
    host = request.url.netloc

    forwarded_proto = request.headers.get("X-Forwarded-Proto")
    if forwarded_proto and forwarded_proto.split(",")[0].strip().lower() in ("http", "https"):
        scheme = forwarded_proto.split(",")[0].strip().lower()

    forwarded_host = request.headers.get("X-Forwarded-Host")
    if forwarded_host:
        host = forwarded_host.split(",")[0].strip()

    return f"{scheme}://{host}"
