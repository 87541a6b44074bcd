"""GitHub download proxy endpoint."""

import logging

from fastapi import APIRouter, Request

import upstream
from errors import UpstreamMissing
from path_router import PathRouter, Rejected
from settings import get_settings

router = APIRouter(tags=["github"])

logger = logging.getLogger(__name__)

# Every method is routed; the upstream fetch is always a GET
PROXY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def get_path_router() -> PathRouter:
    """Build the path router from current settings."""
    s = get_settings()
    return PathRouter(
        access_prefix=s.access_prefix,
        routing_prefix=s.routing_prefix,
        enforce_name_validation=s.enforce_name_validation,
    )


def request_path(request: Request) -> str:
    """Path exactly as the client sent it (still percent-encoded)."""
    raw_path = request.scope.get("raw_path")
    if raw_path:
        return raw_path.decode("latin-1").split("?", 1)[0]
    return request.url.path


@router.api_route("/{full_path:path}", methods=PROXY_METHODS, include_in_schema=False)
async def proxy_github(full_path: str, request: Request):
    """Proxy a GitHub download and open it up for cross-origin use.

    Release downloads are probed first and answered with 404 when GitHub
    does not have them; every other shape is relayed as-is. Rejections
    raise ProxyError, which the application's exception handler renders.
    """
    decision = get_path_router().route(request_path(request))

    if isinstance(decision, Rejected):
        raise decision.error

    if decision.probe_first and not await upstream.probe(decision.upstream_url):
        raise UpstreamMissing()

    logger.info(f"[GitHub] {request.method} {decision.match.shape.value}: {decision.upstream_url}")
    return await upstream.forward(decision.upstream_url)
