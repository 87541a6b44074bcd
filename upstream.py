"""Upstream fetches to GitHub and response relay."""

import logging
from typing import AsyncIterator, Dict, Optional

import httpx
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from errors import UpstreamFault
from settings import get_settings

logger = logging.getLogger(__name__)

# Connection-scoped headers; the ASGI server frames the relayed body itself
HOP_BY_HOP_HEADERS = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailer",
        "transfer-encoding",
        "upgrade",
    }
)

# Shared HTTP client for connection pooling
_client: Optional[httpx.AsyncClient] = None


async def get_client() -> httpx.AsyncClient:
    """Get or lazily create the shared HTTP client."""
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(timeout=httpx.Timeout(get_settings().upstream_timeout), follow_redirects=True)
    return _client


async def close_client() -> None:
    """Close the shared HTTP client (application shutdown)."""
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
    _client = None


async def _open(url: str) -> httpx.Response:
    """Send a GET to ``url`` and return the response with its body unread."""
    client = await get_client()
    try:
        return await client.send(client.build_request("GET", url), stream=True)
    except httpx.RequestError as e:
        logger.warning(f"[Upstream] Request failed: {url} - {e}")
        raise UpstreamFault(f"Upstream request failed: {e}") from e


async def probe(url: str) -> bool:
    """Check that ``url`` answers with a 2xx status.

    Only the status line and headers are read; the body is discarded.
    """
    response = await _open(url)
    try:
        if not response.is_success:
            logger.info(f"[Upstream] Probe not OK: {url} ({response.status_code})")
            return False
        return True
    finally:
        await response.aclose()


def relay_headers(upstream_headers: httpx.Headers) -> Dict[str, str]:
    """Copy upstream response headers and open them up for any origin."""
    headers = {}
    for key, value in upstream_headers.items():
        if key.lower() in HOP_BY_HOP_HEADERS:
            continue
        headers[key.lower()] = value
    headers["access-control-allow-origin"] = "*"
    return headers


async def _iter_body(response: httpx.Response) -> AsyncIterator[bytes]:
    # Raw bytes keep the copied content-encoding and content-length valid
    try:
        async for chunk in response.aiter_raw():
            yield chunk
    except httpx.RequestError as e:
        # Status and headers are already sent; all we can do is end the body
        logger.warning(f"[Upstream] Relay interrupted: {response.url} - {e}")
    finally:
        await response.aclose()


async def forward(url: str) -> StreamingResponse:
    """Fetch ``url`` and stream the response back with a permissive CORS header."""
    response = await _open(url)
    logger.info(f"[Upstream] Relaying: {url} ({response.status_code})")
    return StreamingResponse(
        _iter_body(response),
        status_code=response.status_code,
        headers=relay_headers(response.headers),
        background=BackgroundTask(response.aclose),
    )
