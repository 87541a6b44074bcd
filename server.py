"""GitHub CORS proxy - relays GitHub downloads with permissive CORS headers."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

import config
import upstream
from errors import ProxyError, RouteUnmatched
from routers import github
from settings import get_settings
from usage_guide import render_usage_guide
from utils import get_base_url

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    s = get_settings()
    logger.info(
        f"Proxying GitHub downloads under {s.access_prefix}{s.routing_prefix} "
        f"(name validation: {'on' if s.enforce_name_validation else 'off'})"
    )
    yield
    # Shutdown: release pooled upstream connections
    await upstream.close_client()


async def proxy_error_handler(request: Request, exc: ProxyError) -> Response:
    """Render a ProxyError as the response sent to the client.

    Unmatched shapes get the HTML usage guide; everything else gets the
    error's fixed plain-text body. Details stay in the log.
    """
    if exc.status_code >= 500:
        logger.warning(f"[Server] {type(exc).__name__} for {request.method} {request.url.path}: {exc}")
    if isinstance(exc, RouteUnmatched):
        s = get_settings()
        guide = render_usage_guide(get_base_url(request), s.access_prefix, s.routing_prefix)
        return HTMLResponse(guide, status_code=exc.status_code)
    return PlainTextResponse(exc.body, status_code=exc.status_code)


def create_app() -> FastAPI:
    """Build the application."""
    app = FastAPI(
        title="GitHub CORS Proxy",
        description="Relays GitHub release assets, blobs and raw files with CORS enabled",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.add_exception_handler(ProxyError, proxy_error_handler)
    # Catch-all route: every path is answered by the GitHub proxy
    app.include_router(github.router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run("server:app", host=config.HOST, port=config.PORT, reload=config.DEBUG, log_level=config.LOG_LEVEL.lower())
