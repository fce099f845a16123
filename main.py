"""Main application entry point for the Music Explorer gateway."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from config.settings import get_settings
from core.dependencies import close_upstream_client, flush_posthog, shutdown_posthog
from core.logging import setup_logging
from core.sentry import init_sentry
from routers.health import router as health_router
from search.router import router as search_router
from static.router import router as static_router

load_dotenv()

settings = get_settings()

init_sentry(
    dsn=settings.sentry_dsn,
    environment="production" if settings.log_level != "DEBUG" else "development",
    release=settings.app_version,
)

log_file = None
if settings.log_level != "DEBUG":
    log_dir = Path("/app/logs") if Path("/app/logs").exists() else Path("logs")
    log_file = log_dir / "music-explorer-gateway.log"
setup_logging(level=settings.log_level, log_file=log_file)

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan with proper startup and shutdown."""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Serving static files from '{settings.resolved_static_root}'")
    logger.info(f"Upstream timeout: {settings.upstream_timeout}s")

    yield

    logger.info("Shutting down application")
    shutdown_posthog()
    await close_upstream_client()
    logger.info("All services shut down")


app = FastAPI(
    title=settings.app_name,
    description="Lyrics and artist info aggregation with a static front end",
    version=settings.app_version,
    lifespan=lifespan,
)


@app.middleware("http")
async def posthog_flush_middleware(request: Request, call_next):
    """Flush PostHog events after each request to prevent data loss."""
    response = await call_next(request)
    flush_posthog()
    return response


@app.middleware("http")
async def cors_middleware(request: Request, call_next):
    """Answer preflight requests and add permissive CORS headers to every response."""
    if request.method == "OPTIONS":
        response: Response = Response(status_code=204)
    else:
        response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Generic 500 without internal detail."""
    logger.error(f"Server error on {request.url.path}: {exc!r}")
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal server error"},
        headers=CORS_HEADERS,
    )


app.include_router(health_router, prefix="", tags=["health"])
app.include_router(search_router, prefix="", tags=["search"])
# Catch-all, must stay last
app.include_router(static_router, prefix="", tags=["static"])

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
