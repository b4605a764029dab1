"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request logging), registers exception handlers and includes all API routers.
When the configured static directory exists it is served at the root, after
the API routes, so the browser client and the API share one origin.
"""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from asset_mcp_bridge.core.logging_config import get_logger, setup_logging
from asset_mcp_bridge.core.monitoring import initialize_logfire

from .api.v1 import folders, health, oauth, tools
from .core.config import PROJECT_NAME, VERSION, settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestLoggingMiddleware
from .services.deps import close_services

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Starts optional monitoring on startup and closes the shared HTTP clients
    on shutdown.
    """
    logger.info(f"Starting up {PROJECT_NAME} (upstream SSE: {settings.upstream.sse_url})")
    if not settings.oauth.client_id:
        logger.warning("OAUTH_CLIENT_ID is not set; /exchange will be rejected upstream")
    initialize_logfire(app)

    yield

    logger.info(f"Shutting down {PROJECT_NAME}...")
    await close_services()


app = FastAPI(
    title=PROJECT_NAME,
    description="""
    Asset MCP Bridge API

    Relays OAuth code exchange and remote MCP tool calls (tools/list, tools/call)
    for a browser client, and runs the folder cleanup workflow.
    """,
    version=VERSION,
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(RequestLoggingMiddleware)

setup_exception_handlers(app)

app.include_router(health.router, tags=["health"])
app.include_router(oauth.router, tags=["oauth"])
app.include_router(tools.router, tags=["tools"])
app.include_router(folders.router, tags=["folders"])

static_dir = Path(settings.static_dir)
if static_dir.is_dir():
    app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    logger.info(f"Serving static files from {static_dir.resolve()}")
else:
    logger.debug(f"Static directory {static_dir} not found; serving API only")


def run() -> None:
    """Run the server with uvicorn using the configured host and port."""
    import uvicorn

    uvicorn.run(
        "asset_mcp_bridge.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
