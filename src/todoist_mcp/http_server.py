"""Streamable HTTP transport.

A single ``/mcp`` endpoint handles POST (requests), GET (server stream) and
DELETE (session close). Sessions are tracked by the ``Mcp-Session-Id``
header; the session manager creates a fresh id per new session and drops it
when the session is closed or the connection goes away.
"""
import contextlib
import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.routing import Route

from . import __version__
from .context import ServerContext
from .server import create_server

logger = logging.getLogger("todoist-mcp.http")


class MCPEndpoint:
    """Raw ASGI endpoint for ``/mcp`` (exact path, no redirect to ``/mcp/``)."""

    def __init__(self, manager: StreamableHTTPSessionManager):
        self.manager = manager

    async def __call__(self, scope, receive, send):
        try:
            await self.manager.handle_request(scope, receive, send)
        except RuntimeError:
            # Session manager not running (lifespan not started)
            response = JSONResponse({"error": "MCP session manager not initialized"}, status_code=503)
            await response(scope, receive, send)


def create_app(ctx: ServerContext) -> FastAPI:
    """Create the FastAPI application hosting the MCP endpoint."""
    manager = StreamableHTTPSessionManager(create_server(ctx))

    @contextlib.asynccontextmanager
    async def lifespan(_app: FastAPI):
        async with manager.run():
            logger.info("MCP session manager started")
            try:
                yield
            finally:
                await ctx.aclose()
                logger.info("MCP session manager stopped")

    app = FastAPI(
        title="Todoist MCP Server",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["Content-Type", "mcp-session-id"],
        expose_headers=["Mcp-Session-Id"],
    )

    @app.get("/health")
    def health():
        """Liveness probe."""
        return {
            "name": "todoist-mcp",
            "version": __version__,
            "configured": bool(ctx.settings.api_token),
        }

    app.router.routes.append(Route("/mcp", MCPEndpoint(manager), methods=["GET", "POST", "DELETE"]))
    return app


def run_http(ctx: ServerContext) -> None:
    """Serve the MCP endpoint with uvicorn."""
    app = create_app(ctx)
    logger.info(f"MCP Streamable HTTP server listening on {ctx.settings.host}:{ctx.settings.port}")
    uvicorn.run(app, host=ctx.settings.host, port=ctx.settings.port, log_config=None)
