"""runstream FastAPI Server.

Mounts:
- /api/threads - Create thread ids
- /api/threads/{thread_id}/runs/stream - Stream a workflow run as SSE

Architecture:
```
main.py (FastAPI app)
    └── routers/
        └── threads.py  - thread creation + run streaming
```
"""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from runstream import __version__
from runstream.api.routers.threads import router as threads_router
from runstream.settings import settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown."""
    logger.info(
        f"runstream v{__version__} starting "
        f"(workflow={settings.workflow.ref or 'default'}, env={settings.environment})"
    )
    yield
    logger.info("runstream stopped")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title="runstream API",
        version=__version__,
        description="Streams pre-built LLM workflow runs as server-sent events",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origin_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # Request logging
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"{request.method} {request.url}")
        logger.debug(f"Request headers: {dict(request.headers)}")
        return await call_next(request)

    app.include_router(threads_router, prefix="/api")

    # Health check
    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok"}

    # Root info
    @app.get("/")
    async def root() -> dict[str, Any]:
        """API information endpoint."""
        return {
            "name": "runstream API",
            "version": __version__,
            "endpoints": {
                "health": "/health",
                "threads": "/api/threads",
                "stream": "/api/threads/{thread_id}/runs/stream",
                "docs": "/docs",
            },
        }

    return app


# Create default app instance
app = create_app()
