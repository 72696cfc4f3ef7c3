"""
HTTP server for DayTally.

Builds the FastAPI application that serves the tracker JSON API and runs it
with uvicorn.
"""

from __future__ import annotations

import time
import uuid
from collections.abc import Callable

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..infra.db import init_db
from ..infra.logging import configure_logging, get_logger
from ..infra.settings import settings
from ..infra.uow import session
from ..usecases.snapshot import seed_defaults
from .api import tracker


def create_app(*, initialize_store: bool = True) -> FastAPI:
    """Create the API application.

    With ``initialize_store`` the tables are created and defaults seeded
    before the first request.
    """
    configure_logging()
    if initialize_store:
        init_db()
        with session() as db:
            seed_defaults(db)

    app = FastAPI(
        title="DayTally",
        description="Slot-based daily time tracker",
        version=__version__,
    )

    # Add CORS middleware with configurable origins
    allowed_origins = settings.allowed_origins.split(",") if settings.allowed_origins != "*" else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next: Callable) -> Response:
        """Tag each request with an id and log its outcome."""
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        logger = get_logger("request").bind(request_id=request_id)

        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
                process_time_ms=round((time.time() - start_time) * 1000, 2),
            )
            raise

        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            process_time_ms=round((time.time() - start_time) * 1000, 2),
        )
        response.headers["X-Request-ID"] = request_id
        return response

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    app.include_router(tracker.router)
    return app


def run_server(host: str | None = None, port: int | None = None) -> None:
    """Serve the API until interrupted."""
    app = create_app()
    uvicorn.run(
        app,
        host=host or settings.api_host,
        port=port or settings.api_port,
        log_level=settings.log_level.lower(),
    )
