from __future__ import annotations

import os
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from services.api.exception_handlers import techdocs_exception_handler
from services.api.routes import router as techdocs_router
from techdocs.exceptions import TechDocsError
from techdocs.logging_config import setup_logging
from techdocs.publish.factory import create_publisher
from techdocs.publish.publisher import Publisher
from techdocs.settings import Settings, get_settings

STATIC_DOCS_PREFIX = "/static/docs"


def _configure_logging(settings: Settings) -> None:
    json_logging = os.getenv("JSON_LOGGING")
    log_file = os.getenv("LOG_FILE") or settings.logging.file
    setup_logging(
        level=os.getenv("LOG_LEVEL", settings.logging.level),
        json_format=(
            json_logging.lower() in {"true", "1", "yes"}
            if json_logging is not None
            else settings.logging.json_format
        ),
        log_file=Path(log_file) if log_file else None,
    )


def create_app(settings: Settings | None = None, publisher: Publisher | None = None) -> FastAPI:
    if publisher is None:
        settings = settings or get_settings()
        _configure_logging(settings)
        publisher = create_publisher(settings)

    app = FastAPI(
        title="TechDocs Publisher",
        version="0.1.0",
        description="Publishes generated documentation sites to object storage and serves them",
    )
    app.state.publisher = publisher

    ui_origin = os.getenv("UI_ORIGIN", "http://localhost:3000")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[ui_origin],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    async def _check_storage() -> None:
        # The probe runs in the background; requests are served meanwhile
        if publisher.connectivity_check is None:
            publisher.start_connectivity_check()
        logger.info("API initialised with storage location={location}", location=publisher.location)

    @app.get("/healthz", tags=["meta"])
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    app.add_exception_handler(TechDocsError, techdocs_exception_handler)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.opt(exception=exc).error("Unhandled exception")
        return JSONResponse(
            status_code=500,
            content={
                "error": type(exc).__name__,
                "message": str(exc),
            },
        )

    app.include_router(techdocs_router)
    app.include_router(publisher.docs_router(), prefix=STATIC_DOCS_PREFIX)

    return app


app = create_app()


__all__ = ["app", "create_app", "STATIC_DOCS_PREFIX"]
