"""FastAPI exception handlers for custom exceptions."""

from __future__ import annotations

from fastapi import Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from techdocs.exceptions import (
    ConnectivityError,
    NotFoundError,
    ReadError,
    StorageError,
    TechDocsError,
    UploadError,
)


def status_code_for(exc: TechDocsError) -> int:
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ReadError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, (UploadError, ConnectivityError)):
        return status.HTTP_502_BAD_GATEWAY
    if isinstance(exc, StorageError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def techdocs_exception_handler(request: Request, exc: TechDocsError) -> JSONResponse:
    """Handle publisher-specific exceptions."""
    status_code = status_code_for(exc)

    logger.error(
        "TechDocs exception: {type} - {message}",
        type=type(exc).__name__,
        message=str(exc),
        details=exc.details,
    )

    return JSONResponse(
        status_code=status_code,
        content={
            "error": type(exc).__name__,
            "message": exc.message,
            "details": exc.details,
        },
    )
