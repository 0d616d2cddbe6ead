"""Request logging and error translation."""

import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger("mindbloom.requests")


def install_middleware(app: FastAPI) -> None:
    """Attach request logging and the storage-error handler to the app."""

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        if request.url.path.startswith("/api"):
            logger.info(
                f"{request.method} {request.url.path} {response.status_code} in {duration_ms:.0f}ms"
            )
        return response

    @app.exception_handler(SQLAlchemyError)
    async def handle_storage_error(request: Request, exc: SQLAlchemyError):
        # Query text and driver messages stay in the server log
        logger.exception(f"Storage error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )
