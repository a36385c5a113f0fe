"""Error handling middleware."""

import logging
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ...config import get_settings

logger = logging.getLogger(__name__)


async def error_handler_middleware(
    request: Request,
    call_next: Callable,
) -> Response:
    """
    Global error handler middleware.

    Catches unhandled exceptions and returns a JSON error body instead
    of a bare 500.
    """
    try:
        return await call_next(request)
    except Exception as e:
        logger.exception(f"Unhandled error processing {request.method} {request.url.path}")

        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(e) if get_settings().debug else "An unexpected error occurred",
            },
        )


def setup_error_handlers(app: FastAPI) -> None:
    """Register the middleware and exception handlers on the app."""
    app.middleware("http")(error_handler_middleware)

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": "Validation error", "detail": str(exc)},
        )

    @app.exception_handler(ValidationError)
    async def model_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"error": "Invalid data", "detail": exc.errors(include_url=False)},
        )
