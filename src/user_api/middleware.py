"""Middleware and error handlers for the FastAPI application.

Every failure leaves the service as ``{"message": ...}`` JSON. An error that
carries an HTTP status keeps it, anything else becomes a 500 whose details
are only logged.
"""

import logging
import time
from collections.abc import Awaitable, Callable

from azure.cosmos.exceptions import CosmosHttpResponseError
from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from user_api.exceptions import UserApiError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"
VALIDATION_ERROR_STATUS = 422


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the uniform error response."""
    return JSONResponse(status_code=status_code, content={"message": message})


def _log_error(request: Request, status_code: int, message: str, exc: Exception) -> None:
    if status_code >= 500:
        logger.error("%s %s failed with %d: %s", request.method, request.url.path, status_code, exc, exc_info=exc)
    else:
        logger.warning("%s %s failed with %d: %s", request.method, request.url.path, status_code, message)


def _validation_message(exc: RequestValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}" for error in exc.errors()
    )


def setup_error_handlers(app: FastAPI) -> None:
    """Register the exception handlers that turn errors into JSON responses.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(UserApiError)
    async def user_api_error_handler(request: Request, exc: UserApiError) -> JSONResponse:
        _log_error(request, exc.status_code, exc.message, exc)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _validation_message(exc)
        _log_error(request, VALIDATION_ERROR_STATUS, message, exc)
        return error_response(VALIDATION_ERROR_STATUS, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = str(exc.detail)
        _log_error(request, exc.status_code, message, exc)
        return error_response(exc.status_code, message)

    @app.exception_handler(CosmosHttpResponseError)
    async def store_error_handler(request: Request, exc: CosmosHttpResponseError) -> JSONResponse:
        status_code = exc.status_code or status.HTTP_500_INTERNAL_SERVER_ERROR
        message = f"Document store error: {exc.reason}" if exc.reason else "Document store error"
        _log_error(request, status_code, message, exc)
        return error_response(status_code, message)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        _log_error(request, status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE, exc)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def setup_middleware(app: FastAPI) -> None:
    """Setup middleware for the FastAPI application.

    Args:
        app: FastAPI application instance
    """

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        start = time.perf_counter()
        # Unhandled errors surface here before the 500 handler runs
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.info("%s %s -> %d (%.1f ms)", request.method, request.url.path, status_code, elapsed_ms)

    setup_error_handlers(app)
