"""Exception handlers rendering every failure as ``{"error", "message"}``."""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shortener.errors import ShortenerError, Internal

logger = logging.getLogger("url_shortener.web")


def error_response(status_code: int, message: str) -> JSONResponse:
    """JSON error body with the reason phrase as ``error``."""
    try:
        reason = HTTPStatus(status_code).phrase
    except ValueError:
        reason = "Error"
    return JSONResponse(
        status_code=status_code,
        content={"error": reason, "message": message},
    )


async def shortener_error_handler(request: Request, exc: ShortenerError):
    """Handle service errors."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return error_response(exc.status_code, exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies as 400 instead of FastAPI's 422."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{loc}: {first.get('msg')}" if loc else str(first.get("msg"))
    else:
        message = "Invalid request"
    logger.warning(f"{request.method} {request.url.path} invalid request: {message}")
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions (unknown routes, wrong methods)."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        logger.warning(f"Route not found: {request.method} {request.url.path}")
        return error_response(exc.status_code, "Route not found")
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Last resort: report 500 without internal details."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    error = Internal("Internal server error")
    return error_response(error.status_code, error.message)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the app."""
    app.add_exception_handler(ShortenerError, shortener_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
