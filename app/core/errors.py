from __future__ import annotations

import logging
from http import HTTPStatus

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.settings import settings

logger = logging.getLogger(__name__)

NO_TOKEN_MESSAGE = "Unauthorized - No token provided"
INVALID_TOKEN_MESSAGE = "Unauthorized - Invalid token"
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"
FORBIDDEN_MESSAGE = "Forbidden - Insufficient permissions"
INTERNAL_ERROR_MESSAGE = "Internal Server Error"


class ApiError(StarletteHTTPException):
    """Base for errors raised deliberately by handlers and gates."""

    status_code_default = 500

    def __init__(self, message: str | None = None) -> None:
        super().__init__(status_code=self.status_code_default, detail=message or _default_message(self.status_code_default))


class BadRequest(ApiError):
    status_code_default = 400


class Unauthorized(ApiError):
    status_code_default = 401


class Forbidden(ApiError):
    status_code_default = 403

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or FORBIDDEN_MESSAGE)


class NotFound(ApiError):
    status_code_default = 404


def _default_message(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Request failed"


def _build_response(status_code: int, message: str) -> JSONResponse:
    payload = {
        "status": "error",
        "statusCode": status_code,
        "message": message,
    }
    return JSONResponse(status_code=status_code, content=payload)


def _original_url(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def route_not_found_response(request: Request) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"status": "error", "message": f"Route {_original_url(request)} not found"},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Router-level 404/405 means nothing matched the request
    if not isinstance(exc, ApiError) and exc.status_code in (404, 405):
        logger.info("No route for %s %s", request.method, request.url.path)
        return route_not_found_response(request)

    message = exc.detail if isinstance(exc.detail, str) and exc.detail else _default_message(exc.status_code)
    logger.warning(
        "%s %s failed with %s: %s", request.method, request.url.path, exc.status_code, message
    )
    response = _build_response(exc.status_code, message)
    headers = getattr(exc, "headers", None)
    if headers:
        response.headers.update(headers)
    return response


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0] or {}
        loc = first.get("loc") or []
        msg = first.get("msg") or message
        # Drop the request section (body/query/path) from the location
        loc_parts = [str(part) for part in loc if part not in {"body", "query", "path"}]
        message = f"{'.'.join(loc_parts)}: {msg}" if loc_parts else str(msg)
    logger.warning("%s %s rejected: %s", request.method, request.url.path, message)
    return _build_response(400, message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _build_response(500, INTERNAL_ERROR_MESSAGE)


def throttled_response(request: Request) -> PlainTextResponse:
    logger.warning("Rate limit exceeded for %s on %s", request.client.host if request.client else "unknown", request.url.path)
    return PlainTextResponse(
        f"Too many requests from this IP, please try again after {settings.rate_limit_window_minutes} minutes",
        status_code=429,
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
