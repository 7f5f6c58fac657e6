"""Exceptions and the global handlers that turn them into envelope responses."""

from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.packages.explorer.core.constants import (
    ALREADY_EXISTS_MARKER,
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_CONFLICT,
    HTTP_STATUS_INTERNAL_SERVER_ERROR,
    HTTP_STATUS_NOT_FOUND,
    INTERNAL_SERVER_ERROR_MESSAGE,
    NOT_FOUND_MARKER,
    VALIDATION_MARKER,
)
from app.packages.explorer.core.logger import get_request_id, logger
from app.packages.explorer.core.responses import create_error_response


class AppException(HTTPException):
    """Business error carrying its own status code and an optional payload."""

    def __init__(self, msg: str, code: int = status.HTTP_400_BAD_REQUEST, data=None) -> None:
        super().__init__(status_code=code, detail=msg)
        self.data = data

    def __str__(self) -> str:
        return str(self.detail)


class ValidationError(AppException):
    """A required field is missing or a value is malformed."""

    def __init__(self, msg: str, data=None) -> None:
        super().__init__(msg, HTTP_STATUS_BAD_REQUEST, data)


class NotFoundError(AppException):
    """An id or reference does not resolve."""

    def __init__(self, msg: str, data=None) -> None:
        super().__init__(msg, HTTP_STATUS_NOT_FOUND, data)


class ConflictError(AppException):
    """Duplicate path, or a delete blocked by existing children."""

    def __init__(self, msg: str, data=None) -> None:
        super().__init__(msg, HTTP_STATUS_CONFLICT, data)


def status_for_message(message: str) -> int:
    """Recover a status code from the text of an untyped error."""
    lowered = (message or "").lower()
    if NOT_FOUND_MARKER in lowered:
        return HTTP_STATUS_NOT_FOUND
    if ALREADY_EXISTS_MARKER in lowered:
        return HTTP_STATUS_CONFLICT
    if VALIDATION_MARKER in lowered:
        return HTTP_STATUS_BAD_REQUEST
    return HTTP_STATUS_INTERNAL_SERVER_ERROR


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:  # pragma: no cover - framework glue
    """Render any ``HTTPException`` (including ``AppException``) as an envelope."""
    payload = create_error_response(str(exc.detail), exc.status_code, getattr(exc, "data", None))
    return JSONResponse(status_code=exc.status_code, content=payload, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # pragma: no cover - framework glue
    """Request body/param validation failures become 400 responses."""

    def _serialize(obj: Any) -> Any:
        if isinstance(obj, Exception):
            return str(obj)
        if isinstance(obj, dict):
            return {key: _serialize(value) for key, value in obj.items()}
        if isinstance(obj, (list, tuple)):
            return [_serialize(item) for item in obj]
        return obj

    payload = create_error_response(
        "Request validation failed", HTTP_STATUS_BAD_REQUEST, _serialize(exc.errors())
    )
    return JSONResponse(status_code=HTTP_STATUS_BAD_REQUEST, content=payload)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # pragma: no cover - framework glue
    """Fallback: map by message text, never leak unexpected errors to the client."""
    message = str(exc)
    code = status_for_message(message)
    if code == HTTP_STATUS_INTERNAL_SERVER_ERROR:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        message = INTERNAL_SERVER_ERROR_MESSAGE
    else:
        logger.warning("Untyped error on %s %s: %s", request.method, request.url.path, message)
    # ServerErrorMiddleware answers outside RequestIdMiddleware, so echo the id here
    request_id = get_request_id()
    headers = {"X-Request-ID": request_id} if request_id else None
    return JSONResponse(status_code=code, content=create_error_response(message, code), headers=headers)
