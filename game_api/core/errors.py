"""API error types and the handlers that render them as ``{"error": ...}``."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base for errors that end a request with a JSON ``error`` body."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(APIError):
    """A required field is missing or empty."""


class ConflictError(APIError):
    """Username or email already taken."""


class AuthError(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(APIError):
    status_code = status.HTTP_404_NOT_FOUND


class StoreError(APIError):
    """Store failure reported to the caller with the store's own message."""

    @classmethod
    def from_exc(cls, exc: Exception) -> "StoreError":
        return cls(store_error_message(exc))


class ServerError(APIError):
    """Store or hashing failure reported with a generic message."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def store_error_message(exc: Exception) -> str:
    """Driver message of a database error, without SQLAlchemy's statement dump."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query"))
    msg = first.get("msg", "Invalid request")
    return f"{field}: {msg}" if field else msg


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc.__cause__)
    else:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _validation_message(exc)
    logger.info("%s %s -> 400: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
