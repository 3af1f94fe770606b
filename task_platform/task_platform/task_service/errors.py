"""
Error types and the handlers that map them to HTTP responses.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class InvalidIdError(ValueError):
    """Raised when a path identifier is not a valid ObjectId."""

    def __init__(self, resource: str = "task"):
        super().__init__(f"Invalid {resource} ID format")
        self.resource = resource


class DocumentNotFoundError(LookupError):
    """Raised when a document with the requested identifier does not exist."""

    def __init__(self, resource: str = "Task"):
        super().__init__(f"{resource} not found")
        self.resource = resource


def _error(status_code: int, message: str, details=None) -> JSONResponse:
    body = {"error": message}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


def _format_validation_errors(errors) -> list[str]:
    messages = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc)
        messages.append(f"{field}: {err.get('msg')}" if field else err.get("msg"))
    return messages


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        # Raised by the router itself when no route matches
        return _error(exc.status_code, "Route not found")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return _error(status.HTTP_400_BAD_REQUEST, "Validation failed", _format_validation_errors(exc.errors()))


async def model_validation_handler(request: Request, exc: ValidationError):
    return _error(status.HTTP_400_BAD_REQUEST, "Validation failed", _format_validation_errors(exc.errors()))


async def invalid_id_handler(request: Request, exc: InvalidIdError):
    return _error(status.HTTP_400_BAD_REQUEST, str(exc))


async def not_found_handler(request: Request, exc: DocumentNotFoundError):
    return _error(status.HTTP_404_NOT_FOUND, str(exc))


async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
    logger.warning("Duplicate key on %s %s: %s", request.method, request.url.path, exc)
    return _error(status.HTTP_400_BAD_REQUEST, "Duplicate field value")


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, model_validation_handler)
    app.add_exception_handler(InvalidIdError, invalid_id_handler)
    app.add_exception_handler(DocumentNotFoundError, not_found_handler)
    app.add_exception_handler(DuplicateKeyError, duplicate_key_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
