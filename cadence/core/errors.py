"""Error taxonomy and the JSON error envelope."""

from cadence.core.logging import api_logger, log_error
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class CadenceError(Exception):
    """Base class for errors rendered as ``{"ok": false, "error": ...}``."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(CadenceError):
    """Malformed body, wrong type, or unparseable identifier."""

    status_code = 400
    default_message = "Invalid input"


class UnauthorizedError(CadenceError):
    status_code = 401
    default_message = "Missing caller identity"


class NotFoundError(CadenceError):
    """Referenced track or queue item does not exist."""

    status_code = 404
    default_message = "Not found"


class ConflictError(CadenceError):
    """The queue was modified by another writer since it was loaded."""

    status_code = 409
    default_message = "Queue was modified concurrently, retry"


class InternalError(CadenceError):
    """Persistence or catalog failure."""

    status_code = 500


def error_body(message: str) -> dict:
    return {"ok": False, "error": message}


def _validation_message(exc: RequestValidationError) -> str:
    """Flatten pydantic errors to a single line."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        parts.append(f"{location}: {error.get('msg', 'invalid')}" if location else error.get("msg", "invalid"))
    return "; ".join(parts) or "Invalid request body"


async def cadence_error_handler(request: Request, exc: CadenceError) -> JSONResponse:
    if exc.status_code >= 500:
        log_error(api_logger, exc, path=request.url.path)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content=error_body(_validation_message(exc)))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log_error(api_logger, exc, path=request.url.path)
    return JSONResponse(status_code=500, content=error_body(str(exc) or InternalError.default_message))


def register_error_handlers(app: FastAPI) -> None:
    """Install the error envelope on an application."""
    app.add_exception_handler(CadenceError, cadence_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
