"""
Error taxonomy and global exception handling.

Every error reaching a client is rendered as ``{"error": <message>}`` with
the HTTP status of the failure.
"""
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..utils.logging import get_logger

logger = get_logger(__name__)


class KanbanError(Exception):
    """Base exception for application errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(KanbanError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(KanbanError):
    status_code = status.HTTP_400_BAD_REQUEST


class ValidationError(KanbanError):
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidStatusTransitionError(KanbanError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, current: str, new: str) -> None:
        super().__init__(f"Invalid transition from {current} to {new}")
        self.current = current
        self.new = new


def _format_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if any(err.get("type") == "missing" for err in errors):
        return "Missing required fields"
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = first.get("msg", "Invalid request")
    return f"{location}: {message}" if location else message


async def _kanban_exception_handler(request: Request, exc: KanbanError) -> JSONResponse:
    logger.warning(
        "%s on %s %s: %s",
        type(exc).__name__, request.method, request.url.path, exc.message
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _format_validation_error(exc)
    logger.info("Rejected request to %s: %s", request.url.path, message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""
    app.add_exception_handler(KanbanError, _kanban_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
