"""Error taxonomy and the FastAPI handlers that render it."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Server error"


class ValidationError(HTTPException):
    """Malformed or out-of-range input, reported as field-level messages."""

    def __init__(self, field: str, message: str):
        super().__init__(status_code=400, detail="Validation failed")
        self.errors = [{"field": field, "message": message}]


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=404, detail=detail)


class ForbiddenError(HTTPException):
    def __init__(self, detail: str = "Not authorized"):
        super().__init__(status_code=403, detail=detail)


class UnauthorizedError(HTTPException):
    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


class InternalError(HTTPException):
    def __init__(self):
        super().__init__(status_code=500, detail=GENERIC_SERVER_ERROR)


def _field_name(loc: tuple) -> str:
    # loc looks like ("body", "coordinates", "lat") or ("query", "page")
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts)


def _validation_response(errors: list[dict]) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": "Validation failed", "errors": errors})


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _validation_response(exc.errors)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": _field_name(tuple(err.get("loc", ()))), "message": err.get("msg", "Invalid value")}
        for err in exc.errors()
    ]
    return _validation_response(errors)


def _internal_response() -> JSONResponse:
    err = InternalError()
    return JSONResponse(status_code=err.status_code, content={"detail": err.detail})


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database failure on %s %s", request.method, request.url.path)
    return _internal_response()


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _internal_response()


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
