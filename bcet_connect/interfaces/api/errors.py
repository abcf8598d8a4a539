"""Exception handlers translating application errors into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from bcet_connect.config import get_settings
from bcet_connect.domain.errors import AppError, Unauthenticated

logger = logging.getLogger(__name__)

_GENERIC_MESSAGE = "Internal Server Error"


def _error_response(
    status_code: int, message: str, code: str, **extra: object
) -> JSONResponse:
    content: dict[str, object] = {"detail": message, "code": code}
    content.update(extra)
    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=status_code, content=jsonable_encoder(content), headers=headers
    )


async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", exc.code, request.method, request.url.path, exc.message)
        if get_settings().is_production:
            return _error_response(exc.status_code, _GENERIC_MESSAGE, exc.code)
    elif not isinstance(exc, Unauthenticated):
        logger.info("%s on %s %s: %s", exc.code, request.method, request.url.path, exc.message)
    return _error_response(exc.status_code, exc.message, exc.code)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        "Request validation error",
        "invalid_argument",
        errors=exc.errors(),
    )


async def _database_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    message = _GENERIC_MESSAGE if get_settings().is_production else str(exc)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, message, "persistence_failure"
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    message = _GENERIC_MESSAGE if get_settings().is_production else str(exc) or _GENERIC_MESSAGE
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message, "internal_error")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers that give every error the same JSON shape."""

    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, _database_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)


__all__ = ["register_exception_handlers"]
