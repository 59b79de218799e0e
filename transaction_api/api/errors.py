"""Plain-text rendering of request errors.

Clients receive the raw error text with no JSON envelope.
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from transaction_api.core.errors import DatabaseError


def format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        ctx_error = (error.get("ctx") or {}).get("error")
        if ctx_error and str(ctx_error) not in message:
            message = f"{message}: {ctx_error}"
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> PlainTextResponse:
    return PlainTextResponse(
        format_validation_errors(exc),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


async def database_exception_handler(request: Request, exc: DatabaseError) -> PlainTextResponse:
    return PlainTextResponse(
        str(exc),
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return PlainTextResponse(
            "Method not allowed",
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            headers=exc.headers,
        )
    return await http_exception_handler(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(DatabaseError, database_exception_handler)
    app.add_exception_handler(StarletteHTTPException, method_not_allowed_handler)
