"""
Error responses.

Maps domain exceptions to HTTP status codes. The account API answers
with JSON ``{"error": ...}``; form endpoints and the verification link
answer with plain text through the app-wide handlers registered here.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse

from src.domain.exceptions import (
    DomainError,
    DuplicateEmailError,
    InfrastructureError,
    LoginError,
    MissingTokenError,
    PayloadTooLargeError,
    TokenNotFoundError,
    UnsupportedFormatError,
    UnverifiedAccountError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific class wins (looked up along the exception's MRO)
STATUS_CODES: dict[type[DomainError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    DuplicateEmailError: status.HTTP_400_BAD_REQUEST,
    UnsupportedFormatError: status.HTTP_400_BAD_REQUEST,
    PayloadTooLargeError: 413,
    MissingTokenError: status.HTTP_400_BAD_REQUEST,
    TokenNotFoundError: status.HTTP_404_NOT_FOUND,
    LoginError: status.HTTP_400_BAD_REQUEST,
    UnverifiedAccountError: status.HTTP_403_FORBIDDEN,
    InfrastructureError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: DomainError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return status.HTTP_400_BAD_REQUEST


def json_error(exc: DomainError, message: str | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_for(exc), content={"error": message or exc.message})


async def handle_domain_error(request: Request, exc: DomainError) -> PlainTextResponse:
    """Plain-text response for domain errors raised by form endpoints."""
    code = status_for(exc)
    if code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %r", request.method, request.url.path, exc.__cause__ or exc)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return PlainTextResponse(exc.message, status_code=code)


async def handle_unexpected_error(request: Request, exc: Exception) -> PlainTextResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return PlainTextResponse(
        "Error del servidor.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
