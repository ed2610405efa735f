"""Mapping of domain errors onto HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from inkwell.domain.error import (
    ConflictError,
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    RepositoryError,
    ValidationError,
)

# Most specific first
_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
]


def status_for(error: DomainError) -> int:
    """HTTP status for a domain error (400 for unmapped domain errors)."""
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


async def _domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, DomainError)
    code = status_for(exc)
    logfire.warn(
        "Request rejected",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
        status_code=code,
    )
    return JSONResponse(status_code=code, content={"detail": str(exc)})


async def _repository_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logfire.error("Datastore failure", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


async def _pydantic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, PydanticValidationError)
    logfire.warn("Invalid request data", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.errors(include_url=False, include_context=False)},
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logfire.exception("Unhandled error", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install exception handlers that turn domain errors into JSON responses.

    Internal failures never leak their message to the client.
    """
    app.add_exception_handler(RepositoryError, _repository_error_handler)
    app.add_exception_handler(DomainError, _domain_error_handler)
    app.add_exception_handler(PydanticValidationError, _pydantic_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
