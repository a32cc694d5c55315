"""Interface layer errors and HTTP error mapping."""

import logfire
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from simskut.adapter.error import AuthGatewayError, ProviderError
from simskut.domain.error import (
    BusinessRuleViolationError,
    ConflictError,
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)


class InterfaceError(Exception):
    """Base interface error."""

    pass


def status_for(error: Exception) -> int:
    """HTTP status for a domain or adapter error."""
    if isinstance(error, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(error, NotAuthorizedError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(error, ConflictError):
        return status.HTTP_409_CONFLICT
    if isinstance(error, (ValidationError, BusinessRuleViolationError, DomainError)):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(error, AuthGatewayError):
        # Provider 4xx are the caller's fault (bad credentials, duplicate email)
        if error.status_code is not None and error.status_code < 500:
            return status.HTTP_400_BAD_REQUEST
        return status.HTTP_502_BAD_GATEWAY
    if isinstance(error, ProviderError):
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def to_http_exception(error: Exception) -> HTTPException:
    """Translate an error into the HTTPException a route should raise."""
    return HTTPException(status_code=status_for(error), detail=str(error))


async def _handle_error(request: Request, exc: Exception) -> JSONResponse:
    code = status_for(exc)
    if code >= 500:
        logfire.error(
            "Request failed", path=request.url.path, error=str(exc), status_code=code
        )
    else:
        logfire.warn(
            "Request rejected", path=request.url.path, error=str(exc), status_code=code
        )
    return JSONResponse(status_code=code, content={"detail": str(exc)})


def register_error_handlers(app: FastAPI) -> None:
    """Map uncaught domain and adapter errors to JSON error responses.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(DomainError, _handle_error)
    app.add_exception_handler(ProviderError, _handle_error)
