"""Exception handlers mapping domain errors to HTTP responses."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from points.domain.error import (
    AlreadyExistsError,
    AlreadyProcessedError,
    DomainError,
    ForbiddenError,
    NotFoundError,
    NotVerifiedError,
    PromotionAlreadyUsedError,
)
from points.interface.error import AuthenticationError
from points.util.jwt import JWTError
from points.util.logging import get_logger

logger = get_logger(__name__)

# Checked in order; the first matching class wins
DOMAIN_STATUS: list[tuple[type[DomainError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (NotVerifiedError, status.HTTP_403_FORBIDDEN),
    (AlreadyProcessedError, status.HTTP_409_CONFLICT),
    (PromotionAlreadyUsedError, status.HTTP_409_CONFLICT),
    (AlreadyExistsError, status.HTTP_409_CONFLICT),
]


def status_for(error: DomainError) -> int:
    """HTTP status code for a domain error; 400 unless listed above."""
    for error_type, code in DOMAIN_STATUS:
        if isinstance(error, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


def _error_response(code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=code, content={"error": message})


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    code = status_for(exc)
    logger.info(
        "Domain error on %s %s: %s (%s)",
        request.method,
        request.url.path,
        type(exc).__name__,
        code,
    )
    return _error_response(code, str(exc))


async def handle_unauthenticated(request: Request, exc: Exception) -> JSONResponse:
    logger.info("Unauthenticated request to %s: %s", request.url.path, exc)
    return _error_response(status.HTTP_401_UNAUTHORIZED, str(exc))


async def handle_bad_value(request: Request, exc: Exception) -> JSONResponse:
    """Malformed identifiers and values that fail domain validation."""
    logger.info("Invalid value on %s: %s", request.url.path, exc)
    return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid request value")


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain error mapping on an application.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(AuthenticationError, handle_unauthenticated)
    app.add_exception_handler(JWTError, handle_unauthenticated)
    app.add_exception_handler(ValueError, handle_bad_value)
