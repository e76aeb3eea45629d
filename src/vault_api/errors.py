"""Error taxonomy of the vault and its mapping onto HTTP responses."""
import logging

import pydantic
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class VaultError(Exception):
    """Base class for every error the vault raises on purpose."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(VaultError):
    """Missing or invalid request parameters; correctable by the caller."""
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationRequired(VaultError):
    """The gateway forwarded a request without a user identity."""
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFound(VaultError):
    """The referenced name or version does not exist in the object store."""
    status_code = status.HTTP_404_NOT_FOUND


class QuotaExceeded(VaultError):
    """The object store refused the write for size or quota reasons."""
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE


class StoreUnavailable(VaultError):
    """Network, credential or service failure talking to the object store."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class MetadataSyncFailure(VaultError):
    """A metadata index call failed.

    Always absorbed where the index is called; never reaches a client.
    """


def error_body(message: str, status_code: int) -> dict:
    return {"error": message, "statusCode": status_code}


async def handle_vault_errors(request: Request, exc: VaultError) -> JSONResponse:
    """Render a ``VaultError`` with the status code of its class."""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.status_code),
    )


async def handle_pydantic_validation_errors(request: Request, exc: Exception) -> JSONResponse:
    """Render request/response model validation failures as a 400."""
    errors = exc.errors() if isinstance(exc, (pydantic.ValidationError, RequestValidationError)) else []
    message = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in errors
    ) or str(exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(message, status.HTTP_400_BAD_REQUEST),
    )


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that goes unhandled by a more specific exception handler."""
    try:
        return await call_next(request)
    except Exception:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR),
        )
