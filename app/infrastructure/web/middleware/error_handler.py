"""
Global error handling for the FastAPI application.
Domain errors map to status codes by kind; anything else becomes a logged 500.
"""

import logging
import traceback
from typing import Any, Dict, List

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from app.application.dto.base_dto import ErrorResponseDTO
from app.domain.models.base import DomainException, ErrorKind

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Erro interno inesperado"
VALIDATION_ERROR_MESSAGE = "Erro de validação"

STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_STATE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.ATTEMPT_LIMIT_EXCEEDED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
}

_unmapped = set(ErrorKind) - set(STATUS_BY_KIND)
if _unmapped:
    raise RuntimeError(f"Error kinds without an HTTP status: {sorted(kind.value for kind in _unmapped)}")


def status_for(kind: ErrorKind) -> int:
    return STATUS_BY_KIND[kind]


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle all uncaught exceptions and format error responses.
    """

    def __init__(self, app, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next):
        """
        Process the request and handle any exceptions.
        """
        try:
            response = await call_next(request)
            return response
        except Exception as exc:
            return await self.handle_exception(request, exc)

    async def handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        """
        Log the full exception and answer with a generic 500.
        """
        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
            exc_info=True,
            extra={
                "request_path": request.url.path,
                "request_method": request.method,
                "client_host": request.client.host if request.client else None
            }
        )

        error_response: Dict[str, Any] = {
            "error": "INTERNAL_ERROR",
            "message": INTERNAL_ERROR_MESSAGE,
        }

        # In development, add more debug information
        if self.debug:
            error_response["debug"] = {
                "exception_type": type(exc).__name__,
                "traceback": traceback.format_exc().split("\n")
            }

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_response
        )


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = status_for(exc.kind)
    logger.info(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")

    headers = {"WWW-Authenticate": "Bearer"} if exc.kind == ErrorKind.UNAUTHORIZED else None
    body = ErrorResponseDTO(error=exc.code, message=exc.message)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=headers
    )


def _clean_message(message: str) -> str:
    # pydantic prefixes messages raised from custom validators
    prefix = "Value error, "
    return message[len(prefix):] if message.startswith(prefix) else message


def format_validation_errors(exc: RequestValidationError) -> List[Dict[str, str]]:
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append({
            "field": ".".join(location),
            "message": _clean_message(error.get("msg", "")),
        })
    return errors


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request-shape errors are 400s carrying the first message."""
    errors = format_validation_errors(exc)
    message = errors[0]["message"] if errors else VALIDATION_ERROR_MESSAGE
    body = ErrorResponseDTO(
        error=ErrorKind.VALIDATION_ERROR.value,
        message=message,
        details={"errors": errors},
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump(mode="json"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
