"""Application errors and the structured error responses they map to."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def build_error_payload(code: str, message: str, details: Optional[Any] = None) -> Dict[str, Any]:
    payload = {"error": {"code": code, "message": message}}
    if details is not None:
        payload["error"]["details"] = details
    return payload


class AppError(Exception):
    """Base class for every failure the services surface to their callers."""

    code = "app_error"
    default_message = "Application error"

    def __init__(self, message: Optional[str] = None, details: Optional[Any] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    @property
    def payload(self) -> Dict[str, Any]:
        return build_error_payload(self.code, self.message, self.details)


class ValidationError(AppError):
    """
    Malformed or missing input.

    ``details`` is a list of ``{"field": ..., "message": ...}`` entries, one per
    violated field.
    """

    code = "validation_error"
    default_message = "Validation failed"

    def __init__(self, errors: List[Dict[str, str]], message: Optional[str] = None):
        super().__init__(message, details=errors)
        self.errors = errors

    @property
    def fields(self) -> List[str]:
        return [error["field"] for error in self.errors]


class InvalidReferenceError(AppError):
    """A referenced entity (e.g. the assignee) does not exist."""

    code = "invalid_reference"
    default_message = "Referenced entity does not exist"


class NotFoundError(AppError):
    code = "not_found"
    default_message = "Not found"


class ForbiddenError(AppError):
    code = "forbidden"
    default_message = "Access denied"


class UnauthenticatedError(AppError):
    code = "unauthenticated"
    default_message = "Invalid authentication credentials"


class ConflictError(AppError):
    code = "conflict"
    default_message = "Conflict"


class StoreError(AppError):
    """Opaque persistence failure; callers may retry."""

    code = "store_error"
    default_message = "Storage backend unavailable"


# Transport mapping lives here, not in the services.
HTTP_STATUS_BY_ERROR = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidReferenceError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    UnauthenticatedError: status.HTTP_401_UNAUTHORIZED,
    ConflictError: status.HTTP_409_CONFLICT,
    StoreError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_code_for(exc: AppError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in HTTP_STATUS_BY_ERROR:
            return HTTP_STATUS_BY_ERROR[error_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    headers = None
    if isinstance(exc, UnauthenticatedError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=status_code, content=exc.payload, headers=headers)


async def request_validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Render FastAPI's request validation failures in the same envelope as ValidationError."""
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({"field": ".".join(location) or "request", "message": error.get("msg", "Invalid value")})
    payload = build_error_payload(ValidationError.code, ValidationError.default_message, errors)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=payload)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
