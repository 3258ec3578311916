from __future__ import annotations

import logging
import uuid
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from newsdesk.schemas.common import envelope
from newsdesk.services.push_notifications import InvalidPushTarget, PushDeliveryError, PushNotConfigured

_LOG = logging.getLogger("newsdesk.errors")


class NewsdeskError(Exception):
    default_message = "Error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class NotFound(NewsdeskError):
    default_message = "Record not found"


class ValidationError(NewsdeskError):
    default_message = "Invalid input"


class PersistenceError(NewsdeskError):
    default_message = "Database operation failed"


class ConstraintViolation(PersistenceError):
    default_message = "Database constraint violated"


def parse_uuid(value: Any, field_name: str) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value or "").strip())
    except (TypeError, ValueError):
        raise ValidationError(f'Invalid {field_name}: "{value}"')


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope(status_code, message))


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field_path = ".".join(str(p) for p in first.get("loc", ()) if p not in {"body", "query", "path"})
        detail = f"{field_path}: {first.get('msg')}" if field_path else str(first.get("msg") or "")
        message = "Invalid request payload" + (f" ({detail})" if detail else "")
        return _error_response(400, message)

    @app.exception_handler(ValidationError)
    async def _validation_error(request: Request, exc: ValidationError):
        return _error_response(400, exc.message)

    @app.exception_handler(NotFound)
    async def _not_found(request: Request, exc: NotFound):
        return _error_response(404, exc.message)

    @app.exception_handler(PersistenceError)
    async def _persistence_error(request: Request, exc: PersistenceError):
        if isinstance(exc, ConstraintViolation):
            return _error_response(409, exc.message)
        _LOG.error("persistence_error path=%s error=%s", request.url.path, exc.message)
        return _error_response(500, exc.message)

    @app.exception_handler(InvalidPushTarget)
    async def _invalid_push_target(request: Request, exc: InvalidPushTarget):
        return _error_response(400, str(exc))

    @app.exception_handler(PushNotConfigured)
    async def _push_not_configured(request: Request, exc: PushNotConfigured):
        return _error_response(503, str(exc))

    @app.exception_handler(PushDeliveryError)
    async def _push_delivery_error(request: Request, exc: PushDeliveryError):
        _LOG.warning("push_delivery_error path=%s error=%s", request.url.path, exc)
        return _error_response(502, str(exc))
