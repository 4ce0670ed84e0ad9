# massage_booking/core/exceptions.py
"""Domain errors with a stable ``kind`` and the HTTP status they map to"""
import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BookingError(Exception):
    kind = "booking_error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.kind, "detail": self.message}


class ValidationError(BookingError):
    """Missing or malformed input; ``fields`` maps field name to problem"""
    kind = "validation_error"
    status_code = 400

    def __init__(self, message: str, fields: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.fields = fields or {}

    @classmethod
    def for_field(cls, field: str, problem: str) -> "ValidationError":
        return cls(f"{field}: {problem}", {field: problem})

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["fields"] = self.fields
        return data


class SlotConflict(BookingError):
    """The requested interval overlaps an active appointment"""
    kind = "slot_conflict"
    status_code = 409

    def __init__(self, message: str = "Requested time overlaps an existing appointment",
                 conflicting_ids: Optional[List[str]] = None):
        super().__init__(message)
        self.conflicting_ids = conflicting_ids or []

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["conflicting_appointments"] = self.conflicting_ids
        return data


class NotFound(BookingError):
    kind = "not_found"
    status_code = 404


class ConfigurationUnavailable(BookingError):
    """Business hours or booking settings are missing; availability fails closed"""
    kind = "configuration_unavailable"
    status_code = 503


class Unauthorized(BookingError):
    kind = "unauthorized"
    status_code = 401


class Forbidden(BookingError):
    kind = "forbidden"
    status_code = 403


async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
    correlation_id = getattr(request.state, "correlation_id", "unknown")
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        f"{exc.kind}: {exc.message}",
        extra={"correlation_id": correlation_id, "path": request.url.path},
    )

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies and params use the same shape as ValidationError"""
    fields = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        fields[".".join(location) or "request"] = error.get("msg", "invalid")

    return await booking_error_handler(request, ValidationError("Invalid request", fields))


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(BookingError, booking_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
