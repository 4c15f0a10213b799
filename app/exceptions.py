"""
Application errors and their JSON rendering.

Services raise these; `app.main` registers `api_error_handler` so each one
becomes a response with a status code matching its kind.
"""
from typing import Any, Dict, List, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class ApiError(Exception):
    status_code = 500
    status = "error"

    def __init__(self, message: str, details: str = "", errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.errors = errors

    def to_dict(self) -> Dict[str, Any]:
        body = {
            "name": type(self).__name__,
            "status": self.status,
            "message": self.message,
            "details": self.details,
        }
        if self.errors is not None:
            body["errors"] = self.errors
        return body


class NotFoundError(ApiError):
    """No row matches the requested id or name"""
    status_code = 404
    status = "not-found"


class ValidationError(ApiError):
    """Missing or malformed fields, one message per field in `errors`"""
    status_code = 422


class CreationError(ApiError):
    """Uniqueness conflict or missing required attribute while creating"""
    status_code = 422


class AssociationError(ApiError):
    """The tree and insect are already linked"""
    status_code = 409


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def _field_message(error: Dict[str, Any]) -> str:
    # loc is ("body", "tree", "height") for nested payloads
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{location}: {error.get('msg')}" if location else str(error.get("msg"))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = ValidationError(
        "Invalid request data",
        details="Validation failed",
        errors=[_field_message(e) for e in exc.errors()],
    )
    return await api_error_handler(request, error)
