"""
    Centralized exception handling for the FastAPI application, plus the
    errors raised by the dashboard client when talking to the gateway.
"""
from typing import Optional
from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging

log = logging.getLogger(__name__)

class APIException(Exception):
    """Base class for API exceptions."""
    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(self.detail)

class ClientInputError(APIException):
    """Exception for requests missing a required input."""
    def __init__(self, detail: str):
        super().__init__(status_code=400, detail=detail)

class NoFileProvidedException(ClientInputError):
    """Exception for uploads without a file."""
    def __init__(self):
        super().__init__(detail="No file provided")

class MissingKeyException(ClientInputError):
    """Exception for deletes without a storage key."""
    def __init__(self):
        super().__init__(detail="Image key is required")

class BackendError(APIException):
    """
        Exception for storage provider failures.
        The detail is shown to users, so it never carries the provider error.
    """
    def __init__(self, detail: str):
        super().__init__(status_code=500, detail=detail)

class S3UploadException(BackendError):
    """Exception for S3 upload failures."""
    def __init__(self, detail: str = "File upload failed"):
        super().__init__(detail=detail)

class S3ListException(BackendError):
    """Exception for S3 list failures."""
    def __init__(self, detail: str = "Failed to fetch S3 objects"):
        super().__init__(detail=detail)

class S3DeleteException(BackendError):
    """Exception for S3 delete failures."""
    def __init__(self, detail: str = "Failed to delete image"):
        super().__init__(detail=detail)

def error_response(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "error": detail},
    )

async def api_exception_handler(request: Request, exc: APIException):
    """Handles API exceptions."""
    log.error("API Exception: %s", exc.detail, exc_info=exc)
    return error_response(exc.status_code, exc.detail)

async def http_exception_handler(request: Request, exc: HTTPException):
    """Handles FastAPI HTTP exceptions."""
    log.error("HTTP Exception: %s", exc.detail, exc_info=exc)
    return error_response(exc.status_code, exc.detail)

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Maps request validation failures onto the same error shape as the API exceptions."""
    log.error("Validation Exception: %s", exc.errors())
    # a plain form value in place of the upload counts as no file
    if any(tuple(err.get("loc", ()))[:2] == ("body", "image") for err in exc.errors()):
        return await api_exception_handler(request, NoFileProvidedException())
    return error_response(400, "Invalid request")

async def generic_exception_handler(request: Request, exc: Exception):
    """Handles all other exceptions."""
    log.error("Unhandled Exception: %s", exc, exc_info=exc)
    return error_response(500, "An unexpected error occurred.")

def add_exception_handlers(app):
    """Adds exception handlers to the FastAPI app."""
    app.add_exception_handler(APIException, api_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

# -------------------------
# Dashboard client errors
# -------------------------
class DashboardError(Exception):
    """Base class for failures seen by the dashboard client."""

class NetworkError(DashboardError):
    """The gateway could not be reached."""

class GatewayError(DashboardError):
    """The gateway answered with a non-success status."""
    def __init__(self, status_code: int, detail: Optional[str] = None):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"Gateway returned {status_code}: {detail}")
