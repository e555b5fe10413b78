"""
Error kinds raised by the shortener and their HTTP translation.

The set is closed: every failure a request can hit is one of
InvalidURL, NotFound or StorageError. Each carries a human-readable
message and the status code it maps to, and a single handler turns
any of them into the same JSON body:

    {"message": "...", "status_code": 422}
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException


logger = logging.getLogger(__name__)


class ApiError(BaseModel):
    """Error body returned on every failure path"""
    message: str
    status_code: int


class AppError(Exception):
    """Base class for the shortener's error kinds"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    prefix: str = "Error"

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(self.message)

    @property
    def message(self) -> str:
        if self.detail:
            return f"{self.prefix}: {self.detail}"
        return self.prefix


class InvalidURL(AppError):
    """Input could not be parsed as an absolute URL"""
    status_code = 422  # Unprocessable Content
    prefix = "URL Parse Error"


class NotFound(AppError):
    """No link is stored under the requested id"""
    status_code = status.HTTP_404_NOT_FOUND
    prefix = "Link not found"


class StorageError(AppError):
    """Any database failure during insert or lookup"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    prefix = "Database Error"


def error_response(exc: AppError) -> JSONResponse:
    """Build the JSON response for an error kind"""
    body = ApiError(message=exc.message, status_code=exc.status_code)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return error_response(exc)


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Malformed request bodies (not JSON, missing or non-string "url")
    get the same body shape as a URL that fails validation.
    """
    errors = exc.errors()
    detail = errors[0].get("msg", "invalid request body") if errors else "invalid request body"
    logger.info(f"Rejected request body on {request.url.path}: {detail}")
    return error_response(InvalidURL(detail))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing errors (unknown path, wrong method) in the same body shape"""
    body = ApiError(message=str(exc.detail), status_code=exc.status_code)
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(),
        headers=getattr(exc, "headers", None)
    )
