from typing import Any, Dict, Optional, Union
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from school_directory.core.logging import logger


class BaseAPIError(Exception):
    """Base exception class for API errors"""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Union[Dict[str, Any], str]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(message)


class BadRequestError(BaseAPIError):
    """Raised when the request is missing required data"""
    def __init__(
        self,
        message: str = "Bad request",
        details: Optional[Union[Dict[str, Any], str]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="BAD_REQUEST",
            details=details
        )


class ValidationError(BaseAPIError):
    """Raised when input validation fails"""
    def __init__(
        self,
        message: str = "Validation error",
        details: Optional[Union[Dict[str, Any], str]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="VALIDATION_ERROR",
            details=details
        )


class UploadError(BaseAPIError):
    """Raised when an uploaded file is rejected"""
    def __init__(
        self,
        message: str = "Invalid upload",
        details: Optional[Union[Dict[str, Any], str]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="UPLOAD_ERROR",
            details=details
        )


class DatabaseError(BaseAPIError):
    """Raised when there's a database-related error"""
    def __init__(
        self,
        message: str = "Database error occurred",
        details: Optional[Union[Dict[str, Any], str]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="DB_ERROR",
            details=details
        )


class ServerError(BaseAPIError):
    """Raised for unexpected server-side failures"""
    def __init__(
        self,
        message: str = "Internal server error",
        details: Optional[Union[Dict[str, Any], str]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="INTERNAL_ERROR",
            details=details
        )


def get_error_message(error: Union[Exception, str]) -> Dict[str, Any]:
    """
    Formats an error into the JSON body returned by the API.

    Args:
        error: The exception that was raised or an error message string

    Returns:
        Dict with an ``error`` message and, when available, ``details``
    """
    if isinstance(error, str):
        return {"error": error}

    if isinstance(error, BaseAPIError):
        body: Dict[str, Any] = {"error": error.message}
        if error.details:
            body["details"] = error.details
        return body

    if isinstance(error, StarletteHTTPException):
        return {"error": str(error.detail)}

    return {"error": "An unexpected error occurred"}


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


async def api_error_handler(request: Request, exc: BaseAPIError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"{exc.error_code}: {exc.message}",
        extra={"request_id": _request_id(request), "path": request.url.path}
    )
    return JSONResponse(status_code=exc.status_code, content=get_error_message(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        content = {"error": f"Method {request.method} not allowed"}
    else:
        content = get_error_message(exc)
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None)
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = {
        ".".join(str(part) for part in err["loc"][1:]) or "body": err["msg"]
        for err in exc.errors()
    }
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request", "details": details}
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}",
        exc_info=exc,
        extra={"request_id": _request_id(request)}
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "details": str(exc)}
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(BaseAPIError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
