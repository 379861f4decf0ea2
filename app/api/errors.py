import logging
from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config.settings import Config
from app.core.errors import ErrorKind, ProxyError

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Internal server error"
GENERIC_MESSAGE = "Failed to process video download"

# One status per failure kind
ERROR_STATUS: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.RESOLUTION: 400,
    ErrorKind.INVALID_CONTENT: 400,
    ErrorKind.FETCH: 500,
    ErrorKind.UNEXPECTED: 500,
}

# Kinds whose message is safe to show the caller verbatim
CLIENT_KINDS = {ErrorKind.VALIDATION, ErrorKind.RESOLUTION, ErrorKind.INVALID_CONTENT}


def error_kind(exc: BaseException) -> ErrorKind:
    if isinstance(exc, ProxyError):
        return exc.kind
    return ErrorKind.UNEXPECTED


def error_response(exc: BaseException, expose_details: bool) -> JSONResponse:
    """Map a pipeline failure to its status code and JSON body"""
    kind = error_kind(exc)
    status_code = ERROR_STATUS[kind]

    if kind in CLIENT_KINDS:
        return JSONResponse(status_code=status_code, content={"error": exc.message})

    return JSONResponse(
        status_code=status_code,
        content={
            "error": GENERIC_ERROR,
            "message": str(exc) if expose_details else GENERIC_MESSAGE,
        }
    )


def register_exception_handlers(app: FastAPI, config: Config) -> None:
    """Boundary handlers for anything the route handlers did not catch"""
    expose_details = config.is_development

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled error on {request.url.path}: {exc}",
            exc_info=exc,
            extra={"path": request.url.path, "error": str(exc)}
        )
        content: Dict[str, Optional[str]] = {"error": "Something went wrong"}
        if expose_details:
            content["message"] = str(exc)
        return JSONResponse(status_code=500, content=content)
