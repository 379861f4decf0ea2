import logging
import uuid
from typing import Any

from fastapi import Request
from rich.logging import RichHandler
from starlette.middleware.base import BaseHTTPMiddleware

from app.config.settings import LoggingConfig

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def setup_logging(config: LoggingConfig) -> None:
    """Configure the root logger once at startup"""
    if config.enable_rich:
        handler: logging.Handler = RichHandler(rich_tracebacks=True, show_path=False)
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(config.format))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(config.level)

    # httpx logs full request URLs at INFO, signed query strings included
    logging.getLogger("httpx").setLevel(logging.WARNING)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id for log correlation"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def log_with_context(
    request: Request,
    level: int,
    message: str,
    **kwargs: Any
) -> None:
    """
    Log with request context.
    Automatically includes request_id for tracing.
    """
    extra = {
        "request_id": getattr(request.state, "request_id", "unknown"),
        **kwargs
    }
    logger.log(level, message, extra=extra)


def log_info(request: Request, message: str, **kwargs: Any) -> None:
    log_with_context(request, logging.INFO, message, **kwargs)


def log_error(request: Request, message: str, **kwargs: Any) -> None:
    log_with_context(request, logging.ERROR, message, **kwargs)


def log_warning(request: Request, message: str, **kwargs: Any) -> None:
    log_with_context(request, logging.WARNING, message, **kwargs)
