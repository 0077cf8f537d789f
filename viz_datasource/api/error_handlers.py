"""API error handlers for converting domain exceptions to HTTP responses."""

from fastapi import Request
from fastapi.responses import JSONResponse
from viz_datasource.core.domain_exceptions import DomainException
import logging
import uuid

logger = logging.getLogger(__name__)


def _request_id(request: Request) -> str:
    return getattr(request.state, 'request_id', None) or str(uuid.uuid4())


async def domain_exception_handler(request: Request, exc: DomainException):
    """
    Convert domain exceptions to HTTP responses.

    Args:
        request: The FastAPI request
        exc: The domain exception

    Returns:
        JSON response with error details
    """
    return JSONResponse(
        status_code=exc.http_status,
        content={
            "error": exc.error_code,
            "message": exc.message,
            "details": exc.details,
            "request_id": _request_id(request)
        }
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """
    Handle unexpected exceptions.

    Args:
        request: The FastAPI request
        exc: The exception

    Returns:
        JSON response with generic error
    """
    request_id = _request_id(request)

    logger.error(
        f"Unexpected error handling request {request_id}: {exc}",
        exc_info=True,
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "method": request.method
        }
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "request_id": request_id
        }
    )


def register_error_handlers(app):
    """
    Register all error handlers with the FastAPI app.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Error handlers registered successfully")
