"""
Global error handling middleware.

Maps domain failures that escape the routers onto JSON error bodies of the
form ``{"error": ..., "detail": ...}``.
"""
import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from typing import Callable

from landscape_studio.domain.catalog import CatalogError


logger = logging.getLogger(__name__)


def _request_context(request: Request, **extra) -> dict:
    return {"path": request.url.path, "method": request.method, **extra}


def _error_response(status_code: int, error: str, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "detail": detail})


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Turns unhandled exceptions into consistent error responses.

    A catalog that cannot be loaded is an upstream failure (502), a bad value
    in an otherwise valid request is the caller's fault (400) and anything
    else is reported as a 500 without leaking internals.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        try:
            return await call_next(request)

        except CatalogError as e:
            logger.error(
                f"Catalog error: {e.message}",
                extra=_request_context(request, source=e.source),
            )
            return _error_response(status.HTTP_502_BAD_GATEWAY, "Catalog unavailable", e.message)

        except ValueError as e:
            logger.warning(f"Rejected design input: {e}", extra=_request_context(request))
            return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid request", str(e))

        except Exception as e:
            logger.exception(f"Unhandled exception: {e}", extra=_request_context(request))
            return _error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Internal server error",
                "An unexpected error occurred",
            )
