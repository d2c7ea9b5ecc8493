"""
Consolidated middleware and error handlers for the NutriAdmin API.

Every error leaves the service as ``{"error": <label>, "message": <text>}``.
"""

import time
import logging
from http import HTTPStatus
from uuid import uuid4

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.exceptions import AppError, NotFoundError, ServiceValidationError, StoreError
from app.messages import message

logger = logging.getLogger("nutriadmin.middleware")


# ============================================================================
# Helper Functions
# ============================================================================


def error_body(error: str, msg: str) -> dict:
    return {"error": error, "message": msg}


def describe_validation_errors(errors) -> str:
    """Flatten FastAPI validation errors into one line, dropping the ``body``/``query`` prefix."""
    parts = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path"):
            loc = loc[1:]
        field = ".".join(loc)
        parts.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return "; ".join(parts) or message("invalid_request")


# ============================================================================
# Request Logging Middleware
# ============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all HTTP requests and responses.

    The request id is part of every line so a request can be followed through the logs.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid4())
        request.state.request_id = request_id
        client = request.client.host if request.client else None

        logger.info(
            "Request started request_id=%s method=%s url=%s client=%s",
            request_id,
            request.method,
            request.url,
            client,
        )

        start_time = time.time()

        try:
            response: Response = await call_next(request)
        except Exception as exc:
            process_time = time.time() - start_time
            logger.error(
                "Request failed request_id=%s method=%s url=%s error=%s process_time=%.4fs",
                request_id,
                request.method,
                request.url,
                exc,
                process_time,
                exc_info=True,
            )
            raise

        process_time = time.time() - start_time
        logger.info(
            "Request completed request_id=%s method=%s url=%s status_code=%s process_time=%.4fs",
            request_id,
            request.method,
            request.url,
            response.status_code,
            process_time,
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response


# ============================================================================
# Error Handlers
# ============================================================================


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request bodies/params that cannot be parsed"""
    logger.warning(f"Validation error on {request.url}: {exc.errors()}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(
            ServiceValidationError.error, describe_validation_errors(exc.errors())
        ),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions"""
    logger.warning(f"HTTP {exc.status_code} on {request.url}: {exc.detail}")

    try:
        label = HTTPStatus(exc.status_code).phrase
    except ValueError:
        label = "Error"

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(label, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def service_validation_exception_handler(
    request: Request, exc: ServiceValidationError
):
    """Handle service and store validation errors"""
    logger.warning(f"Service validation error on {request.url}: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=exc.to_dict(),
    )


async def not_found_exception_handler(request: Request, exc: NotFoundError):
    """Handle not found errors"""
    logger.warning(f"Resource not found on {request.url}: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=exc.to_dict(),
    )


async def app_exception_handler(request: Request, exc: AppError):
    """Handle the remaining typed errors (401, 403, 500)"""
    if exc.http_status >= 500:
        logger.error(f"Server error on {request.url}: {str(exc)}")
    else:
        logger.warning(f"HTTP {exc.http_status} on {request.url}: {str(exc)}")

    body = exc.to_dict()
    if isinstance(exc, StoreError):
        body["message"] = message("unexpected")

    return JSONResponse(status_code=exc.http_status, content=body)


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"Unexpected error on {request.url}: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error", message("unexpected")),
    )
