"""Error-kind → HTTP status mapping for the API surface.

ValidationError → 400, NotFoundError → 404, ConflictError → 409,
BusinessRuleError → 400 (a caller error), ScopeLookupError → 502 (the
tenant service failed, not this one), anything unexpected → 500.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.exceptions import IntentRegistryError

logger = logging.getLogger(__name__)


async def _registry_error(request: Request, exc: IntentRegistryError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error("Request failed: path=%s code=%s error=%s", request.url.path, exc.code, exc.message)
    return JSONResponse(
        status_code=exc.http_status,
        content={"detail": exc.message, "code": exc.code},
    )


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"{field}: {first.get('msg', 'invalid')}" if field else "Invalid request"
    return JSONResponse(
        status_code=400,
        content={"detail": message, "code": "VALIDATION_ERROR"},
    )


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error: path=%s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "code": "INTERNAL_ERROR"},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(IntentRegistryError, _registry_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(Exception, _unhandled_error)
