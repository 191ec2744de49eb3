"""Exception handlers translating errors into the JSON envelope.

Every failure response has the shape ``{"success": false, "message": ...}``.
Validation failures add ``errors: [{field, message}]``. Server-side failures
add ``error`` with the underlying reason.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import InputValidationError, SeagullsError
from app.core.logging import get_logger

logger = get_logger(__name__)

VALUE_ERROR_PREFIX = "Value error, "
REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def _error_message(error: dict[str, Any]) -> str:
    message = str(error.get("msg", "Invalid value"))
    if message.startswith(VALUE_ERROR_PREFIX):
        message = message[len(VALUE_ERROR_PREFIX) :]
    return message


def _error_field(error: dict[str, Any]) -> str | None:
    parts = [
        str(part)
        for part in error.get("loc", ())
        if isinstance(part, str) and part not in REQUEST_LOCATIONS
    ]
    return ".".join(parts) or None


def validation_body(errors: list[dict[str, Any]]) -> dict[str, Any]:
    """Envelope for a list of pydantic error dicts."""
    details = [{"field": _error_field(e), "message": _error_message(e)} for e in errors]
    message = details[0]["message"] if details else "Validation failed"
    return {"success": False, "message": message, "errors": details}


async def seagulls_error_handler(request: Request, exc: SeagullsError) -> JSONResponse:
    status = exc.http_status
    body: dict[str, Any] = {"success": False, "message": exc.message}
    body.update(exc.details)
    if isinstance(exc, InputValidationError) and exc.errors:
        body["errors"] = exc.errors
    if status >= 500:
        body.setdefault("error", exc.message)
        logger.error(
            "Request failed",
            path=request.url.path,
            error_type=type(exc).__name__,
            context=exc.context,
        )
    else:
        logger.info("Request rejected", path=request.url.path, status=status, message=exc.message)
    return JSONResponse(status_code=status, content=body)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    body = validation_body(list(exc.errors()))
    logger.info("Request validation failed", path=request.url.path, errors=body["errors"])
    return JSONResponse(status_code=400, content=body)


async def pydantic_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    body = validation_body(exc.errors(include_url=False))
    return JSONResponse(status_code=400, content=body)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Internal server error", "error": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SeagullsError, seagulls_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, pydantic_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


__all__ = ["register_exception_handlers", "validation_body"]
