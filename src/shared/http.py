"""HTTP error envelope for the storefront API.

Every error leaves the service as ``{"success": false, "message": ...}``.
Server-side failures additionally carry an opaque ``error`` kind that is
meant for diagnostics, never for client logic.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.errors import PartialFailureError, StorefrontError

logger = structlog.get_logger(__name__)

_STATUS_BY_KIND = {
    "Conflict": 409,
    "PaymentDeclined": 402,
    "GatewayUnavailable": 503,
    "PartialFailure": 500,
    "ServerError": 500,
}


def first_message(exc: Exception, default: str) -> str:
    """Pull a single human-readable message out of a protean or plain exception."""
    messages = getattr(exc, "messages", None)
    if not messages and exc.args:
        messages = exc.args[0]

    if isinstance(messages, dict):
        for value in messages.values():
            if isinstance(value, list | tuple) and value:
                return str(value[0])
            if value:
                return str(value)
    if isinstance(messages, list | tuple) and messages:
        return str(messages[0])
    if isinstance(messages, str) and messages:
        return messages
    return default


def envelope(status_code: int, message: str, **payload) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message, **payload})


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return envelope(400, first_message(exc, "Invalid input"))


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        detail = errors[0].get("msg", "Invalid input")
        message = f"{location}: {detail}" if location else detail
    else:
        message = "Invalid input"
    return envelope(400, message)


async def _not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return envelope(404, first_message(exc, "Not found"))


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _storefront_error(request: Request, exc: StorefrontError) -> JSONResponse:
    status_code = _STATUS_BY_KIND.get(exc.kind, 500)
    if status_code < 500:
        return envelope(status_code, exc.message)

    logger.error("request_failed", path=request.url.path, kind=exc.kind, reason=exc.message)
    payload = {"error": exc.kind}
    if isinstance(exc, PartialFailureError) and exc.transaction_id:
        payload["transaction_id"] = exc.transaction_id
    return envelope(status_code, exc.message, **payload)


async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path)
    return envelope(500, "Something went wrong while processing the request", error=type(exc).__name__)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(StorefrontError, _storefront_error)
    app.add_exception_handler(Exception, _unexpected_error)
