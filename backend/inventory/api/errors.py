import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from inventory.errors import InventoryError

GENERIC_500 = "Internal server error"


def _describe(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        where = ".".join(loc) or "request"
        parts.append(f"{where}: {err.get('msg')}")
    return "Invalid request: " + "; ".join(parts)


def register_error_handlers(app: FastAPI, log: logging.Logger):
    """Every error leaves the service as a plain-text message the UI can show as-is."""

    @app.exception_handler(InventoryError)
    async def inventory_error(request: Request, exc: InventoryError):
        if exc.status_code >= 500:
            log.error(f"{request.method} {request.url.path} failed: {exc.message}")
            return PlainTextResponse(GENERIC_500, status_code=500)
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        return PlainTextResponse(_describe(exc), status_code=400)

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        log.exception(f"{request.method} {request.url.path} unexpected {type(exc).__name__}")
        return PlainTextResponse(GENERIC_500, status_code=500)
