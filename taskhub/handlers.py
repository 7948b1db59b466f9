"""Exception handlers rendering the uniform error envelope."""

import logging
import sqlite3
import traceback
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import AppError, DuplicateKeyError

logger = logging.getLogger(__name__)

HTTP_ERROR_CODES = {
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


def error_response(
    status_code: int,
    code: str,
    message: str,
    *,
    details: list[dict[str, Any]] | None = None,
    stack: str | None = None,
) -> JSONResponse:
    error: dict[str, Any] = {"code": code, "message": message}
    if details:
        error["details"] = details
    if stack:
        error["stack"] = stack
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


def _field_name(loc: tuple) -> str:
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or "body"


def register_exception_handlers(app: FastAPI, *, debug: bool = False) -> None:
    """Attach handlers; `debug` adds stack traces and raw messages to 500s."""

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        return error_response(exc.status_code, exc.code, exc.message, details=exc.details)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        details = [
            {"field": _field_name(tuple(err.get("loc", ()))), "message": err.get("msg", "")}
            for err in exc.errors()
        ]
        return error_response(
            status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", "Invalid input data", details=details
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        code = HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
        message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
        if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
            message = f"Not Found - {request.url.path}"
        return error_response(exc.status_code, code, message)

    @app.exception_handler(sqlite3.IntegrityError)
    async def handle_integrity_error(request: Request, exc: sqlite3.IntegrityError):
        logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc)
        err = DuplicateKeyError()
        return error_response(err.status_code, err.code, err.message)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        if debug:
            stack = "".join(traceback.format_exception(exc))
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "SERVER_ERROR", str(exc), stack=stack
            )
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "SERVER_ERROR", "Internal Server Error"
        )
