"""
Exception handlers

Every error leaves the API as `{"error": "<message>"}`:
- AppError subclasses and HTTPException keep their status code
- request validation errors become 400 naming the offending fields
- database and unexpected errors become a generic 500, are reported to
  Sentry and stored as an ErrorLog row
"""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.constants import USER_ID_COOKIE, USER_ROLE_COOKIE
from app.core.errors import AppError
from app.core.logging import capture_error
from app.core.security import read_session_markers
from app.db.session import SessionAsync
from app.logging import get_logger
from app.middleware.logging import get_client_ip
from app.models.error_log import ErrorLog

logger = logging.getLogger(__name__)
error_logger = get_logger("errors")

GENERIC_ERROR = "Internal server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def describe_validation_error(exc: RequestValidationError) -> str:
    missing, invalid = [], []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        field = ".".join(loc) or "body"
        if err.get("type") == "missing":
            missing.append(field)
        else:
            invalid.append(f"{field} ({err.get('msg')})")

    parts = []
    if missing:
        parts.append("Missing required fields: " + ", ".join(missing))
    if invalid:
        parts.append("Invalid fields: " + ", ".join(invalid))
    return "; ".join(parts) or "Invalid request"


async def record_error(request: Request, exc: Exception) -> None:
    """Log, report to Sentry and persist an unclassified failure."""
    session = read_session_markers(
        request.cookies.get(USER_ID_COOKIE),
        request.cookies.get(USER_ROLE_COOKIE),
    )
    user_id, user_role = session if session else (None, None)

    error_logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        exc_info=False,
        user_id=user_id,
    )
    event_id = capture_error(
        exc,
        context={"request": {"path": request.url.path, "method": request.method}},
        user={"id": user_id, "role": user_role} if user_id else None,
        tags={"endpoint": request.url.path},
    )

    try:
        async with SessionAsync() as db:
            db.add(ErrorLog(
                user_id=user_id,
                error_type=type(exc).__name__,
                error_message=str(exc) or type(exc).__name__,
                stack_trace="".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
                endpoint=request.url.path,
                method=request.method,
                request_id=getattr(request.state, "request_id", None),
                sentry_event_id=event_id,
                ip_address=get_client_ip(request),
                severity="error",
            ))
            await db.commit()
    except Exception as e:
        logger.error(f"Failed to store error log: {e}", exc_info=True)


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return error_response(status.HTTP_400_BAD_REQUEST, describe_validation_error(exc))

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        await record_error(request, exc)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        await record_error(request, exc)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR)
