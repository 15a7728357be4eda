"""
Access Logging Middleware

Logs every API request to the database for audit, and reports slow
requests through the custom logger.
"""

import time
import uuid
import hashlib
import logging
from typing import Callable, Optional
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.core.constants import USER_ID_COOKIE, USER_ROLE_COOKIE
from app.core.security import read_session_markers
from app.db.session import SessionAsync
from app.logging import get_logger
from app.models.api_access_log import APIAccessLog

logger = logging.getLogger(__name__)
request_logger = get_logger("access")

SKIPPED_PATHS = ("/", "/health", "/docs", "/openapi.json")


def get_client_ip(request: Request) -> str:
    """
    Client IP, preferring the first X-Forwarded-For hop (proxied requests).
    """
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


class AccessLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to log all API access to database.

    Captures:
    - Session context (user_id and role from the session cookies)
    - Request details (endpoint, method, IP, user agent)
    - Performance metrics (duration, response size)
    - Request tracking (request_id, body hash)
    """

    def __init__(self, app: ASGIApp, enabled: bool = True, slow_threshold_ms: int = 1000):
        super().__init__(app)
        self.enabled = enabled
        self.slow_threshold_ms = slow_threshold_ms

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not self.enabled or request.url.path in SKIPPED_PATHS:
            return await call_next(request)

        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.time()

        session = read_session_markers(
            request.cookies.get(USER_ID_COOKIE),
            request.cookies.get(USER_ROLE_COOKIE),
        )
        user_id, user_role = session if session else (None, None)

        # Hash request body for audit (never store the body itself)
        request_body_hash = None
        if request.method in ("POST", "PUT", "PATCH"):
            body = await request.body()
            if body:
                request_body_hash = hashlib.sha256(body).hexdigest()

        response = await call_next(request)

        duration_ms = int((time.time() - start_time) * 1000)
        response_size = int(response.headers.get("content-length", 0))

        request_logger.request(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration=duration_ms / 1000,
            request_id=request_id,
        )
        if duration_ms >= self.slow_threshold_ms:
            request_logger.slow(
                "Slow request",
                duration=duration_ms / 1000,
                threshold=self.slow_threshold_ms / 1000,
                method=request.method,
                path=request.url.path,
            )

        await self._log_to_database(
            user_id=user_id,
            user_role=user_role,
            endpoint=request.url.path,
            method=request.method,
            status_code=response.status_code,
            ip_address=get_client_ip(request),
            user_agent=request.headers.get("user-agent", ""),
            request_id=request_id,
            duration_ms=duration_ms,
            request_body_hash=request_body_hash,
            response_size=response_size
        )

        response.headers["X-Request-ID"] = request_id
        return response

    async def _log_to_database(
        self,
        user_id: Optional[int] = None,
        user_role: Optional[str] = None,
        endpoint: str = "",
        method: str = "",
        status_code: int = 0,
        ip_address: str = "",
        user_agent: str = "",
        request_id: str = "",
        duration_ms: int = 0,
        request_body_hash: Optional[str] = None,
        response_size: int = 0
    ):
        """
        Write the access row in its own session so it never interferes with
        the request's transaction. Failures are logged, not raised: a
        missing audit row must not fail the request it describes.
        """
        try:
            async with SessionAsync() as db:
                db.add(APIAccessLog(
                    user_id=user_id,
                    user_role=user_role,
                    endpoint=endpoint,
                    method=method,
                    status_code=status_code,
                    ip_address=ip_address,
                    user_agent=user_agent,
                    request_id=request_id,
                    duration_ms=duration_ms,
                    request_body_hash=request_body_hash,
                    response_size=response_size
                ))
                await db.commit()
        except Exception as e:
            logger.error(f"Database logging failed: {e}", exc_info=True)


