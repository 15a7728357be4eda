"""
Pydantic schemas for the access/error log endpoints.
"""

from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel


class APIAccessLogOut(BaseModel):
    """One request as recorded by AccessLoggingMiddleware"""
    id: int
    user_id: Optional[int] = None
    user_role: Optional[str] = None
    endpoint: str
    method: str
    status_code: int
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    request_id: Optional[str] = None
    duration_ms: Optional[int] = None
    response_size: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ErrorLogOut(BaseModel):
    id: int
    user_id: Optional[int] = None
    error_type: str
    error_message: str
    endpoint: Optional[str] = None
    method: Optional[str] = None
    request_id: Optional[str] = None
    sentry_event_id: Optional[str] = None
    severity: Optional[str] = None
    resolved: bool
    resolved_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ErrorLogDetail(ErrorLogOut):
    """Single error with its traceback"""
    stack_trace: Optional[str] = None
    ip_address: Optional[str] = None
    resolved_by: Optional[int] = None


class ErrorLogResolve(BaseModel):
    resolved: bool = True


class EndpointCount(BaseModel):
    endpoint: str
    requests: int


class LogSummary(BaseModel):
    """
    Request statistics over a recent window.

    failed_logins counts 401 answers from /api/auth/login; unresolved_errors
    is not limited to the window.
    """
    hours: int
    total_requests: int
    unique_users: int
    avg_duration_ms: float
    error_rate: float
    slow_requests: int
    failed_logins: int
    unresolved_errors: int
    top_endpoints: List[EndpointCount]
    requests_by_status: Dict[int, int]
