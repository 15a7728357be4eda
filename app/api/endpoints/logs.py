"""
Logs API Endpoints (admin only)

- /access: requests recorded by AccessLoggingMiddleware
- /errors: unclassified failures stored by the 500 handler
- /summary: request statistics for the last N hours
"""

from typing import List, Optional
from datetime import datetime, timedelta, timezone
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, desc

from app.api.dependencies import get_db, require_permission
from app.core.config import settings
from app.core.permissions import Resource, Action
from app.logging import get_logger
from app.models.user import User
from app.models.api_access_log import APIAccessLog
from app.models.error_log import ErrorLog
from app.schemas.log import (
    APIAccessLogOut,
    EndpointCount,
    ErrorLogDetail,
    ErrorLogOut,
    ErrorLogResolve,
    LogSummary,
)

router = APIRouter()
logger = get_logger(__name__)

LOGIN_PATH = "/api/auth/login"


@router.get("/access", response_model=List[APIAccessLogOut])
async def list_access_logs(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    user_id: Optional[int] = None,
    endpoint: Optional[str] = None,
    method: Optional[str] = None,
    status_code: Optional[int] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    current_user: User = Depends(require_permission(Resource.LOG, Action.READ)),
    db: AsyncSession = Depends(get_db)
):
    """
    Access log entries, most recent first.

    `endpoint` matches as a substring (e.g. `/api/payments`).
    """
    query = select(APIAccessLog)
    if user_id:
        query = query.filter(APIAccessLog.user_id == user_id)
    if endpoint:
        query = query.filter(APIAccessLog.endpoint.contains(endpoint))
    if method:
        query = query.filter(APIAccessLog.method == method.upper())
    if status_code:
        query = query.filter(APIAccessLog.status_code == status_code)
    if start_date:
        query = query.filter(APIAccessLog.created_at >= start_date)
    if end_date:
        query = query.filter(APIAccessLog.created_at <= end_date)

    result = await db.execute(
        query.order_by(desc(APIAccessLog.created_at), desc(APIAccessLog.id)).offset(skip).limit(limit)
    )
    return result.scalars().all()


@router.get("/errors", response_model=List[ErrorLogOut])
async def list_error_logs(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    error_type: Optional[str] = None,
    endpoint: Optional[str] = None,
    resolved: Optional[bool] = None,
    current_user: User = Depends(require_permission(Resource.LOG, Action.READ)),
    db: AsyncSession = Depends(get_db)
):
    query = select(ErrorLog)
    if error_type:
        query = query.filter(ErrorLog.error_type == error_type)
    if endpoint:
        query = query.filter(ErrorLog.endpoint.contains(endpoint))
    if resolved is not None:
        query = query.filter(ErrorLog.resolved == resolved)

    result = await db.execute(
        query.order_by(desc(ErrorLog.created_at), desc(ErrorLog.id)).offset(skip).limit(limit)
    )
    return result.scalars().all()


async def _get_error(db: AsyncSession, error_id: int) -> ErrorLog:
    error_log = await db.get(ErrorLog, error_id)
    if not error_log:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Error log not found")
    return error_log


@router.get("/errors/{error_id}", response_model=ErrorLogDetail)
async def get_error_log(
    error_id: int,
    current_user: User = Depends(require_permission(Resource.LOG, Action.READ)),
    db: AsyncSession = Depends(get_db)
):
    return await _get_error(db, error_id)


@router.patch("/errors/{error_id}", response_model=ErrorLogDetail)
async def resolve_error(
    error_id: int,
    resolve_data: ErrorLogResolve,
    current_user: User = Depends(require_permission(Resource.LOG, Action.UPDATE)),
    db: AsyncSession = Depends(get_db)
):
    """Mark an error resolved (or reopen it with `{"resolved": false}`)."""
    error_log = await _get_error(db, error_id)
    error_log.resolved = resolve_data.resolved
    if resolve_data.resolved:
        error_log.resolved_at = datetime.now(timezone.utc)
        error_log.resolved_by = current_user.id
    else:
        error_log.resolved_at = None
        error_log.resolved_by = None
    await db.commit()
    await db.refresh(error_log)
    logger.info("Error log updated", error_id=error_id, resolved=error_log.resolved, user_id=current_user.id)
    return error_log


@router.get("/summary", response_model=LogSummary)
async def log_summary(
    hours: int = Query(24, ge=1, le=24 * 30),
    current_user: User = Depends(require_permission(Resource.LOG, Action.READ)),
    db: AsyncSession = Depends(get_db)
):
    """
    Request statistics for the last `hours` hours: volume, latency, 5xx rate,
    slow requests (over SLOW_REQUEST_MS), failed logins and the busiest
    endpoints.
    """
    since = datetime.now(timezone.utc) - timedelta(hours=hours)
    in_window = APIAccessLog.created_at >= since

    async def count(*criteria) -> int:
        return await db.scalar(select(func.count(APIAccessLog.id)).filter(in_window, *criteria)) or 0

    total = await count()
    server_errors = await count(APIAccessLog.status_code >= 500)
    slow = await count(APIAccessLog.duration_ms >= settings.SLOW_REQUEST_MS)
    failed_logins = await count(APIAccessLog.endpoint == LOGIN_PATH, APIAccessLog.status_code == 401)

    unique_users = await db.scalar(
        select(func.count(func.distinct(APIAccessLog.user_id))).filter(in_window)
    ) or 0
    avg_duration = await db.scalar(select(func.avg(APIAccessLog.duration_ms)).filter(in_window))

    by_status = await db.execute(
        select(APIAccessLog.status_code, func.count(APIAccessLog.id))
        .filter(in_window)
        .group_by(APIAccessLog.status_code)
    )
    requests = func.count(APIAccessLog.id).label("requests")
    top = await db.execute(
        select(APIAccessLog.endpoint, requests)
        .filter(in_window)
        .group_by(APIAccessLog.endpoint)
        .order_by(desc(requests), APIAccessLog.endpoint)
        .limit(10)
    )
    unresolved = await db.scalar(
        select(func.count(ErrorLog.id)).filter(ErrorLog.resolved.is_(False))
    ) or 0

    return LogSummary(
        hours=hours,
        total_requests=total,
        unique_users=unique_users,
        avg_duration_ms=float(avg_duration or 0),
        error_rate=server_errors / total if total else 0.0,
        slow_requests=slow,
        failed_logins=failed_logins,
        unresolved_errors=unresolved,
        top_endpoints=[EndpointCount(endpoint=e, requests=n) for e, n in top.all()],
        requests_by_status={code: n for code, n in by_status.all()},
    )
