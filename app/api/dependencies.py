from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.session import SessionAsync
from app.models.user import User
from app.core.constants import USER_ID_COOKIE, USER_ROLE_COOKIE
from app.core.security import read_session_markers


async def get_db():
    async with SessionAsync() as session:
        yield session


async def get_current_user(
        request: Request,
        db: AsyncSession = Depends(get_db),
):
    """
    Resolve the session cookies to a user.

    Both markers must be present, valid and belong to the same account,
    and the account must still exist.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
    )
    session = read_session_markers(
        request.cookies.get(USER_ID_COOKIE),
        request.cookies.get(USER_ROLE_COOKIE),
    )
    if session is None:
        raise credentials_exception

    user_id, _role = session
    user = await db.get(User, user_id)
    if not user:
        raise credentials_exception

    # Picked up by the access logging middleware
    request.state.user = user
    return user

# ==================== Permission Dependencies ====================

from app.core.permissions import has_permission, Resource, Action, UserRole


def require_permission(resource: Resource, action: Action):
    """
    Factory to create a dependency that checks the caller's role.

    Usage:
        @router.delete("/{rate_id}")
        async def delete_rate(
            rate_id: int,
            current_user: User = Depends(require_permission(Resource.RATE, Action.DELETE)),
            db: AsyncSession = Depends(get_db)
        ):
            ...

    Args:
        resource: Resource being accessed
        action: Action being performed

    Returns:
        Dependency returning the current user if permission is granted
    """
    async def permission_checker(
        current_user: User = Depends(get_current_user)
    ) -> User:
        """
        Raises:
            HTTPException 403: If the user's role lacks the permission
        """
        try:
            role = UserRole(current_user.role)
        except ValueError:
            role = None

        if role is None or not has_permission(role, resource, action):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions: {action.value} on {resource.value}"
            )

        return current_user

    return permission_checker
