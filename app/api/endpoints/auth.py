"""
    Authentication Endpoints

    Session state is carried by two httpOnly cookies, `user_id` and
    `user_role`, each holding a signed opaque marker (see app.core.security).

    Endpoints:
    - /login: Verifies email and password and sets both session cookies.
    - /signup: Creates a CLIENT account after checking the email is free.
    - /logout: Clears the session cookies.
    - /me: Returns the account behind the current session.
"""
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.api.dependencies import get_current_user, get_db
from app.core.constants import USER_ID_COOKIE, USER_ROLE_COOKIE
from app.core.permissions import DEFAULT_ROLE
from app.core.security import (
    SESSION_MAX_AGE,
    create_session_markers,
    get_password_hash,
    verify_password,
)
from app.helpers.getters import isProductionMode
from app.logging import get_logger
from app.models.user import User
from app.schemas.user import Login, SessionOut, Signup, UserOut

router = APIRouter()
logger = get_logger(__name__)


def set_session_cookies(response: Response, user: User) -> None:
    uid_marker, role_marker = create_session_markers(user.id, user.role)
    for key, value in ((USER_ID_COOKIE, uid_marker), (USER_ROLE_COOKIE, role_marker)):
        response.set_cookie(
            key=key,
            value=value,
            max_age=int(SESSION_MAX_AGE.total_seconds()),
            httponly=True,
            samesite="lax",
            secure=isProductionMode(),
        )


@router.post("/login", response_model=SessionOut)
async def login(login_data: Login, response: Response, db: AsyncSession = Depends(get_db)):
    """
    Authenticate with email and password.

    On success both session cookies are set for seven days. Unknown email
    and wrong password get the same 401 so accounts cannot be enumerated.
    """
    result = await db.execute(select(User).filter(User.email == login_data.email.lower()))
    user = result.scalar_one_or_none()

    if not user or not verify_password(login_data.password, user.password):
        logger.warning("Failed login", email=login_data.email.lower())
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    set_session_cookies(response, user)
    logger.info("User logged in", user_id=user.id, role=user.role)
    return {"success": True, "user": user}


@router.post("/signup", response_model=SessionOut, status_code=status.HTTP_201_CREATED)
async def signup(data: Signup, db: AsyncSession = Depends(get_db)):
    email = data.email.lower()
    result = await db.execute(select(User).filter(User.email == email))
    if result.scalar_one_or_none():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User with this email already exists")

    new_user = User(
        name=data.name,
        email=email,
        password=get_password_hash(data.password),
        role=DEFAULT_ROLE.value,
    )
    db.add(new_user)
    await db.commit()
    await db.refresh(new_user)

    logger.info("Account created", user_id=new_user.id)
    return {"success": True, "user": new_user}


@router.post("/logout")
async def logout(response: Response):
    response.delete_cookie(USER_ID_COOKIE)
    response.delete_cookie(USER_ROLE_COOKIE)
    return {"success": True}


@router.get("/me", response_model=UserOut)
async def read_me(current_user: User = Depends(get_current_user)):
    return current_user
