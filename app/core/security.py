from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.config import settings

SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM
SESSION_MAX_AGE = timedelta(days=settings.SESSION_MAX_AGE_DAYS)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not plain_password or not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def _encode(claims: dict, expires_delta: Optional[timedelta]) -> str:
    now = datetime.now(timezone.utc)
    to_encode = claims.copy()
    to_encode.update({"iat": now, "exp": now + (expires_delta or SESSION_MAX_AGE)})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def create_session_markers(
    user_id: int,
    role: str,
    expires_delta: Optional[timedelta] = None
) -> Tuple[str, str]:
    """
    Build the two opaque cookie values for a session.

    Returns (user_id marker, role marker). Both are signed, so neither the
    identifier nor the role can be altered by the browser.
    """
    uid_marker = _encode({"sub": str(user_id), "typ": "uid"}, expires_delta)
    role_marker = _encode({"sub": str(user_id), "typ": "role", "role": role}, expires_delta)
    return uid_marker, role_marker


def read_session_markers(uid_marker: str, role_marker: str) -> Optional[Tuple[int, str]]:
    """
    Decode and cross-check both markers.

    Returns (user_id, role), or None if either marker is missing, expired,
    tampered with, or the two belong to different users.
    """
    if not uid_marker or not role_marker:
        return None
    try:
        uid_payload = jwt.decode(uid_marker, SECRET_KEY, algorithms=[ALGORITHM])
        role_payload = jwt.decode(role_marker, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None

    if uid_payload.get("typ") != "uid" or role_payload.get("typ") != "role":
        return None
    if uid_payload.get("sub") is None or uid_payload.get("sub") != role_payload.get("sub"):
        return None
    try:
        return int(uid_payload["sub"]), role_payload.get("role")
    except (TypeError, ValueError):
        return None
