"""
Password hashing and bearer-session resolution for the HTTP layer.

Roles are checked on the server from the session row; nothing the client
stores is trusted.
"""
import hashlib
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

import bcrypt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from tortoise import timezone

from cafe.core.config import SESSION_TTL_HOURS
from cafe.models.user import RoleName, UserSession

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class SessionContext:
    """The authenticated caller, as resolved from a bearer token."""
    user_id: int
    username: str
    role: RoleName
    token: str


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))


def new_session_token() -> str:
    return secrets.token_urlsafe(32)


def hash_token(token: str) -> str:
    """Session rows are keyed by the token digest, never the raw token."""
    return hashlib.sha256(token.encode()).hexdigest()


def session_expiry(now: Optional[datetime] = None) -> datetime:
    return (now or timezone.now()) + timedelta(hours=SESSION_TTL_HOURS)


def _is_expired(expires_at: datetime) -> bool:
    now = timezone.now()
    if timezone.is_naive(expires_at) != timezone.is_naive(now):
        expires_at = expires_at.replace(tzinfo=now.tzinfo)
    return expires_at <= now


async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> SessionContext:
    """Dependency: resolves the bearer token or fails with 401."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required.")

    session = await UserSession.get_or_none(token=hash_token(credentials.credentials)).prefetch_related("user", "user__role")
    if not session or _is_expired(session.expires_at):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Session is invalid or has expired.")

    return SessionContext(
        user_id=session.user.id,
        username=session.user.username,
        role=RoleName(session.user.role.role_name),
        token=credentials.credentials,
    )


def require_roles(*roles: RoleName):
    """Dependency factory: allows the request only for the given roles."""
    allowed = set(roles)

    async def checker(session: SessionContext = Depends(get_current_session)) -> SessionContext:
        if session.role not in allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You do not have access to this resource.")
        return session

    return checker


require_admin = require_roles(RoleName.ADMIN)
require_staff = require_roles(RoleName.ADMIN, RoleName.CHEF)
