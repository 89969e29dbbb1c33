"""Request dependencies: current user resolution and role checks."""

from __future__ import annotations

import uuid

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from coachhub.core.enums import UserType
from coachhub.core.security import InvalidTokenError, decode_token
from coachhub.db.session import get_db
from coachhub.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


async def get_user_or_404(db: AsyncSession, user_id: uuid.UUID) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the bearer token to a User row."""
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        user_id = decode_token(credentials.credentials)
    except InvalidTokenError as e:
        raise _unauthorized(str(e)) from e
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise _unauthorized("User no longer exists")
    return user


async def get_current_trainer(user: User = Depends(get_current_user)) -> User:
    if user.user_type != UserType.TRAINER:
        raise HTTPException(status_code=403, detail="Only trainers can do this")
    return user
