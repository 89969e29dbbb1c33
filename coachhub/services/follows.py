"""Follow / unfollow with denormalized counters on the users table."""

from __future__ import annotations

import uuid

from fastapi import HTTPException
from sqlalchemy import case, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from coachhub.models.user import Follow, User


def _decrement(column):
    return case((column > 0, column - 1), else_=0)


async def toggle_follow(db: AsyncSession, follower_id: uuid.UUID, following_id: uuid.UUID) -> bool:
    """Follow if not yet following, otherwise unfollow. Returns the new following state."""
    if follower_id == following_id:
        raise HTTPException(status_code=400, detail="You cannot follow yourself")
    target = await db.execute(select(User.id).where(User.id == following_id))
    if target.scalar_one_or_none() is None:
        raise HTTPException(status_code=404, detail="User not found")

    existing = await db.execute(
        select(Follow).where(Follow.follower_id == follower_id, Follow.following_id == following_id)
    )
    if existing.scalar_one_or_none() is not None:
        await db.execute(
            delete(Follow).where(Follow.follower_id == follower_id, Follow.following_id == following_id)
        )
        await db.execute(
            update(User)
            .where(User.id == following_id)
            .values(follower_count=_decrement(User.follower_count))
        )
        await db.execute(
            update(User)
            .where(User.id == follower_id)
            .values(following_count=_decrement(User.following_count))
        )
        following = False
    else:
        db.add(Follow(follower_id=follower_id, following_id=following_id))
        await db.flush()
        await db.execute(
            update(User)
            .where(User.id == following_id)
            .values(follower_count=User.follower_count + 1)
        )
        await db.execute(
            update(User)
            .where(User.id == follower_id)
            .values(following_count=User.following_count + 1)
        )
        following = True
    return following
