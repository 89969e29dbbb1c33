"""User profiles, follows and body metrics."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from coachhub.api.deps import get_current_user, get_user_or_404
from coachhub.core.dates import utcnow
from coachhub.db.session import get_db
from coachhub.models.user import Follow, User, UserMetric
from coachhub.schemas.user import (
    FollowToggleRead,
    MetricsStatsRead,
    UserMetricCreate,
    UserMetricRead,
    UserRead,
    UserSummary,
    UserUpdate,
)
from coachhub.services.follows import toggle_follow
from coachhub.services.metrics import compute_metrics_stats

router = APIRouter()


async def _metrics_newest_first(db: AsyncSession, user_id: uuid.UUID) -> list[UserMetric]:
    result = await db.execute(
        select(UserMetric)
        .where(UserMetric.user_id == user_id)
        .order_by(UserMetric.date_recorded.desc(), UserMetric.id.desc())
    )
    return list(result.scalars().all())


# ── Current user ─────────────────────────────────────────────────────────

@router.get("/me", response_model=UserRead)
async def get_me(user: User = Depends(get_current_user)):
    return user


@router.patch("/me", response_model=UserRead)
async def update_me(
    payload: UserUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Partial profile update (name, bio, phone, age, profile image)."""
    for k, v in payload.model_dump(exclude_unset=True).items():
        setattr(user, k, v)
    await db.flush()
    await db.refresh(user)
    return user


@router.get("/me/metrics", response_model=list[UserMetricRead])
async def list_my_metrics(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Metric entries, newest first."""
    return await _metrics_newest_first(db, user.id)


@router.post("/me/metrics", response_model=UserMetricRead, status_code=201)
async def add_my_metric(
    payload: UserMetricCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    metric = UserMetric(
        user_id=user.id,
        weight_kg=payload.weight_kg,
        height_cm=payload.height_cm,
        date_recorded=payload.date_recorded or utcnow(),
    )
    db.add(metric)
    await db.flush()
    await db.refresh(metric)
    return metric


@router.get("/me/metrics/stats", response_model=MetricsStatsRead)
async def my_metrics_stats(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Current weight/height, change over the last month and BMI."""
    return compute_metrics_stats(await _metrics_newest_first(db, user.id))


# ── Other users ──────────────────────────────────────────────────────────

@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: uuid.UUID,
    _: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await get_user_or_404(db, user_id)


@router.post("/{user_id}/follow", response_model=FollowToggleRead)
async def follow_user(
    user_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Follow the user, or unfollow if already following."""
    following = await toggle_follow(db, user.id, user_id)
    return FollowToggleRead(following=following)


@router.get("/{user_id}/followers", response_model=list[UserSummary])
async def list_followers(
    user_id: uuid.UUID,
    _: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await get_user_or_404(db, user_id)
    result = await db.execute(
        select(Follow)
        .where(Follow.following_id == user_id)
        .options(selectinload(Follow.follower))
        .order_by(Follow.created_at.desc())
    )
    return [f.follower for f in result.scalars().all() if f.follower is not None]


@router.get("/{user_id}/following", response_model=list[UserSummary])
async def list_following(
    user_id: uuid.UUID,
    _: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await get_user_or_404(db, user_id)
    result = await db.execute(
        select(Follow)
        .where(Follow.follower_id == user_id)
        .options(selectinload(Follow.following))
        .order_by(Follow.created_at.desc())
    )
    return [f.following for f in result.scalars().all() if f.following is not None]
