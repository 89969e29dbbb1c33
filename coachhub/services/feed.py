"""Paged social feed with per-viewer like state."""

from __future__ import annotations

import uuid

from fastapi import HTTPException
from sqlalchemy import exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from coachhub.models.content import Content, ContentComment, ContentLike
from coachhub.schemas.content import FeedPage, FeedPostRead, LikeToggleRead
from coachhub.schemas.user import UserSummary


def _likes_count():
    return (
        select(func.count())
        .select_from(ContentLike)
        .where(ContentLike.content_id == Content.id)
        .correlate(Content)
        .scalar_subquery()
    )


def _comments_count():
    return (
        select(func.count())
        .select_from(ContentComment)
        .where(ContentComment.content_id == Content.id)
        .correlate(Content)
        .scalar_subquery()
    )


def _liked_by(viewer_id: uuid.UUID):
    return exists().where(ContentLike.content_id == Content.id, ContentLike.user_id == viewer_id)


async def get_feed_page(db: AsyncSession, viewer_id: uuid.UUID, page: int, page_size: int) -> FeedPage:
    """Posts newest first. next_page is set only when this page came back full."""
    result = await db.execute(
        select(
            Content,
            _likes_count().label("likes_count"),
            _comments_count().label("comments_count"),
            _liked_by(viewer_id).label("is_liked"),
        )
        .options(selectinload(Content.author))
        .order_by(Content.created_at.desc(), Content.id)
        .offset(page * page_size)
        .limit(page_size)
    )
    posts = [
        FeedPostRead(
            id=post.id,
            title=post.title,
            description=post.description,
            content_url=post.content_url,
            author_id=post.author_id,
            created_at=post.created_at,
            author=UserSummary.model_validate(post.author) if post.author else None,
            likes_count=likes_count or 0,
            comments_count=comments_count or 0,
            is_liked=bool(is_liked),
        )
        for post, likes_count, comments_count, is_liked in result.all()
    ]
    has_more = len(posts) == page_size
    return FeedPage(posts=posts, next_page=page + 1 if has_more else None, has_more=has_more)


async def _existing_like(db: AsyncSession, post_id: uuid.UUID, user_id: uuid.UUID) -> ContentLike | None:
    result = await db.execute(
        select(ContentLike).where(ContentLike.content_id == post_id, ContentLike.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def toggle_like(db: AsyncSession, post_id: uuid.UUID, user_id: uuid.UUID) -> LikeToggleRead:
    """Like if not yet liked, otherwise unlike. Returns the authoritative state and count.

    A like recorded concurrently for the same viewer surfaces as 409 so the client re-syncs.
    """
    like = await _existing_like(db, post_id, user_id)
    if like is not None:
        await db.delete(like)
        liked = False
    else:
        db.add(ContentLike(content_id=post_id, user_id=user_id))
        liked = True
    try:
        await db.flush()
    except IntegrityError as e:
        raise HTTPException(status_code=409, detail="Like state changed, please refresh") from e
    count = await db.execute(
        select(func.count()).select_from(ContentLike).where(ContentLike.content_id == post_id)
    )
    return LikeToggleRead(liked=liked, likes_count=count.scalar_one())
