"""Social feed: posts, likes and comments."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from coachhub.api.deps import get_current_user
from coachhub.core.constants import FEED_PAGE_SIZE, MAX_FEED_PAGE_SIZE
from coachhub.db.session import get_db
from coachhub.models.content import Content, ContentComment
from coachhub.models.user import User
from coachhub.schemas.content import (
    CommentCreate,
    CommentRead,
    FeedPage,
    LikeToggleRead,
    PostCreate,
    PostRead,
)
from coachhub.services import feed

router = APIRouter()


async def get_post_or_404(db: AsyncSession, post_id: uuid.UUID) -> Content:
    result = await db.execute(select(Content).where(Content.id == post_id))
    post = result.scalar_one_or_none()
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@router.get("", response_model=FeedPage)
async def get_feed(
    page: int = Query(0, ge=0),
    page_size: int = Query(FEED_PAGE_SIZE, ge=1, le=MAX_FEED_PAGE_SIZE),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await feed.get_feed_page(db, user.id, page, page_size)


@router.post("", response_model=PostRead, status_code=201)
async def create_post(
    payload: PostCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    post = Content(**payload.model_dump(), author_id=user.id)
    db.add(post)
    await db.flush()
    await db.refresh(post)
    return post


@router.delete("/comments/{comment_id}", status_code=204)
async def delete_comment(
    comment_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(select(ContentComment).where(ContentComment.id == comment_id))
    comment = result.scalar_one_or_none()
    if not comment:
        raise HTTPException(status_code=404, detail="Comment not found")
    if comment.author_id != user.id:
        raise HTTPException(status_code=403, detail="You can only delete your own comments")
    await db.delete(comment)
    return Response(status_code=204)


@router.delete("/{post_id}", status_code=204)
async def delete_post(
    post_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    post = await get_post_or_404(db, post_id)
    if post.author_id != user.id:
        raise HTTPException(status_code=403, detail="You can only delete your own posts")
    await db.delete(post)
    return Response(status_code=204)


@router.post("/{post_id}/like", response_model=LikeToggleRead)
async def toggle_like(
    post_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Flip the viewer's like and return the state the client should reconcile to."""
    await get_post_or_404(db, post_id)
    return await feed.toggle_like(db, post_id, user.id)


@router.get("/{post_id}/comments", response_model=list[CommentRead])
async def list_comments(
    post_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await get_post_or_404(db, post_id)
    result = await db.execute(
        select(ContentComment)
        .where(ContentComment.content_id == post_id)
        .options(selectinload(ContentComment.author))
        .order_by(ContentComment.created_at, ContentComment.id)
    )
    return result.scalars().all()


@router.post("/{post_id}/comments", response_model=CommentRead, status_code=201)
async def add_comment(
    post_id: uuid.UUID,
    payload: CommentCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await get_post_or_404(db, post_id)
    comment = ContentComment(comment=payload.comment, content_id=post_id, author_id=user.id)
    db.add(comment)
    await db.flush()
    result = await db.execute(
        select(ContentComment)
        .where(ContentComment.id == comment.id)
        .options(selectinload(ContentComment.author))
    )
    return result.scalar_one()
