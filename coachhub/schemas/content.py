"""Post, comment and like schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from coachhub.schemas.user import UserRef, UserSummary


class PostCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=5000)
    content_url: str = Field(..., min_length=1, max_length=1000)


class PostRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    title: str
    description: str | None = None
    content_url: str
    author_id: UUID | None = None
    created_at: datetime | None = None


class FeedPostRead(PostRead):
    author: UserSummary | None = None
    likes_count: int = 0
    comments_count: int = 0
    is_liked: bool = False


class FeedPage(BaseModel):
    posts: list[FeedPostRead] = []
    next_page: int | None = None
    has_more: bool = False


class LikeToggleRead(BaseModel):
    liked: bool
    likes_count: int


class CommentCreate(BaseModel):
    comment: str = Field(..., min_length=1, max_length=2000)


class CommentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    comment: str
    author_id: UUID | None = None
    content_id: UUID
    created_at: datetime | None = None
    author: UserRef | None = None
