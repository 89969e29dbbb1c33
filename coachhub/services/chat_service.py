"""Chat queries that span several tables: chat list, direct-chat lookup, membership."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from datetime import datetime, timezone

from fastapi import HTTPException
from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from coachhub.core.dates import as_utc
from coachhub.models.chat import Chat, ChatParticipant, Message
from coachhub.models.user import User
from coachhub.schemas.chat import ChatSummaryRead, MessageRead
from coachhub.schemas.user import UserSummary

logger = logging.getLogger(__name__)


def message_query():
    return select(Message).options(selectinload(Message.sender))


async def is_participant(db: AsyncSession, chat_id: uuid.UUID, user_id: uuid.UUID) -> bool:
    result = await db.execute(
        select(ChatParticipant.user_id).where(
            ChatParticipant.chat_id == chat_id, ChatParticipant.user_id == user_id
        )
    )
    return result.scalar_one_or_none() is not None


async def require_participant(db: AsyncSession, chat_id: uuid.UUID, user_id: uuid.UUID) -> Chat:
    """Return the chat, 404 if it doesn't exist, 403 if user isn't in it."""
    result = await db.execute(select(Chat).where(Chat.id == chat_id))
    chat = result.scalar_one_or_none()
    if not chat:
        raise HTTPException(status_code=404, detail="Chat not found")
    if not await is_participant(db, chat_id, user_id):
        raise HTTPException(status_code=403, detail="You are not a participant of this chat")
    return chat


async def _latest_messages(db: AsyncSession, chat_ids: list[uuid.UUID]) -> dict[uuid.UUID, Message]:
    """Newest message of each chat in one query."""
    if not chat_ids:
        return {}
    ranked = (
        select(
            Message.id,
            func.row_number()
            .over(
                partition_by=Message.chat_id,
                order_by=(Message.created_at.desc(), Message.id.desc()),
            )
            .label("recency"),
        )
        .where(Message.chat_id.in_(chat_ids))
        .subquery()
    )
    result = await db.execute(
        message_query().join(ranked, ranked.c.id == Message.id).where(ranked.c.recency == 1)
    )
    return {message.chat_id: message for message in result.scalars().all()}


async def get_user_chats(db: AsyncSession, user_id: uuid.UUID) -> list[ChatSummaryRead]:
    """Every chat the user is in, with the other participants and the latest message."""
    result = await db.execute(
        select(Chat)
        .join(ChatParticipant, ChatParticipant.chat_id == Chat.id)
        .where(ChatParticipant.user_id == user_id)
        .options(selectinload(Chat.participants).selectinload(ChatParticipant.user))
    )
    chats = result.scalars().unique().all()
    last_by_chat = await _latest_messages(db, [chat.id for chat in chats])

    summaries: list[ChatSummaryRead] = []
    for chat in chats:
        last_message = last_by_chat.get(chat.id)
        others = [p.user for p in chat.participants if p.user_id != user_id and p.user is not None]
        summaries.append(
            ChatSummaryRead(
                id=chat.id,
                created_at=chat.created_at,
                participants=[UserSummary.model_validate(u) for u in others],
                last_message=MessageRead.model_validate(last_message) if last_message else None,
            )
        )

    def activity(summary: ChatSummaryRead) -> datetime:
        stamp = summary.last_message.created_at if summary.last_message else None
        stamp = stamp or summary.created_at
        return as_utc(stamp) if stamp else datetime.min.replace(tzinfo=timezone.utc)

    summaries.sort(key=activity, reverse=True)
    return summaries


async def create_chat(db: AsyncSession, creator_id: uuid.UUID, participant_ids: Iterable[uuid.UUID]) -> Chat:
    """Create a chat with the creator plus participant_ids (duplicates ignored)."""
    members: list[uuid.UUID] = [creator_id]
    for pid in participant_ids:
        if pid not in members:
            members.append(pid)
    if len(members) < 2:
        raise HTTPException(status_code=400, detail="Chat must have at least 2 participants")

    found = await db.execute(select(User.id).where(User.id.in_(members)))
    missing = set(members) - set(found.scalars().all())
    if missing:
        raise HTTPException(status_code=404, detail="User not found")

    chat = Chat()
    db.add(chat)
    await db.flush()
    for member in members:
        db.add(ChatParticipant(chat_id=chat.id, user_id=member))
    await db.flush()
    await db.refresh(chat)
    logger.info("Created chat %s with %d participants", chat.id, len(members))
    return chat


async def find_direct_chat(db: AsyncSession, user_a: uuid.UUID, user_b: uuid.UUID) -> uuid.UUID | None:
    """Id of a chat whose participants are exactly user_a and user_b, if one exists."""
    result = await db.execute(
        select(ChatParticipant.chat_id)
        .group_by(ChatParticipant.chat_id)
        .having(
            func.count() == 2,
            func.sum(case((ChatParticipant.user_id.in_([user_a, user_b]), 1), else_=0)) == 2,
        )
        .limit(1)
    )
    return result.scalar_one_or_none()


async def find_or_create_direct_chat(db: AsyncSession, user_id: uuid.UUID, other_id: uuid.UUID) -> Chat:
    if user_id == other_id:
        raise HTTPException(status_code=400, detail="Chat must have at least 2 participants")
    chat_id = await find_direct_chat(db, user_id, other_id)
    if chat_id is not None:
        result = await db.execute(select(Chat).where(Chat.id == chat_id))
        return result.scalar_one()
    return await create_chat(db, user_id, [other_id])
