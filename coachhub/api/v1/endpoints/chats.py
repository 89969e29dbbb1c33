"""Direct messages: chat list, history, sending and live subscription."""

from __future__ import annotations

import asyncio
import logging
import uuid

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from coachhub.api.deps import get_current_user
from coachhub.core.constants import CHAT_MESSAGES_PAGE_SIZE, MAX_CHAT_MESSAGES_PAGE_SIZE
from coachhub.core.security import InvalidTokenError, decode_token
from coachhub.db.session import get_db, get_session_maker
from coachhub.models.chat import Message
from coachhub.models.program import Program
from coachhub.models.user import User
from coachhub.schemas.chat import (
    ChatCreate,
    ChatRead,
    ChatSummaryRead,
    DirectChatRequest,
    MessageCreate,
    MessageRead,
)
from coachhub.services import chat_service
from coachhub.services.realtime import broker

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=list[ChatSummaryRead])
async def list_chats(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Chats the current user is in, latest activity first."""
    return await chat_service.get_user_chats(db, user.id)


@router.post("", response_model=ChatRead, status_code=201)
async def create_chat(
    payload: ChatCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await chat_service.create_chat(db, user.id, payload.participant_ids)


@router.post("/direct", response_model=ChatRead)
async def open_direct_chat(
    payload: DirectChatRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Return the one-to-one chat with user_id, creating it on first contact."""
    return await chat_service.find_or_create_direct_chat(db, user.id, payload.user_id)


@router.get("/{chat_id}/messages", response_model=list[MessageRead])
async def list_messages(
    chat_id: uuid.UUID,
    limit: int = Query(CHAT_MESSAGES_PAGE_SIZE, ge=1, le=MAX_CHAT_MESSAGES_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Page back from the newest message; the page itself is returned oldest first."""
    await chat_service.require_participant(db, chat_id, user.id)
    result = await db.execute(
        chat_service.message_query()
        .where(Message.chat_id == chat_id)
        .order_by(Message.created_at.desc(), Message.id.desc())
        .offset(offset)
        .limit(limit)
    )
    messages = list(result.scalars().all())
    messages.reverse()
    return messages


@router.post("/{chat_id}/messages", response_model=MessageRead, status_code=201)
async def send_message(
    chat_id: uuid.UUID,
    payload: MessageCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Store a message, commit, then push it to live subscribers."""
    await chat_service.require_participant(db, chat_id, user.id)
    if payload.program_request_id is not None:
        program = await db.execute(select(Program.id).where(Program.id == payload.program_request_id))
        if program.scalar_one_or_none() is None:
            raise HTTPException(status_code=404, detail="Program not found")
    message = Message(chat_id=chat_id, sender_id=user.id, **payload.model_dump())
    db.add(message)
    await db.flush()
    result = await db.execute(chat_service.message_query().where(Message.id == message.id))
    read = MessageRead.model_validate(result.scalar_one())
    # Subscribers must never see a message that history does not have yet
    await db.commit()
    await broker.publish(chat_id, read.model_dump(mode="json"))
    return read


async def _forward(websocket: WebSocket, queue: asyncio.Queue) -> None:
    while True:
        payload = await queue.get()
        await websocket.send_json(payload)


@router.websocket("/{chat_id}/ws")
async def subscribe_to_messages(
    websocket: WebSocket,
    chat_id: uuid.UUID,
    token: str | None = None,
    session_maker: async_sessionmaker[AsyncSession] = Depends(get_session_maker),
):
    """Push every new message in the chat to this socket until the client disconnects."""
    try:
        user_id = decode_token(token or "")
    except InvalidTokenError:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    async with session_maker() as db:
        allowed = await chat_service.is_participant(db, chat_id, user_id)
    if not allowed:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    async with broker.subscribe(chat_id) as queue:
        # Subscribed before accepting so nothing sent after the handshake is missed
        await websocket.accept()
        forward = asyncio.create_task(_forward(websocket, queue))
        try:
            # Incoming frames are only keep-alives; reading them surfaces the disconnect
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            logger.info("User %s left chat %s", user_id, chat_id)
        finally:
            forward.cancel()
            results = await asyncio.gather(forward, return_exceptions=True)
            for outcome in results:
                if isinstance(outcome, Exception) and not isinstance(outcome, asyncio.CancelledError):
                    logger.exception("Realtime forwarder for chat %s failed", chat_id, exc_info=outcome)
