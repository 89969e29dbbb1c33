"""In-process publish/subscribe for new chat messages.

Each open chat screen holds one subscription (an asyncio.Queue) keyed by chat id.
Publishing fans a JSON-ready payload out to every queue for that chat. A slow
subscriber whose queue is full drops the event; it can re-fetch history instead.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections import defaultdict
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

logger = logging.getLogger(__name__)

SUBSCRIBER_QUEUE_SIZE = 100


class MessageBroker:
    def __init__(self, queue_size: int = SUBSCRIBER_QUEUE_SIZE) -> None:
        self._queue_size = queue_size
        self._subscribers: dict[uuid.UUID, set[asyncio.Queue]] = defaultdict(set)

    def subscriber_count(self, chat_id: uuid.UUID) -> int:
        return len(self._subscribers.get(chat_id, ()))

    @asynccontextmanager
    async def subscribe(self, chat_id: uuid.UUID) -> AsyncIterator[asyncio.Queue]:
        """Register a queue for chat_id for the lifetime of the context."""
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._queue_size)
        self._subscribers[chat_id].add(queue)
        logger.info("Subscribed to chat %s (%d open)", chat_id, self.subscriber_count(chat_id))
        try:
            yield queue
        finally:
            queues = self._subscribers.get(chat_id)
            if queues is not None:
                queues.discard(queue)
                if not queues:
                    del self._subscribers[chat_id]
            logger.info("Unsubscribed from chat %s", chat_id)

    async def publish(self, chat_id: uuid.UUID, payload: dict[str, Any]) -> int:
        """Deliver payload to every subscriber of chat_id. Returns how many received it."""
        delivered = 0
        for queue in list(self._subscribers.get(chat_id, ())):
            try:
                queue.put_nowait(payload)
                delivered += 1
            except asyncio.QueueFull:
                logger.warning("Dropping message for slow subscriber on chat %s", chat_id)
        return delivered


broker = MessageBroker()
