"""Tests for the in-process message broker."""

import asyncio
import uuid

from coachhub.services.realtime import MessageBroker


async def test_publish_reaches_every_subscriber_of_the_chat():
    broker = MessageBroker()
    chat_id = uuid.uuid4()
    other_chat = uuid.uuid4()
    async with broker.subscribe(chat_id) as first, broker.subscribe(chat_id) as second:
        async with broker.subscribe(other_chat) as unrelated:
            delivered = await broker.publish(chat_id, {"message": "hi"})
            assert delivered == 2
            assert await first.get() == {"message": "hi"}
            assert await second.get() == {"message": "hi"}
            assert unrelated.empty()


async def test_subscription_removed_on_exit():
    broker = MessageBroker()
    chat_id = uuid.uuid4()
    async with broker.subscribe(chat_id):
        assert broker.subscriber_count(chat_id) == 1
    assert broker.subscriber_count(chat_id) == 0
    assert await broker.publish(chat_id, {"message": "nobody home"}) == 0


async def test_full_queue_drops_instead_of_blocking():
    broker = MessageBroker(queue_size=1)
    chat_id = uuid.uuid4()
    async with broker.subscribe(chat_id) as queue:
        assert await broker.publish(chat_id, {"n": 1}) == 1
        assert await asyncio.wait_for(broker.publish(chat_id, {"n": 2}), timeout=1) == 0
        assert queue.qsize() == 1
        assert queue.get_nowait() == {"n": 1}
