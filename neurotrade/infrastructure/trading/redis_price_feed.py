"""
Adapter: Redis price feed.

Implements the PriceFeed port on Redis pub/sub.

Channel layout: ``<topic>:<SYMBOL>``, message body = price JSON.
The subscriber pattern-subscribes to ``<topic>:*`` once and never
unsubscribes while running, so every tick arrives as the triple
``(topic, symbol, payload)``.
"""

import json
import logging
from typing import AsyncIterator

import redis.asyncio as redis

from neurotrade.domain.trading.entities import PriceRecord
from neurotrade.domain.trading.ports import PriceFeed

logger = logging.getLogger(__name__)


def channel_for(topic: str, symbol: str) -> str:
    """Return the channel a symbol's ticks are published on."""
    return f"{topic}:{symbol}"


def encode_price(record: PriceRecord) -> bytes:
    """Serialize a price record into the feed's JSON payload."""
    payload = {
        "open": str(record.open),
        "high": str(record.high),
        "low": str(record.low),
        "last": str(record.last),
        "volume": record.volume,
    }
    if record.timestamp is not None:
        payload["timestamp"] = record.timestamp.isoformat()
    return json.dumps(payload).encode("utf-8")


class RedisPriceFeed(PriceFeed):
    """Subscribes to price ticks published on Redis channels."""

    def __init__(self, redis_url: str = "redis://localhost:6379/0", topic: str = "ADD_PRICE") -> None:
        self._redis_url = redis_url
        self._topic = topic
        self._client: "redis.Redis | None" = None
        self._pubsub = None

    async def listen(self) -> AsyncIterator[tuple[str, str, bytes]]:
        """Yield ``(topic, symbol, payload)`` for every published tick."""
        self._client = redis.from_url(self._redis_url)
        self._pubsub = self._client.pubsub(ignore_subscribe_messages=True)

        pattern = channel_for(self._topic, "*")
        logger.info("Connect to %s", self._redis_url)
        await self._pubsub.psubscribe(pattern)
        logger.info("Subscribe to %s", pattern)

        async for message in self._pubsub.listen():
            if message.get("type") != "pmessage":
                continue
            channel = message["channel"]
            if isinstance(channel, bytes):
                channel = channel.decode("utf-8")
            symbol = channel[len(self._topic) + 1:]
            data = message["data"]
            if isinstance(data, str):
                data = data.encode("utf-8")
            yield self._topic, symbol, data

    async def publish(self, symbol: str, record: PriceRecord) -> int:
        """Publish one tick. Returns the number of subscribers that received it."""
        client = self._client or redis.from_url(self._redis_url)
        try:
            receivers = await client.publish(
                channel_for(self._topic, symbol), encode_price(record)
            )
        finally:
            if client is not self._client:
                await client.aclose()
        logger.info("Published %s tick to %d subscriber(s).", symbol, receivers)
        return receivers

    async def close(self) -> None:
        if self._pubsub is not None:
            await self._pubsub.aclose()
            self._pubsub = None
        if self._client is not None:
            await self._client.aclose()
            self._client = None
