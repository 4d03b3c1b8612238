"""
Price feed subscriber.

Reads ``(topic, symbol, payload)`` triples from the PriceFeed port,
parses each payload, and hands valid ticks to the TickDispatcher.
Parsing happens here, in arrival order, so a malformed tick is
discarded without ever reaching a symbol's queue.
"""

import logging

from neurotrade.application.trading.dtos import ProcessTickCommand
from neurotrade.domain.trading.errors import MalformedTickError
from neurotrade.domain.trading.ports import PriceFeed
from neurotrade.interfaces.feed.dispatcher import TickDispatcher
from neurotrade.interfaces.feed.schemas import parse_price_tick

logger = logging.getLogger(__name__)


class FeedSubscriber:
    """Bridges the price feed to the per-symbol dispatcher."""

    def __init__(self, feed: PriceFeed, dispatcher: TickDispatcher, topic: str) -> None:
        self._feed = feed
        self._dispatcher = dispatcher
        self._topic = topic
        self._discarded = 0

    @property
    def discarded(self) -> int:
        return self._discarded

    async def run(self) -> None:
        """Consume the feed until it ends or the task is cancelled."""
        logger.info("Listening for %s ticks.", self._topic)
        try:
            async for topic, symbol, payload in self._feed.listen():
                self.handle(topic, symbol, payload)
        finally:
            await self._feed.close()

    def handle(self, topic: str, symbol: str, payload: bytes) -> bool:
        """Parse and dispatch one message. Returns False if it was discarded."""
        if topic != self._topic:
            logger.debug("Ignoring message on topic %s.", topic)
            return False

        try:
            price = parse_price_tick(symbol, payload)
        except MalformedTickError as exc:
            self._discarded += 1
            logger.error("Discarding tick: %s", exc.message)
            return False

        self._dispatcher.dispatch(ProcessTickCommand(symbol=symbol, price=price))
        return True
