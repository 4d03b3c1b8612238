"""
Price feed interface.

Provides:
- **parse_price_tick**: validates a raw feed payload into a PriceRecord.
- **TickDispatcher**: one FIFO queue and worker per symbol, so ticks of a
  symbol never overlap.
- **FeedSubscriber**: pulls ticks from the PriceFeed port into the dispatcher.
"""

from neurotrade.interfaces.feed.dispatcher import TickDispatcher
from neurotrade.interfaces.feed.schemas import PriceTickSchema, parse_price_tick
from neurotrade.interfaces.feed.subscriber import FeedSubscriber

__all__ = [
    "TickDispatcher",
    "PriceTickSchema",
    "parse_price_tick",
    "FeedSubscriber",
]
