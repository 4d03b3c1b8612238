"""
Pydantic schema for inbound price ticks.

Enforces the shape of the feed payload. Unknown fields are ignored.
No business logic belongs here.
"""

import json
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from neurotrade.domain.trading.entities import PriceRecord
from neurotrade.domain.trading.errors import MalformedTickError


class PriceTickSchema(BaseModel):
    """A price tick as published on the feed.

    Attributes:
        open: Opening price.
        high: Highest price so far.
        low: Lowest price so far.
        last: Last traded price.
        volume: Traded volume.
        timestamp: Optional publisher timestamp.
    """

    model_config = ConfigDict(extra="ignore")

    open: Decimal = Field(..., allow_inf_nan=False)
    high: Decimal = Field(..., allow_inf_nan=False)
    low: Decimal = Field(..., allow_inf_nan=False)
    last: Decimal = Field(..., allow_inf_nan=False)
    volume: int = Field(..., ge=0)
    timestamp: Optional[datetime] = None

    def to_record(self, symbol: str) -> PriceRecord:
        return PriceRecord(
            symbol=symbol,
            open=self.open,
            high=self.high,
            low=self.low,
            last=self.last,
            volume=self.volume,
            timestamp=self.timestamp,
        )


def parse_price_tick(symbol: str, payload: bytes) -> PriceRecord:
    """Parse a raw feed payload.

    Raises:
        MalformedTickError: If the payload is not UTF-8 JSON describing a
            non-empty, valid price object.
    """
    try:
        data = json.loads(payload.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise MalformedTickError(symbol, "payload is not UTF-8") from exc
    except json.JSONDecodeError as exc:
        raise MalformedTickError(symbol, f"invalid JSON ({exc.msg})") from exc

    if data is None:
        raise MalformedTickError(symbol, "price object is null")
    if not isinstance(data, dict) or not data:
        raise MalformedTickError(symbol, "price object is empty")

    try:
        tick = PriceTickSchema.model_validate(data)
    except ValidationError as exc:
        fields = ", ".join(str(e["loc"][0]) for e in exc.errors() if e["loc"])
        raise MalformedTickError(symbol, f"invalid field(s): {fields}") from exc

    return tick.to_record(symbol)
