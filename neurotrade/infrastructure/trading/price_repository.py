"""
Adapter: Price repository.

Implements PriceRepository port.
Reads and appends price ticks in the ``prices`` table.
"""

import logging
from decimal import Decimal

from sqlalchemy import insert, select
from sqlalchemy.engine import Engine

from neurotrade.domain.trading.entities import PriceRecord
from neurotrade.domain.trading.ports import PriceRepository
from neurotrade.infrastructure.trading.tables import prices

logger = logging.getLogger(__name__)

_COLUMNS = (
    prices.c.symbol,
    prices.c.open,
    prices.c.high,
    prices.c.low,
    prices.c.last,
    prices.c.volume,
    prices.c.timestamp,
)


class PriceRepositoryAdapter(PriceRepository):
    """Concrete adapter for price tick storage.

    Ticks are ordered by their auto-increment id, which is the order
    the price publisher stored them in.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_recent(self, symbol: str, limit: int, skip: int = 0) -> list[PriceRecord]:
        """Return up to ``limit`` records for a symbol, most recent first.

        Args:
            symbol: Stock ticker.
            limit: Maximum number of records.
            skip: Number of most recent records to skip first.
        """
        query = (
            select(*_COLUMNS)
            .where(prices.c.symbol == symbol)
            .order_by(prices.c.id.desc())
            .limit(limit)
            .offset(skip)
        )
        with self._engine.connect() as conn:
            rows = conn.execute(query).fetchall()
        return [self._to_record(row) for row in rows]

    def get_history(self, symbol: str) -> list[PriceRecord]:
        """Return every record for a symbol, oldest first."""
        query = (
            select(*_COLUMNS)
            .where(prices.c.symbol == symbol)
            .order_by(prices.c.id.asc())
        )
        with self._engine.connect() as conn:
            rows = conn.execute(query).fetchall()

        logger.info("Fetched %d historical prices for %s.", len(rows), symbol)
        return [self._to_record(row) for row in rows]

    def save(self, record: PriceRecord) -> None:
        """Append a price record."""
        if not record.symbol:
            raise ValueError("PriceRecord.symbol is required to store a price")

        with self._engine.begin() as conn:
            conn.execute(
                insert(prices).values(
                    symbol=record.symbol,
                    open=record.open,
                    high=record.high,
                    low=record.low,
                    last=record.last,
                    volume=record.volume,
                    timestamp=record.timestamp,
                )
            )

    @staticmethod
    def _to_record(row) -> PriceRecord:
        return PriceRecord(
            symbol=row.symbol,
            open=Decimal(str(row.open)),
            high=Decimal(str(row.high)),
            low=Decimal(str(row.low)),
            last=Decimal(str(row.last)),
            volume=int(row.volume),
            timestamp=row.timestamp,
        )
