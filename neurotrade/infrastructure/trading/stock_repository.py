"""
Adapter: Stock repository.

Implements StockRepository port.
Lists the symbols registered in the ``stocks`` table.
"""

from sqlalchemy import insert, select
from sqlalchemy.engine import Engine

from neurotrade.domain.trading.ports import StockRepository
from neurotrade.infrastructure.trading.tables import stocks


class StockRepositoryAdapter(StockRepository):
    """Concrete adapter for the symbol registry."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def list_symbols(self) -> list[str]:
        """Return every registered symbol, alphabetically."""
        with self._engine.connect() as conn:
            rows = conn.execute(select(stocks.c.symbol).order_by(stocks.c.symbol)).fetchall()
        return [row[0] for row in rows]

    def add(self, symbol: str) -> None:
        """Register a symbol."""
        with self._engine.begin() as conn:
            conn.execute(insert(stocks).values(symbol=symbol))
