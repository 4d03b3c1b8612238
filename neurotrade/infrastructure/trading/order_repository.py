"""
Adapter: Order repository.

Implements OrderRepository port.
Persists buy/sell orders and closes open positions in the ``orders`` table.
"""

import logging
from decimal import Decimal

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Connection, Engine

from neurotrade.domain.trading.entities import Order, OrderType
from neurotrade.domain.trading.ports import OrderRepository
from neurotrade.infrastructure.trading.tables import orders

logger = logging.getLogger(__name__)


class OrderRepositoryAdapter(OrderRepository):
    """Concrete adapter for order persistence."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def save(self, order: Order) -> None:
        """Insert an order, or update it if its id already exists."""
        with self._engine.begin() as conn:
            self._upsert(conn, order)

    def find_open_buys(self, symbol: str) -> list[Order]:
        """Return every active BUY order of a symbol, oldest first."""
        query = (
            select(orders)
            .where(
                orders.c.symbol == symbol,
                orders.c.type == OrderType.BUY.value,
                orders.c.is_active.is_(True),
            )
            .order_by(orders.c.created_at.asc())
        )
        with self._engine.connect() as conn:
            rows = conn.execute(query).fetchall()

        return [
            Order(
                id=row.id,
                symbol=row.symbol,
                amount=row.amount,
                value=Decimal(str(row.value)),
                type=OrderType(row.type),
                is_active=row.is_active,
                created_at=row.created_at,
            )
            for row in rows
        ]

    def close_positions(self, closed_buys: list[Order], sells: list[Order]) -> None:
        """Deactivate the given buys and insert the sells atomically.

        Either every position is closed or none is.
        """
        if not closed_buys and not sells:
            return

        with self._engine.begin() as conn:
            for order in closed_buys:
                self._upsert(conn, order)
            for order in sells:
                self._upsert(conn, order)

        logger.info(
            "Closed %d position(s) with %d sell order(s).", len(closed_buys), len(sells)
        )

    @staticmethod
    def _upsert(conn: Connection, order: Order) -> None:
        values = {
            "symbol": order.symbol,
            "amount": order.amount,
            "value": order.value,
            "type": order.type.value,
            "is_active": order.is_active,
            "created_at": order.created_at,
        }
        result = conn.execute(
            update(orders).where(orders.c.id == order.id).values(**values)
        )
        if result.rowcount == 0:
            conn.execute(insert(orders).values(id=order.id, **values))
