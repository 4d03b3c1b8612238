"""
SQLAlchemy Core schema of the trading store.

Tables:
    - ``stocks``: registry of traded symbols
    - ``prices``: every tick, id order = arrival order
    - ``orders``: buy/sell orders with an ``is_active`` flag
    - ``network_outputs``: audit trail of prediction scores
"""

import logging

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    Float,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Uuid,
    func,
)
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

metadata = MetaData()

# SQLite only autoincrements INTEGER primary keys
_Id = BigInteger().with_variant(Integer, "sqlite")

stocks = Table(
    "stocks",
    metadata,
    Column("symbol", String(20), primary_key=True),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
)

prices = Table(
    "prices",
    metadata,
    Column("id", _Id, primary_key=True, autoincrement=True),
    Column("symbol", String(20), nullable=False, index=True),
    Column("open", Numeric(18, 6), nullable=False),
    Column("high", Numeric(18, 6), nullable=False),
    Column("low", Numeric(18, 6), nullable=False),
    Column("last", Numeric(18, 6), nullable=False),
    Column("volume", BigInteger, nullable=False),
    Column("timestamp", DateTime(timezone=True), nullable=True),
)

orders = Table(
    "orders",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("symbol", String(20), nullable=False, index=True),
    Column("amount", Integer, nullable=False),
    Column("value", Numeric(18, 6), nullable=False),
    Column("type", String(4), nullable=False),
    Column("is_active", Boolean, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

network_outputs = Table(
    "network_outputs",
    metadata,
    Column("id", _Id, primary_key=True, autoincrement=True),
    Column("symbol", String(20), nullable=False, index=True),
    Column("result", Float, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)


def create_schema(engine: Engine) -> None:
    """Create missing tables (idempotent)."""
    metadata.create_all(engine)
    logger.info("Database tables verified/created.")
