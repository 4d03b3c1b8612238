"""
Shared fixtures for the test suite.
"""

from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from neurotrade.domain.trading.entities import PriceRecord
from neurotrade.infrastructure.trading.tables import create_schema


def _price(
    last,
    open=None,
    high=None,
    low=None,
    volume=100,
    symbol="ACME",
) -> PriceRecord:
    last = Decimal(str(last))
    return PriceRecord(
        symbol=symbol,
        open=Decimal(str(open)) if open is not None else last,
        high=Decimal(str(high)) if high is not None else last,
        low=Decimal(str(low)) if low is not None else last,
        last=last,
        volume=volume,
    )


@pytest.fixture
def make_price():
    """Factory for PriceRecords; unspecified prices default to ``last``."""
    return _price


@pytest.fixture
def engine():
    """In-memory SQLite engine shared across threads, schema created."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_schema(eng)
    yield eng
    eng.dispose()
