"""
Domain entities for the trading bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4


class Decision(Enum):
    """Predicted direction of the next price move."""

    RAISE = "raise"
    FALL = "fall"
    STABLE = "stable"


class OrderType(Enum):
    """Side of an order."""

    BUY = "BUY"
    SELL = "SELL"


class ModelState(Enum):
    """Lifecycle of a per-symbol model instance."""

    UNINITIALIZED = "uninitialized"
    TRAINED = "trained"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PriceRecord:
    """A single price tick for a symbol. Immutable once recorded."""

    open: Decimal
    high: Decimal
    low: Decimal
    last: Decimal
    volume: int
    symbol: Optional[str] = None
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class TrainingExample:
    """One supervised example: a feature vector and its expected output."""

    input: tuple[int, ...]
    expected_output: tuple[float, ...]


@dataclass(frozen=True)
class TrainingConfig:
    """Hyper-parameters of a batch training pass.

    Tuned by experimentation, not by deployment, so they are not
    read from the environment.
    """

    learning_rate: float = 0.1
    max_iterations: int = 10_000
    error_threshold: float = 0.005
    log_every: int = 500


@dataclass(frozen=True)
class TrainingSummary:
    """Outcome of a batch training pass."""

    iterations_run: int
    error: float


@dataclass(frozen=True)
class Order:
    """A buy or sell order for a symbol.

    ``value`` is the total amount paid or received: amount * unit price.
    """

    symbol: str
    amount: int
    value: Decimal
    type: OrderType
    is_active: bool
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class NetworkOutput:
    """Audit record of one prediction score."""

    symbol: str
    result: float
    timestamp: datetime = field(default_factory=_utcnow)
