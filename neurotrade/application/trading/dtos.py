"""
Data Transfer Objects for the trading application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass, field
from typing import Optional

from neurotrade.domain.trading.entities import Decision, PriceRecord, TrainingSummary


@dataclass(frozen=True)
class ProcessTickCommand:
    """Input DTO for one parsed price tick.

    Attributes:
        symbol: Stock ticker symbol.
        price: The tick that just arrived.
    """

    symbol: str
    price: PriceRecord


@dataclass(frozen=True)
class ProcessTickResult:
    """Output DTO of one online-loop step.

    Attributes:
        symbol: Stock ticker symbol.
        propagated: Target fed back for the previous prediction, if any.
        score: Prediction score for the new tick, if one could be computed.
        decision: Decision taken on that score, if any.
        persisted: Whether the updated model reached the model store.
    """

    symbol: str
    propagated: Optional[float] = None
    score: Optional[float] = None
    decision: Optional[Decision] = None
    persisted: bool = False


@dataclass(frozen=True)
class ColdStartResult:
    """Outcome of preparing one symbol's model.

    Attributes:
        symbol: Stock ticker symbol.
        source: "snapshot", "trained", "untrained" or "failed".
        summary: Training summary when a training pass ran.
        error: Failure message when the symbol could not be prepared.
    """

    symbol: str
    source: str
    summary: Optional[TrainingSummary] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class BootstrapReport:
    """Outcome of bootstrapping every known symbol."""

    results: list[ColdStartResult] = field(default_factory=list)

    @property
    def symbols(self) -> list[str]:
        return [r.symbol for r in self.results]

    def count(self, source: str) -> int:
        return sum(1 for r in self.results if r.source == source)


@dataclass(frozen=True)
class ScoreResult:
    """Output DTO of a side-effect-free prediction."""

    symbol: str
    score: float
    decision: Decision
