"""
Port interfaces (ABCs) for the trading bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import AsyncIterator, Sequence

from neurotrade.domain.trading.entities import (
    ModelState,
    NetworkOutput,
    Order,
    PriceRecord,
    TrainingConfig,
    TrainingExample,
    TrainingSummary,
)


class PredictiveModel(ABC):
    """Capability interface of a trainable per-symbol predictor.

    One instance per symbol, mutated in place by ``propagate`` and
    ``train_batch``. Any feed-forward implementation can stand behind it.
    """

    symbol: str

    @property
    @abstractmethod
    def state(self) -> ModelState:
        """Return UNINITIALIZED until trained or restored, TRAINED afterwards."""
        raise NotImplementedError

    @abstractmethod
    def activate(self, vector: Sequence[int]) -> float:
        """Forward pass. Returns a score in [0, 1] without touching the weights."""
        raise NotImplementedError

    @abstractmethod
    def propagate(self, expected: float, learning_rate: float = 0.1) -> None:
        """One backward weight-update step toward ``expected`` for the last activation."""
        raise NotImplementedError

    @abstractmethod
    def train_batch(
        self, examples: Sequence[TrainingExample], config: TrainingConfig
    ) -> TrainingSummary:
        """Iterative supervised training.

        Raises:
            EmptyInputError: If ``examples`` is empty.
        """
        raise NotImplementedError

    @abstractmethod
    def serialize(self) -> bytes:
        """Return the full topology and weight state as an opaque blob."""
        raise NotImplementedError

    @abstractmethod
    def deserialize(self, blob: bytes) -> None:
        """Replace the model state with ``blob``.

        Raises:
            ModelCorruptError: If ``blob`` is not a snapshot of the expected
                topology. The model is left untouched in that case.
        """
        raise NotImplementedError


class ModelStore(ABC):
    """Port for persisting per-symbol model snapshots."""

    @abstractmethod
    def save(self, symbol: str, model: PredictiveModel) -> None:
        """Write the serialized model under the symbol's key.

        Raises:
            PersistenceError: On any write failure.
        """
        raise NotImplementedError

    @abstractmethod
    def load(self, symbol: str, model: PredictiveModel) -> PredictiveModel:
        """Restore ``model`` from the symbol's snapshot and return it.

        Raises:
            ModelNotFoundError: If no snapshot exists.
            ModelCorruptError: If the snapshot cannot be read back.
        """
        raise NotImplementedError


class PriceRepository(ABC):
    """Port for reading and storing price ticks."""

    @abstractmethod
    def get_recent(self, symbol: str, limit: int, skip: int = 0) -> list[PriceRecord]:
        """Return up to ``limit`` records, most recent first, after skipping ``skip``."""
        raise NotImplementedError

    @abstractmethod
    def get_history(self, symbol: str) -> list[PriceRecord]:
        """Return the full price history of a symbol, oldest first."""
        raise NotImplementedError

    @abstractmethod
    def save(self, record: PriceRecord) -> None:
        """Persist a price record. ``record.symbol`` must be set."""
        raise NotImplementedError


class OrderRepository(ABC):
    """Port for persisting buy and sell orders."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Insert or update an order."""
        raise NotImplementedError

    @abstractmethod
    def find_open_buys(self, symbol: str) -> list[Order]:
        """Return every active BUY order of a symbol."""
        raise NotImplementedError

    @abstractmethod
    def close_positions(self, closed_buys: list[Order], sells: list[Order]) -> None:
        """Deactivate ``closed_buys`` and insert ``sells`` in one transaction."""
        raise NotImplementedError


class NetworkOutputRepository(ABC):
    """Port for the prediction audit trail."""

    @abstractmethod
    def save(self, output: NetworkOutput) -> None:
        """Persist a prediction score."""
        raise NotImplementedError


class StockRepository(ABC):
    """Port for the registry of traded symbols."""

    @abstractmethod
    def list_symbols(self) -> list[str]:
        """Return every known symbol in a stable order."""
        raise NotImplementedError


class PriceFeed(ABC):
    """Port for the inbound stream of price ticks."""

    @abstractmethod
    def listen(self) -> AsyncIterator[tuple[str, str, bytes]]:
        """Yield ``(topic, symbol, payload)`` triples as they arrive."""
        raise NotImplementedError

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying connection."""
        raise NotImplementedError
