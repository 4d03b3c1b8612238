"""
Registry of live per-symbol models.

Populated during bootstrap, read and mutated per tick, cleared at
shutdown. Holds at most one model per symbol.
"""

import logging
from typing import Callable, Iterator

from neurotrade.domain.trading.errors import UnknownSymbolError
from neurotrade.domain.trading.ports import PredictiveModel

logger = logging.getLogger(__name__)

ModelFactory = Callable[[str], PredictiveModel]


class ModelRegistry:
    """Owns the symbol → model map of the running process."""

    def __init__(self, factory: ModelFactory) -> None:
        self._factory = factory
        self._models: dict[str, PredictiveModel] = {}

    def create(self, symbol: str) -> PredictiveModel:
        """Build a fresh model for a symbol, replacing any previous one."""
        model = self._factory(symbol)
        self._models[symbol] = model
        return model

    def get(self, symbol: str) -> PredictiveModel:
        """Return the live model of a symbol.

        Raises:
            UnknownSymbolError: If the symbol was never bootstrapped.
        """
        try:
            return self._models[symbol]
        except KeyError:
            raise UnknownSymbolError(symbol) from None

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._models

    def __len__(self) -> int:
        return len(self._models)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._models))

    def clear(self) -> None:
        """Drop every model. Called at process shutdown."""
        logger.info("Releasing %d model(s).", len(self._models))
        self._models.clear()
