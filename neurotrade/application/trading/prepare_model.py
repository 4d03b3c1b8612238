"""
Use case: Make one symbol's model ready for live ticks.

Input: symbol
Output: ColdStartResult
Side effects: a fresh model is registered for the symbol; it is either
              restored from its snapshot or trained on the full price
              history and saved.
Failure cases: none raised for missing/corrupt snapshots or empty
               history; storage errors reading the history propagate.
"""

import asyncio
import logging

from neurotrade.application.trading.dtos import ColdStartResult
from neurotrade.application.trading.model_registry import ModelRegistry
from neurotrade.domain.trading.entities import TrainingConfig
from neurotrade.domain.trading.errors import (
    EmptyInputError,
    ModelCorruptError,
    ModelNotFoundError,
    PersistenceError,
)
from neurotrade.domain.trading.features import build_training_set
from neurotrade.domain.trading.ports import ModelStore, PriceRepository

logger = logging.getLogger(__name__)


class PrepareModelUseCase:
    """Warm restart from a snapshot, or cold start from history."""

    def __init__(
        self,
        registry: ModelRegistry,
        model_store: ModelStore,
        price_repository: PriceRepository,
        training_config: TrainingConfig | None = None,
    ) -> None:
        self._registry = registry
        self._store = model_store
        self._prices = price_repository
        self._training_config = training_config or TrainingConfig()

    async def execute(self, symbol: str) -> ColdStartResult:
        """Register a model for ``symbol``, loading its snapshot when possible."""
        model = self._registry.create(symbol)

        try:
            await asyncio.to_thread(self._store.load, symbol, model)
        except (ModelNotFoundError, ModelCorruptError, PersistenceError) as exc:
            logger.warning("%s: %s. Falling back to training.", symbol, exc.message)
        else:
            logger.info("%s: model restored from snapshot.", symbol)
            return ColdStartResult(symbol=symbol, source="snapshot")

        # A failed load may have left nothing usable behind: start clean.
        self._registry.create(symbol)
        return await self.retrain(symbol)

    async def retrain(self, symbol: str) -> ColdStartResult:
        """Train the symbol's registered model on its full history and save it."""
        model = self._registry.get(symbol)
        prices = await asyncio.to_thread(self._prices.get_history, symbol)
        examples = build_training_set(prices)

        try:
            summary = model.train_batch(examples, self._training_config)
        except EmptyInputError:
            logger.error(
                "%s: no training data (%d prices). Model stays untrained.",
                symbol, len(prices),
            )
            return ColdStartResult(symbol=symbol, source="untrained")

        try:
            await asyncio.to_thread(self._store.save, symbol, model)
        except PersistenceError as exc:
            logger.error("%s: trained model not saved: %s", symbol, exc.message)

        return ColdStartResult(symbol=symbol, source="trained", summary=summary)
