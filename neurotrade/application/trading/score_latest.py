"""
Use case: Score the latest stored prices without side effects.

Input: symbol
Output: ScoreResult
Side effects: None. The snapshot is read into a throwaway model;
              nothing is propagated, ordered, or saved.
Failure cases: ModelNotFoundError, ModelCorruptError, or ValueError
               when fewer than two prices are stored.
"""

import logging
from typing import Callable

from neurotrade.application.trading.dtos import ScoreResult
from neurotrade.domain.trading.decision import decide
from neurotrade.domain.trading.features import build_input_item
from neurotrade.domain.trading.ports import ModelStore, PredictiveModel, PriceRepository

logger = logging.getLogger(__name__)


class ScoreLatestUseCase:
    """Dry-run prediction for the most recent tick of a symbol."""

    def __init__(
        self,
        model_factory: Callable[[str], PredictiveModel],
        model_store: ModelStore,
        price_repository: PriceRepository,
    ) -> None:
        self._factory = model_factory
        self._store = model_store
        self._prices = price_repository

    def execute(self, symbol: str) -> ScoreResult:
        model = self._store.load(symbol, self._factory(symbol))

        recent = self._prices.get_recent(symbol, 2)
        if len(recent) < 2:
            raise ValueError(f"Need two stored prices for {symbol}, found {len(recent)}")
        current, past = recent[0], recent[1]

        score = model.activate(build_input_item(past, current))
        return ScoreResult(symbol=symbol, score=score, decision=decide(score))
