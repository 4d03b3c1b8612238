"""
Use case: One step of the online learning loop.

Input: ProcessTickCommand (symbol, parsed price tick)
Output: ProcessTickResult
Side effects: model weights updated, score audited, orders placed,
              snapshot rewritten.
Failure cases: UnknownSymbolError; storage errors propagate to the
               caller except PersistenceError on the snapshot write,
               which is logged and tolerated.

Order of operations matters: ``propagate`` corrects the model's
previous activation before ``activate`` overwrites it with the new one.
Callers must not run two steps for the same symbol concurrently.
"""

import asyncio
import logging

from neurotrade.application.trading.dtos import ProcessTickCommand, ProcessTickResult
from neurotrade.application.trading.execute_decision import ExecuteDecisionUseCase
from neurotrade.application.trading.model_registry import ModelRegistry
from neurotrade.domain.trading.entities import NetworkOutput, TrainingConfig
from neurotrade.domain.trading.errors import PersistenceError
from neurotrade.domain.trading.features import build_input_item, expected_output
from neurotrade.domain.trading.ports import (
    ModelStore,
    NetworkOutputRepository,
    PriceRepository,
)

logger = logging.getLogger(__name__)


class ProcessTickUseCase:
    """Propagate → activate → audit → decide → persist, for one tick."""

    def __init__(
        self,
        registry: ModelRegistry,
        price_repository: PriceRepository,
        output_repository: NetworkOutputRepository,
        decision_use_case: ExecuteDecisionUseCase,
        model_store: ModelStore,
        training_config: TrainingConfig | None = None,
    ) -> None:
        self._registry = registry
        self._prices = price_repository
        self._outputs = output_repository
        self._decisions = decision_use_case
        self._store = model_store
        self._learning_rate = (training_config or TrainingConfig()).learning_rate

    async def execute(self, command: ProcessTickCommand) -> ProcessTickResult:
        """Run one online-loop step for a freshly arrived tick.

        Args:
            command: The symbol and its parsed price record.

        Returns:
            What was propagated, predicted, decided, and persisted.

        Raises:
            UnknownSymbolError: If the symbol has no registered model.
        """
        symbol = command.symbol
        model = self._registry.get(symbol)

        # The publisher stores the new tick before announcing it: skip it.
        recent = await asyncio.to_thread(self._prices.get_recent, symbol, 2, 1)

        propagated = None
        if len(recent) >= 2:
            prior, prior_to_prior = recent[0], recent[1]
            propagated = expected_output(prior_to_prior, prior)
            model.propagate(propagated, self._learning_rate)
        else:
            logger.info(
                "%s: %d stored price(s), not enough to propagate.", symbol, len(recent)
            )

        if not recent:
            logger.warning("%s: no previous price to compare against, skipping.", symbol)
            return ProcessTickResult(symbol=symbol, propagated=propagated)

        score = model.activate(build_input_item(recent[0], command.price))

        await asyncio.to_thread(
            self._outputs.save, NetworkOutput(symbol=symbol, result=score)
        )

        decision = await self._decisions.execute(symbol, score, command.price.last)

        persisted = True
        try:
            await asyncio.to_thread(self._store.save, symbol, model)
        except PersistenceError as exc:
            persisted = False
            logger.error(
                "%s: model snapshot not saved, continuing in memory: %s",
                symbol, exc.message,
            )

        return ProcessTickResult(
            symbol=symbol,
            propagated=propagated,
            score=score,
            decision=decision,
            persisted=persisted,
        )
