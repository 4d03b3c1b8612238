"""
Use case: Prepare every known symbol before live ticks are consumed.

Input: none (symbols come from the StockRepository)
Output: BootstrapReport
Side effects: one model per symbol registered, snapshots written for
              symbols that needed training.
Failure cases: none raised per symbol; a symbol that cannot be prepared
               is reported as "failed" and the others still proceed.

Symbols are processed one after the other, never concurrently, to bound
memory and avoid contention on the store.
"""

import asyncio
import logging

from neurotrade.application.trading.dtos import BootstrapReport, ColdStartResult
from neurotrade.application.trading.prepare_model import PrepareModelUseCase
from neurotrade.domain.trading.ports import StockRepository

logger = logging.getLogger(__name__)


class BootstrapModelsUseCase:
    """Sequential, per-symbol isolated bootstrap."""

    def __init__(
        self,
        stock_repository: StockRepository,
        prepare_model: PrepareModelUseCase,
    ) -> None:
        self._stocks = stock_repository
        self._prepare = prepare_model

    async def execute(self) -> BootstrapReport:
        symbols = await asyncio.to_thread(self._stocks.list_symbols)
        logger.info("Bootstrapping %d symbol(s).", len(symbols))

        results: list[ColdStartResult] = []
        for symbol in symbols:
            try:
                result = await self._prepare.execute(symbol)
            except Exception as exc:
                logger.exception("%s: bootstrap failed.", symbol)
                result = ColdStartResult(symbol=symbol, source="failed", error=str(exc))
            results.append(result)

        report = BootstrapReport(results=results)
        logger.info(
            "Bootstrap complete: %d restored, %d trained, %d untrained, %d failed.",
            report.count("snapshot"),
            report.count("trained"),
            report.count("untrained"),
            report.count("failed"),
        )
        return report
