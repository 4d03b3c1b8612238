"""
Per-symbol tick dispatcher.

Each symbol gets its own asyncio.Queue and worker task. A worker awaits
the handler for one tick before taking the next, so the ticks of a symbol
run strictly in arrival order and never overlap, while different symbols
interleave at I/O suspension points.

A failing tick is logged and dropped; the worker keeps going.

Architecture:
    dispatch(cmd) ──▶ queue[cmd.symbol] ──▶ worker[cmd.symbol] ──▶ handler(cmd)
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable

from neurotrade.application.trading.dtos import ProcessTickCommand
from neurotrade.domain.trading.errors import TradingDomainError

logger = logging.getLogger(__name__)

TickHandler = Callable[[ProcessTickCommand], Awaitable[Any]]


class TickDispatcher:
    """Serializes tick processing per symbol.

    Usage:
        dispatcher = TickDispatcher(process_tick.execute)
        dispatcher.dispatch(ProcessTickCommand("ACME", price))
        ...
        await dispatcher.close()
    """

    def __init__(self, handler: TickHandler) -> None:
        self._handler = handler
        self._queues: dict[str, asyncio.Queue] = {}
        self._workers: dict[str, asyncio.Task] = {}
        self._closed = False
        self._stats = {
            "dispatched": 0,
            "processed": 0,
            "dropped": 0,
        }

    @property
    def stats(self) -> dict:
        return {**self._stats, "symbols": len(self._queues)}

    def pending(self, symbol: str) -> int:
        """Number of queued ticks for a symbol, excluding the one in flight."""
        queue = self._queues.get(symbol)
        return queue.qsize() if queue is not None else 0

    def dispatch(self, command: ProcessTickCommand) -> None:
        """Queue a tick behind any earlier tick of the same symbol.

        Must be called from within the running event loop.
        """
        if self._closed:
            raise RuntimeError("TickDispatcher is closed")

        queue = self._queues.get(command.symbol)
        if queue is None:
            queue = asyncio.Queue()
            self._queues[command.symbol] = queue
            self._workers[command.symbol] = asyncio.create_task(
                self._work(command.symbol, queue), name=f"ticks-{command.symbol}"
            )
        queue.put_nowait(command)
        self._stats["dispatched"] += 1

    async def drain(self) -> None:
        """Wait until every queued tick has been handled."""
        await asyncio.gather(*(queue.join() for queue in list(self._queues.values())))

    async def close(self) -> None:
        """Stop accepting ticks, finish queued ones, then stop the workers."""
        self._closed = True
        await self.drain()
        for task in self._workers.values():
            task.cancel()
        await asyncio.gather(*self._workers.values(), return_exceptions=True)
        self._workers.clear()
        self._queues.clear()
        logger.info(
            "TickDispatcher stopped: %d processed, %d dropped.",
            self._stats["processed"], self._stats["dropped"],
        )

    async def _work(self, symbol: str, queue: asyncio.Queue) -> None:
        while True:
            command = await queue.get()
            try:
                await self._handler(command)
                self._stats["processed"] += 1
            except TradingDomainError as exc:
                self._stats["dropped"] += 1
                logger.warning("%s: tick dropped: %s", symbol, exc.message)
            except Exception:
                self._stats["dropped"] += 1
                logger.exception("%s: tick processing failed.", symbol)
            finally:
                queue.task_done()
