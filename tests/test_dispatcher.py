"""
Tests for the per-symbol TickDispatcher.
"""

import asyncio
from collections import defaultdict

import pytest

from neurotrade.application.trading.dtos import ProcessTickCommand
from neurotrade.domain.trading.errors import UnknownSymbolError
from neurotrade.interfaces.feed.dispatcher import TickDispatcher


def _cmd(symbol, last, make_price):
    return ProcessTickCommand(symbol=symbol, price=make_price(last, symbol=symbol))


class TestTickDispatcher:
    @pytest.mark.asyncio
    async def test_same_symbol_runs_in_order_without_overlap(self, make_price):
        seen = defaultdict(list)
        in_flight = defaultdict(int)
        max_in_flight = defaultdict(int)

        async def handler(cmd):
            in_flight[cmd.symbol] += 1
            max_in_flight[cmd.symbol] = max(max_in_flight[cmd.symbol], in_flight[cmd.symbol])
            await asyncio.sleep(0)
            await asyncio.sleep(0)
            seen[cmd.symbol].append(int(cmd.price.last))
            in_flight[cmd.symbol] -= 1

        dispatcher = TickDispatcher(handler)
        for i in range(10):
            dispatcher.dispatch(_cmd("ACME", i, make_price))
            dispatcher.dispatch(_cmd("IBM", 100 + i, make_price))
        await dispatcher.drain()

        assert seen["ACME"] == list(range(10))
        assert seen["IBM"] == list(range(100, 110))
        assert max_in_flight == {"ACME": 1, "IBM": 1}
        await dispatcher.close()

    @pytest.mark.asyncio
    async def test_symbols_interleave(self, make_price):
        order = []
        release = asyncio.Event()

        async def handler(cmd):
            if cmd.symbol == "SLOW":
                await release.wait()
            order.append(cmd.symbol)
            if cmd.symbol == "FAST":
                release.set()

        dispatcher = TickDispatcher(handler)
        dispatcher.dispatch(_cmd("SLOW", 1, make_price))
        dispatcher.dispatch(_cmd("FAST", 1, make_price))
        await asyncio.wait_for(dispatcher.drain(), timeout=5)

        assert order == ["FAST", "SLOW"]
        await dispatcher.close()

    @pytest.mark.asyncio
    async def test_failing_tick_does_not_stop_worker(self, make_price):
        handled = []

        async def handler(cmd):
            if cmd.price.last == 1:
                raise UnknownSymbolError(cmd.symbol)
            if cmd.price.last == 2:
                raise RuntimeError("boom")
            handled.append(int(cmd.price.last))

        dispatcher = TickDispatcher(handler)
        for last in (1, 2, 3):
            dispatcher.dispatch(_cmd("ACME", last, make_price))
        await dispatcher.drain()

        assert handled == [3]
        assert dispatcher.stats == {
            "dispatched": 3, "processed": 1, "dropped": 2, "symbols": 1,
        }
        await dispatcher.close()

    @pytest.mark.asyncio
    async def test_close_finishes_queued_ticks(self, make_price):
        handled = []

        async def handler(cmd):
            await asyncio.sleep(0)
            handled.append(int(cmd.price.last))

        dispatcher = TickDispatcher(handler)
        for last in range(5):
            dispatcher.dispatch(_cmd("ACME", last, make_price))
        assert dispatcher.pending("ACME") == 5

        await dispatcher.close()

        assert handled == [0, 1, 2, 3, 4]
        assert dispatcher.pending("ACME") == 0

    @pytest.mark.asyncio
    async def test_dispatch_after_close(self, make_price):
        async def handler(cmd):
            return None

        dispatcher = TickDispatcher(handler)
        await dispatcher.close()

        with pytest.raises(RuntimeError):
            dispatcher.dispatch(_cmd("ACME", 1, make_price))
