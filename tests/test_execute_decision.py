"""
Tests for ExecuteDecisionUseCase.

The order repository is mocked; one scenario runs against SQLite.
"""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from neurotrade.application.trading.execute_decision import ExecuteDecisionUseCase
from neurotrade.domain.trading.entities import Decision, Order, OrderType
from neurotrade.infrastructure.trading.order_repository import OrderRepositoryAdapter


def _open_buy(amount):
    return Order(
        symbol="ACME",
        amount=amount,
        value=Decimal(amount) * Decimal("8"),
        type=OrderType.BUY,
        is_active=True,
    )


class TestExecuteDecision:
    @pytest.fixture
    def repo(self):
        repo = MagicMock()
        repo.find_open_buys.return_value = []
        return repo

    @pytest.mark.asyncio
    async def test_raise_buys_ten_units(self, repo):
        decision = await ExecuteDecisionUseCase(repo).execute("ACME", 0.82, Decimal("12.5"))

        assert decision is Decision.RAISE
        (order,), _ = repo.save.call_args
        assert order.symbol == "ACME"
        assert order.type is OrderType.BUY
        assert order.amount == 10
        assert order.value == Decimal("125.0")
        assert order.is_active is True
        repo.close_positions.assert_not_called()

    @pytest.mark.asyncio
    async def test_buy_amount_is_configurable(self, repo):
        await ExecuteDecisionUseCase(repo, buy_amount=3).execute("ACME", 0.9, Decimal("2"))
        (order,), _ = repo.save.call_args
        assert order.amount == 3
        assert order.value == Decimal("6")

    @pytest.mark.asyncio
    async def test_fall_closes_every_open_buy(self, repo):
        buys = [_open_buy(5), _open_buy(3)]
        repo.find_open_buys.return_value = buys

        decision = await ExecuteDecisionUseCase(repo).execute("ACME", 0.12, Decimal("9.8"))

        assert decision is Decision.FALL
        repo.find_open_buys.assert_called_once_with("ACME")
        (closed, sells), _ = repo.close_positions.call_args
        assert [o.id for o in closed] == [b.id for b in buys]
        assert all(o.is_active is False for o in closed)
        assert [(s.type, s.amount, s.value, s.is_active) for s in sells] == [
            (OrderType.SELL, 5, Decimal("49.0"), False),
            (OrderType.SELL, 3, Decimal("29.4"), False),
        ]
        repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_fall_without_positions_places_nothing(self, repo):
        decision = await ExecuteDecisionUseCase(repo).execute("ACME", 0.1, Decimal("9"))

        assert decision is Decision.FALL
        repo.close_positions.assert_not_called()
        repo.save.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("score", [0.5, 0.7, 0.3])
    async def test_stable_places_nothing(self, repo, score):
        decision = await ExecuteDecisionUseCase(repo).execute("ACME", score, Decimal("9"))

        assert decision is Decision.STABLE
        repo.save.assert_not_called()
        repo.find_open_buys.assert_not_called()
        repo.close_positions.assert_not_called()


class TestSellAgainstDatabase:
    @pytest.mark.asyncio
    async def test_fall_scenario(self, engine):
        repo = OrderRepositoryAdapter(engine)
        for amount in (5, 3):
            repo.save(_open_buy(amount))

        sells = await ExecuteDecisionUseCase(repo).sell("ACME", Decimal("9.8"))

        assert sorted(s.amount for s in sells) == [3, 5]
        assert repo.find_open_buys("ACME") == []

    @pytest.mark.asyncio
    async def test_second_fall_finds_nothing(self, engine):
        repo = OrderRepositoryAdapter(engine)
        repo.save(_open_buy(5))
        use_case = ExecuteDecisionUseCase(repo)

        assert len(await use_case.sell("ACME", Decimal("9"))) == 1
        assert await use_case.sell("ACME", Decimal("9")) == []
