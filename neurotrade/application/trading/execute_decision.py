"""
Use case: Turn a prediction score into a trading action.

Input: symbol, prediction score, latest observed price
Output: Decision
Side effects:
    RAISE:  one BUY order of ``buy_amount`` units at the latest price.
    FALL:   every open BUY of the symbol is closed by a matching SELL
            at the latest price, all in one transaction.
    STABLE: none.
"""

import asyncio
import logging
from dataclasses import replace
from decimal import Decimal

from neurotrade.domain.trading.decision import decide
from neurotrade.domain.trading.entities import Decision, Order, OrderType
from neurotrade.domain.trading.ports import OrderRepository

logger = logging.getLogger(__name__)

DEFAULT_BUY_AMOUNT = 10


class ExecuteDecisionUseCase:
    """Applies the threshold bands and places the resulting orders."""

    def __init__(
        self,
        order_repository: OrderRepository,
        buy_amount: int = DEFAULT_BUY_AMOUNT,
    ) -> None:
        self._orders = order_repository
        self._buy_amount = buy_amount

    async def execute(self, symbol: str, score: float, price: Decimal) -> Decision:
        """Decide on ``score`` and await the order side effect.

        Args:
            symbol: Stock ticker symbol.
            score: Prediction score in [0, 1].
            price: Latest observed unit price.

        Returns:
            The decision taken.
        """
        decision = decide(score)

        if decision is Decision.RAISE:
            logger.info("%s: predicts this stock raises (score %.4f)", symbol, score)
            await self.buy(symbol, price)
        elif decision is Decision.FALL:
            logger.info("%s: predicts this stock falls (score %.4f)", symbol, score)
            await self.sell(symbol, price)
        else:
            logger.info("%s: predicts this stock is stable (score %.4f)", symbol, score)

        return decision

    async def buy(self, symbol: str, price: Decimal) -> Order:
        """Store a BUY order of ``buy_amount`` units."""
        logger.info("BUY %s for %s each", symbol, price)
        order = Order(
            symbol=symbol,
            amount=self._buy_amount,
            value=Decimal(self._buy_amount) * price,
            type=OrderType.BUY,
            is_active=True,
        )
        await asyncio.to_thread(self._orders.save, order)
        return order

    async def sell(self, symbol: str, price: Decimal) -> list[Order]:
        """Close every open BUY of a symbol with a SELL of the same amount."""
        open_buys = await asyncio.to_thread(self._orders.find_open_buys, symbol)
        if not open_buys:
            logger.info("%s: no open positions to close.", symbol)
            return []

        sells = []
        for buy in open_buys:
            logger.info("SELL %s x%d for %s each", symbol, buy.amount, price)
            sells.append(
                Order(
                    symbol=buy.symbol,
                    amount=buy.amount,
                    value=Decimal(buy.amount) * price,
                    type=OrderType.SELL,
                    is_active=False,
                )
            )
        closed = [replace(buy, is_active=False) for buy in open_buys]

        await asyncio.to_thread(self._orders.close_positions, closed, sells)
        return sells
