"""
CLI entry point.

Usage:
    # Bootstrap every symbol, then trade on live ticks
    python -m neurotrade run

    # Only warm the model snapshots
    python -m neurotrade bootstrap

    # Retrain one symbol from its full history, ignoring its snapshot
    python -m neurotrade train --symbol ACME

    # Score the latest stored prices without placing orders
    python -m neurotrade predict --symbol ACME

    # Push one tick on the feed
    python -m neurotrade publish --symbol ACME --open 10 --high 11 --low 9.5 --last 10.5 --volume 1200

    # Create missing tables
    python -m neurotrade init-db
"""

import argparse
import asyncio
import logging
import signal
import sys
from decimal import Decimal

from neurotrade.core.config import settings
from neurotrade.shared.logging import configure_logging

logger = logging.getLogger(__name__)


def cmd_init_db(args: argparse.Namespace) -> None:
    """Create missing tables and register symbols."""
    from neurotrade.infrastructure.trading.stock_repository import StockRepositoryAdapter
    from neurotrade.infrastructure.trading.tables import create_schema
    from neurotrade.interfaces.dependencies import get_db_engine

    engine = get_db_engine()
    create_schema(engine)

    stocks = StockRepositoryAdapter(engine)
    known = set(stocks.list_symbols())
    for symbol in args.symbols or []:
        if symbol not in known:
            stocks.add(symbol)
            logger.info("Registered symbol %s.", symbol)


def cmd_bootstrap(args: argparse.Namespace) -> None:
    """Restore or train a model for every known symbol."""
    from neurotrade.application.trading.model_registry import ModelRegistry
    from neurotrade.interfaces.dependencies import (
        get_bootstrap_use_case,
        get_db_engine,
        get_model_factory,
    )

    engine = get_db_engine()
    registry = ModelRegistry(get_model_factory())
    report = asyncio.run(get_bootstrap_use_case(engine, registry).execute())
    for result in report.results:
        logger.info("%s: %s", result.symbol, result.source)
    if report.count("failed"):
        sys.exit(1)


def cmd_train(args: argparse.Namespace) -> None:
    """Force a cold-start retrain of a single symbol."""
    from neurotrade.application.trading.model_registry import ModelRegistry
    from neurotrade.interfaces.dependencies import (
        get_db_engine,
        get_model_factory,
        get_prepare_model_use_case,
    )

    engine = get_db_engine()
    registry = ModelRegistry(get_model_factory())
    registry.create(args.symbol)
    result = asyncio.run(
        get_prepare_model_use_case(engine, registry).retrain(args.symbol)
    )

    if result.summary is None:
        logger.error("Not enough price history to train %s.", args.symbol)
        sys.exit(1)
    logger.info(
        "%s trained: %d iterations, error %.6f",
        args.symbol, result.summary.iterations_run, result.summary.error,
    )


def cmd_predict(args: argparse.Namespace) -> None:
    """Score the latest stored prices of a symbol."""
    from neurotrade.domain.trading.errors import TradingDomainError
    from neurotrade.interfaces.dependencies import get_db_engine, get_score_latest_use_case

    use_case = get_score_latest_use_case(get_db_engine())
    try:
        result = use_case.execute(args.symbol)
    except (TradingDomainError, ValueError) as exc:
        logger.error("Cannot score %s: %s", args.symbol, exc)
        sys.exit(1)

    logger.info(
        "%s | score=%.6f | decision=%s",
        result.symbol, result.score, result.decision.value,
    )


def cmd_publish(args: argparse.Namespace) -> None:
    """Store one price tick, then announce it on the feed.

    The online loop reads the stored history and skips the newest row,
    so the tick must be in the prices table before it is published.
    """
    from neurotrade.domain.trading.entities import PriceRecord
    from neurotrade.infrastructure.trading.price_repository import PriceRepositoryAdapter
    from neurotrade.interfaces.dependencies import get_db_engine, get_price_feed

    record = PriceRecord(
        symbol=args.symbol,
        open=Decimal(args.open),
        high=Decimal(args.high),
        low=Decimal(args.low),
        last=Decimal(args.last),
        volume=args.volume,
    )
    PriceRepositoryAdapter(get_db_engine()).save(record)
    asyncio.run(get_price_feed().publish(args.symbol, record))


def cmd_run(args: argparse.Namespace) -> None:
    """Bootstrap, then consume the price feed until interrupted."""
    asyncio.run(_serve())


async def _serve() -> None:
    from neurotrade.application.trading.model_registry import ModelRegistry
    from neurotrade.infrastructure.trading.tables import create_schema
    from neurotrade.interfaces.dependencies import (
        get_bootstrap_use_case,
        get_db_engine,
        get_model_factory,
        get_price_feed,
        get_process_tick_use_case,
    )
    from neurotrade.interfaces.feed import FeedSubscriber, TickDispatcher

    engine = get_db_engine()
    await asyncio.to_thread(create_schema, engine)

    registry = ModelRegistry(get_model_factory())
    await get_bootstrap_use_case(engine, registry).execute()

    dispatcher = TickDispatcher(get_process_tick_use_case(engine, registry).execute)
    subscriber = FeedSubscriber(get_price_feed(), dispatcher, settings.feed_topic)

    task = asyncio.create_task(subscriber.run(), name="price-feed")
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, task.cancel)
        except NotImplementedError:
            pass

    try:
        await task
    except asyncio.CancelledError:
        logger.info("Shutting down.")
    finally:
        await dispatcher.close()
        registry.clear()
        engine.dispose()


def main() -> None:
    configure_logging(level=settings.log_level)

    parser = argparse.ArgumentParser(
        description=f"{settings.project_name} online trading loop CLI"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Bootstrap models and trade on live ticks")
    run_parser.set_defaults(func=cmd_run)

    boot_parser = subparsers.add_parser("bootstrap", help="Restore or train every symbol's model")
    boot_parser.set_defaults(func=cmd_bootstrap)

    train_parser = subparsers.add_parser("train", help="Retrain one symbol from its history")
    train_parser.add_argument("--symbol", required=True, help="Ticker symbol")
    train_parser.set_defaults(func=cmd_train)

    predict_parser = subparsers.add_parser("predict", help="Score the latest stored prices")
    predict_parser.add_argument("--symbol", required=True, help="Ticker symbol")
    predict_parser.set_defaults(func=cmd_predict)

    publish_parser = subparsers.add_parser("publish", help="Publish one price tick")
    publish_parser.add_argument("--symbol", required=True, help="Ticker symbol")
    for name in ("open", "high", "low", "last"):
        publish_parser.add_argument(f"--{name}", required=True, help=f"{name} price")
    publish_parser.add_argument("--volume", type=int, required=True, help="Traded volume")
    publish_parser.set_defaults(func=cmd_publish)

    db_parser = subparsers.add_parser("init-db", help="Create missing tables")
    db_parser.add_argument(
        "--symbols", nargs="*", default=None,
        help="Symbols to register in the stocks table",
    )
    db_parser.set_defaults(func=cmd_init_db)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
