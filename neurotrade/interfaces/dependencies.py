"""
Dependency wiring for the trading bounded context.

Builds infrastructure adapters and injects them into use cases via
constructor injection. This is the composition root of the application.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from neurotrade.application.trading.bootstrap_models import BootstrapModelsUseCase
from neurotrade.application.trading.execute_decision import ExecuteDecisionUseCase
from neurotrade.application.trading.model_registry import ModelFactory, ModelRegistry
from neurotrade.application.trading.prepare_model import PrepareModelUseCase
from neurotrade.application.trading.process_tick import ProcessTickUseCase
from neurotrade.application.trading.score_latest import ScoreLatestUseCase
from neurotrade.core.config import Settings, settings
from neurotrade.infrastructure.trading.file_model_store import FileModelStore
from neurotrade.infrastructure.trading.network_output_repository import (
    NetworkOutputRepositoryAdapter,
)
from neurotrade.infrastructure.trading.order_repository import OrderRepositoryAdapter
from neurotrade.infrastructure.trading.perceptron_adapter import PerceptronModel
from neurotrade.infrastructure.trading.price_repository import PriceRepositoryAdapter
from neurotrade.infrastructure.trading.redis_price_feed import RedisPriceFeed
from neurotrade.infrastructure.trading.stock_repository import StockRepositoryAdapter


def get_db_engine(cfg: Settings = settings) -> Engine:
    """Build a SQLAlchemy engine from application settings."""
    return create_engine(cfg.database_url, pool_pre_ping=True)


def get_model_factory(cfg: Settings = settings) -> ModelFactory:
    """Return a factory building one perceptron per symbol."""

    def factory(symbol: str) -> PerceptronModel:
        return PerceptronModel(symbol, seed=cfg.model_seed)

    return factory


def get_model_store(cfg: Settings = settings) -> FileModelStore:
    return FileModelStore(cfg.ann_base_path)


def get_price_feed(cfg: Settings = settings) -> RedisPriceFeed:
    return RedisPriceFeed(redis_url=cfg.redis_url, topic=cfg.feed_topic)


def get_prepare_model_use_case(
    engine: Engine, registry: ModelRegistry, cfg: Settings = settings
) -> PrepareModelUseCase:
    """Build PrepareModelUseCase with its infrastructure dependencies."""
    return PrepareModelUseCase(
        registry=registry,
        model_store=get_model_store(cfg),
        price_repository=PriceRepositoryAdapter(engine),
    )


def get_bootstrap_use_case(
    engine: Engine, registry: ModelRegistry, cfg: Settings = settings
) -> BootstrapModelsUseCase:
    """Build BootstrapModelsUseCase with its infrastructure dependencies."""
    return BootstrapModelsUseCase(
        stock_repository=StockRepositoryAdapter(engine),
        prepare_model=get_prepare_model_use_case(engine, registry, cfg),
    )


def get_process_tick_use_case(
    engine: Engine, registry: ModelRegistry, cfg: Settings = settings
) -> ProcessTickUseCase:
    """Build ProcessTickUseCase with its infrastructure dependencies."""
    return ProcessTickUseCase(
        registry=registry,
        price_repository=PriceRepositoryAdapter(engine),
        output_repository=NetworkOutputRepositoryAdapter(engine),
        decision_use_case=ExecuteDecisionUseCase(
            order_repository=OrderRepositoryAdapter(engine),
            buy_amount=cfg.buy_amount,
        ),
        model_store=get_model_store(cfg),
    )


def get_score_latest_use_case(engine: Engine, cfg: Settings = settings) -> ScoreLatestUseCase:
    """Build ScoreLatestUseCase with its infrastructure dependencies."""
    return ScoreLatestUseCase(
        model_factory=get_model_factory(cfg),
        model_store=get_model_store(cfg),
        price_repository=PriceRepositoryAdapter(engine),
    )
