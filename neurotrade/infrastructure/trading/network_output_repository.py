"""
Adapter: Network output repository.

Implements NetworkOutputRepository port.
Appends prediction scores to the ``network_outputs`` audit table.
"""

from sqlalchemy import insert
from sqlalchemy.engine import Engine

from neurotrade.domain.trading.entities import NetworkOutput
from neurotrade.domain.trading.ports import NetworkOutputRepository
from neurotrade.infrastructure.trading.tables import network_outputs


class NetworkOutputRepositoryAdapter(NetworkOutputRepository):
    """Concrete adapter for the prediction audit trail."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def save(self, output: NetworkOutput) -> None:
        with self._engine.begin() as conn:
            conn.execute(
                insert(network_outputs).values(
                    symbol=output.symbol,
                    result=output.result,
                    created_at=output.timestamp,
                )
            )
