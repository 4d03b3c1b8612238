"""
Adapter: File-backed model store.

Implements the ModelStore port. One JSON snapshot per symbol,
``<base_path>/ann-<SYMBOL>.json``, overwritten after every tick.

Writes go to a sibling temp file that is then renamed over the
snapshot, so a crash mid-write never leaves a truncated file behind.
"""

import logging
import os
from contextlib import suppress
from pathlib import Path

from neurotrade.domain.trading.errors import (
    ModelNotFoundError,
    PersistenceError,
)
from neurotrade.domain.trading.ports import ModelStore, PredictiveModel

logger = logging.getLogger(__name__)


class FileModelStore(ModelStore):
    """Stores serialized models on the local filesystem."""

    def __init__(self, base_path: str | Path = ".") -> None:
        self._base_path = Path(base_path)

    def path_for(self, symbol: str) -> Path:
        """Return the snapshot location of a symbol."""
        return self._base_path / f"ann-{symbol}.json"

    def save(self, symbol: str, model: PredictiveModel) -> None:
        """Write ``model.serialize()`` to the symbol's snapshot.

        Raises:
            PersistenceError: On any filesystem failure.
        """
        path = self.path_for(symbol)
        tmp_path = path.with_name(path.name + ".tmp")
        logger.info("Writing ANN into %s", path)

        data = model.serialize()
        try:
            self._base_path.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(data)
            os.replace(tmp_path, path)
        except OSError as exc:
            logger.error("Failed to write file %s: %s", path, exc)
            with suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise PersistenceError(symbol, str(path), str(exc)) from exc

    def load(self, symbol: str, model: PredictiveModel) -> PredictiveModel:
        """Restore ``model`` from the symbol's snapshot.

        Raises:
            ModelNotFoundError: If the snapshot does not exist.
            PersistenceError: If the snapshot exists but cannot be read.
            ModelCorruptError: If the snapshot content is unusable.
        """
        path = self.path_for(symbol)
        logger.info("Reading ANN from %s", path)

        try:
            data = path.read_bytes()
        except FileNotFoundError as exc:
            logger.warning("No snapshot at %s", path)
            raise ModelNotFoundError(symbol, str(path)) from exc
        except OSError as exc:
            logger.error("Failed to read file %s: %s", path, exc)
            raise PersistenceError(symbol, str(path), str(exc)) from exc

        model.deserialize(data)
        return model
