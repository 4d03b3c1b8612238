"""
Adapter: Feed-forward perceptron model.

Implements the PredictiveModel port with a small PyTorch network:
5 inputs → 7 sigmoid hidden units → 1 sigmoid output, fully connected.

Training is online gradient descent, one example at a time, in the
order given. The output delta is (target - activation), i.e. the
cross-entropy gradient through the sigmoid, and the reported batch
error is the mean squared error of the pass.

Snapshots are JSON: topology, weights, and the activation trace
(the input of the last ``activate``) so that ``propagate`` after a
restart corrects the same prediction it would have corrected before.
"""

import json
import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np
import torch
import torch.nn as nn
import torch.nn.functional as F

from neurotrade.domain.trading.entities import (
    ModelState,
    TrainingConfig,
    TrainingExample,
    TrainingSummary,
)
from neurotrade.domain.trading.errors import EmptyInputError, ModelCorruptError
from neurotrade.domain.trading.ports import PredictiveModel

logger = logging.getLogger(__name__)

SNAPSHOT_FORMAT = "neurotrade.perceptron/1"
INIT_RANGE = 0.1


@dataclass(frozen=True)
class Topology:
    """Layer sizes of the perceptron."""

    input_size: int = 5
    hidden_size: int = 7
    output_size: int = 1

    def to_dict(self) -> dict:
        return {
            "input": self.input_size,
            "hidden": self.hidden_size,
            "output": self.output_size,
        }


class _PerceptronNetwork(nn.Module):
    """Two fully connected layers. ``forward`` returns output logits."""

    def __init__(self, topology: Topology) -> None:
        super().__init__()
        self.hidden = nn.Linear(topology.input_size, topology.hidden_size)
        self.output = nn.Linear(topology.hidden_size, topology.output_size)

    def forward(self, x):
        return self.output(torch.sigmoid(self.hidden(x)))


class PerceptronModel(PredictiveModel):
    """Per-symbol perceptron wrapped behind the PredictiveModel port."""

    def __init__(
        self,
        symbol: str,
        topology: Topology | None = None,
        seed: int | None = None,
    ) -> None:
        self.symbol = symbol
        self._topology = topology or Topology()
        self._network = _PerceptronNetwork(self._topology)
        self._init_weights(seed)
        self._state = ModelState.UNINITIALIZED
        self._last_input: torch.Tensor | None = None

    @property
    def state(self) -> ModelState:
        return self._state

    @property
    def topology(self) -> Topology:
        return self._topology

    # ------------------------------------------------------------------
    # Forward / backward
    # ------------------------------------------------------------------

    def activate(self, vector: Sequence[int]) -> float:
        x = self._to_input(vector)
        with torch.no_grad():
            score = torch.sigmoid(self._network(x)).item()
        self._last_input = x
        logger.info("%s ==> Activate %s result %.6f", self.symbol, list(vector), score)
        return score

    def propagate(self, expected: float, learning_rate: float = 0.1) -> None:
        if self._last_input is None:
            logger.warning(
                "%s ==> Propagate %.2f skipped: no previous activation.",
                self.symbol, expected,
            )
            return
        logger.info("%s ==> Propagate %.2f", self.symbol, expected)
        target = torch.full((self._topology.output_size,), float(expected))
        self._step(self._last_input, target, learning_rate)

    def train_batch(
        self, examples: Sequence[TrainingExample], config: TrainingConfig
    ) -> TrainingSummary:
        if not examples:
            raise EmptyInputError(self.symbol)

        inputs = torch.from_numpy(
            np.asarray([e.input for e in examples], dtype=np.float32)
        )
        targets = torch.from_numpy(
            np.asarray([e.expected_output for e in examples], dtype=np.float32)
        )
        if inputs.shape[1] != self._topology.input_size:
            raise ValueError(
                f"Expected {self._topology.input_size}-wide inputs, got {inputs.shape[1]}"
            )

        iterations = 0
        error = 1.0
        while iterations < config.max_iterations and error > config.error_threshold:
            iterations += 1
            squared = 0.0
            for x, target in zip(inputs, targets):
                output = self._step(x, target, config.learning_rate)
                squared += float(torch.mean((target - output) ** 2))
            error = squared / len(examples)

            if config.log_every and iterations % config.log_every == 0:
                logger.info(
                    "%s training: iterations %d error %.6f rate %s",
                    self.symbol, iterations, error, config.learning_rate,
                )

        self._last_input = inputs[-1]
        self._state = ModelState.TRAINED
        logger.info(
            "%s training complete with %d iterations (error %.6f)",
            self.symbol, iterations, error,
        )
        return TrainingSummary(iterations_run=iterations, error=error)

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def serialize(self) -> bytes:
        document = {
            "format": SNAPSHOT_FORMAT,
            "symbol": self.symbol,
            "topology": self._topology.to_dict(),
            "weights": {
                name: tensor.tolist()
                for name, tensor in self._network.state_dict().items()
            },
            "last_input": (
                self._last_input.tolist() if self._last_input is not None else None
            ),
        }
        return json.dumps(document).encode("utf-8")

    def deserialize(self, blob: bytes) -> None:
        try:
            document = json.loads(blob)
        except (UnicodeDecodeError, ValueError, TypeError) as exc:
            raise ModelCorruptError(self.symbol, f"not JSON ({exc})") from exc

        if not isinstance(document, dict) or document.get("format") != SNAPSHOT_FORMAT:
            raise ModelCorruptError(self.symbol, "unknown snapshot format")
        if document.get("topology") != self._topology.to_dict():
            raise ModelCorruptError(
                self.symbol, f"topology mismatch: {document.get('topology')}"
            )

        staged = _PerceptronNetwork(self._topology)
        expected = staged.state_dict()
        try:
            weights = {
                name: torch.tensor(document["weights"][name], dtype=torch.float32)
                for name in expected
            }
            for name, tensor in weights.items():
                if tensor.shape != expected[name].shape:
                    raise ValueError(f"{name} has shape {tuple(tensor.shape)}")
            staged.load_state_dict(weights, strict=True)

            last_input = document.get("last_input")
            trace = None
            if last_input is not None:
                trace = torch.tensor(last_input, dtype=torch.float32)
                if trace.shape != (self._topology.input_size,):
                    raise ValueError("activation trace has the wrong width")
        except (KeyError, TypeError, ValueError, RuntimeError) as exc:
            raise ModelCorruptError(self.symbol, str(exc)) from exc

        self._network = staged
        self._last_input = trace
        self._state = ModelState.TRAINED

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _init_weights(self, seed: int | None) -> None:
        """Uniform weights and biases in [-0.1, 0.1]."""
        generator = torch.Generator()
        if seed is None:
            generator.seed()
        else:
            generator.manual_seed(seed)
        with torch.no_grad():
            for param in self._network.parameters():
                param.uniform_(-INIT_RANGE, INIT_RANGE, generator=generator)

    def _to_input(self, vector: Sequence[int]) -> torch.Tensor:
        if len(vector) != self._topology.input_size:
            raise ValueError(
                f"Expected a {self._topology.input_size}-wide vector, got {len(vector)}"
            )
        return torch.tensor([float(v) for v in vector], dtype=torch.float32)

    def _step(
        self, x: torch.Tensor, target: torch.Tensor, learning_rate: float
    ) -> torch.Tensor:
        """One gradient step on a single example. Returns the pre-update output."""
        self._network.zero_grad()
        logits = self._network(x)
        loss = F.binary_cross_entropy_with_logits(logits, target, reduction="sum")
        loss.backward()
        with torch.no_grad():
            for param in self._network.parameters():
                param -= learning_rate * param.grad
        return torch.sigmoid(logits.detach())
