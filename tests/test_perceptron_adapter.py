"""
Tests for the PyTorch perceptron adapter.

Small, seeded networks only. No filesystem access.
"""

import json

import pytest

from neurotrade.domain.trading.entities import ModelState, TrainingConfig, TrainingExample
from neurotrade.domain.trading.errors import EmptyInputError, ModelCorruptError
from neurotrade.infrastructure.trading.perceptron_adapter import (
    INIT_RANGE,
    SNAPSHOT_FORMAT,
    PerceptronModel,
    Topology,
)

UP = (1, 1, 1, 1, 1)
DOWN = (0, 0, 0, 0, 0)


def _model(seed=1):
    return PerceptronModel("ACME", seed=seed)


class TestConstruction:
    def test_fresh_model_is_uninitialized(self):
        assert _model().state is ModelState.UNINITIALIZED

    def test_default_topology(self):
        model = _model()
        assert model.topology == Topology(5, 7, 1)
        assert json.loads(model.serialize())["topology"] == {
            "input": 5, "hidden": 7, "output": 1,
        }

    def test_initial_weights_within_range(self):
        weights = json.loads(_model().serialize())["weights"]
        flat = []
        for values in weights.values():
            for item in values:
                flat.extend(item if isinstance(item, list) else [item])
        assert flat
        assert all(-INIT_RANGE <= w <= INIT_RANGE for w in flat)

    def test_same_seed_gives_same_weights(self):
        assert _model(3).serialize() == _model(3).serialize()


class TestActivate:
    def test_score_is_a_probability(self):
        score = _model().activate(UP)
        assert 0.0 <= score <= 1.0

    def test_activate_does_not_learn(self):
        model = _model()
        assert model.activate(UP) == model.activate(UP)

    def test_wrong_width_is_rejected(self):
        with pytest.raises(ValueError):
            _model().activate((1, 0, 1))

    def test_activation_trace_is_kept(self):
        model = _model()
        assert json.loads(model.serialize())["last_input"] is None
        model.activate((1, 0, 1, 0, 1))
        assert json.loads(model.serialize())["last_input"] == [1.0, 0.0, 1.0, 0.0, 1.0]


class TestPropagate:
    def test_without_activation_is_a_no_op(self):
        model = _model()
        before = model.serialize()
        model.propagate(1.0)
        assert model.serialize() == before

    def test_moves_score_towards_one(self):
        model = _model()
        before = model.activate(UP)
        model.propagate(1.0, 0.1)
        assert model.activate(UP) > before

    def test_moves_score_towards_zero(self):
        model = _model()
        before = model.activate(UP)
        model.propagate(0.0, 0.1)
        assert model.activate(UP) < before

    def test_corrects_the_last_activation(self):
        model = _model()
        model.activate(UP)
        before = model.activate(DOWN)
        model.propagate(0.0, 0.1)
        assert model.activate(DOWN) < before


class TestTrainBatch:
    def test_empty_input_raises(self):
        with pytest.raises(EmptyInputError):
            _model().train_batch([], TrainingConfig())

    def test_wrong_width_raises(self):
        examples = [TrainingExample(input=(1, 0), expected_output=(1.0,))]
        with pytest.raises(ValueError):
            _model().train_batch(examples, TrainingConfig())

    def test_stops_at_max_iterations(self):
        examples = [
            TrainingExample(input=UP, expected_output=(1.0,)),
            TrainingExample(input=DOWN, expected_output=(0.0,)),
        ]
        summary = _model().train_batch(
            examples, TrainingConfig(max_iterations=30, error_threshold=0.0)
        )
        assert summary.iterations_run == 30

    def test_stops_when_error_below_threshold(self):
        examples = [TrainingExample(input=UP, expected_output=(0.5,))]
        summary = _model().train_batch(
            examples, TrainingConfig(max_iterations=100, error_threshold=0.5)
        )
        assert summary.iterations_run == 1
        assert summary.error <= 0.5

    def test_marks_model_trained(self):
        model = _model()
        model.train_batch(
            [TrainingExample(input=UP, expected_output=(1.0,))],
            TrainingConfig(max_iterations=2),
        )
        assert model.state is ModelState.TRAINED

    def test_learns_a_separable_pattern(self):
        model = _model()
        examples = [
            TrainingExample(input=UP, expected_output=(1.0,)),
            TrainingExample(input=DOWN, expected_output=(0.0,)),
        ]
        summary = model.train_batch(
            examples, TrainingConfig(max_iterations=3000, error_threshold=0.005, log_every=0)
        )
        assert model.activate(UP) > 0.5 > model.activate(DOWN)
        assert summary.error < 0.25


class TestSnapshot:
    def test_round_trip_reproduces_scores(self):
        source = _model(7)
        source.activate(UP)
        restored = _model(99)
        restored.deserialize(source.serialize())

        for vector in (UP, DOWN, (1, 0, 1, 0, 1)):
            assert restored.activate(vector) == source.activate(vector)
        assert restored.state is ModelState.TRAINED

    def test_round_trip_carries_activation_trace(self):
        source = _model(7)
        source.activate((0, 1, 1, 0, 1))
        restored = _model(99)
        restored.deserialize(source.serialize())

        source.propagate(1.0)
        restored.propagate(1.0)
        assert restored.serialize() == source.serialize()

    def test_format_tag(self):
        assert json.loads(_model().serialize())["format"] == SNAPSHOT_FORMAT

    @pytest.mark.parametrize(
        "blob",
        [b"", b"not json", b"\xff\xfe", b"[]", b'{"format": "other"}'],
    )
    def test_garbage_is_corrupt(self, blob):
        model = _model()
        before = model.serialize()
        with pytest.raises(ModelCorruptError):
            model.deserialize(blob)
        assert model.serialize() == before
        assert model.state is ModelState.UNINITIALIZED

    def test_topology_mismatch_is_corrupt(self):
        other = PerceptronModel("ACME", topology=Topology(5, 3, 1), seed=1)
        with pytest.raises(ModelCorruptError):
            _model().deserialize(other.serialize())

    def test_bad_weight_shape_is_corrupt(self):
        document = json.loads(_model().serialize())
        document["weights"]["hidden.weight"] = [[0.0, 0.0]]
        with pytest.raises(ModelCorruptError):
            _model().deserialize(json.dumps(document).encode())

    def test_missing_weights_are_corrupt(self):
        document = json.loads(_model().serialize())
        del document["weights"]["output.bias"]
        with pytest.raises(ModelCorruptError):
            _model().deserialize(json.dumps(document).encode())

    def test_bad_trace_width_is_corrupt(self):
        document = json.loads(_model().serialize())
        document["last_input"] = [1.0, 0.0]
        with pytest.raises(ModelCorruptError):
            _model().deserialize(json.dumps(document).encode())
