"""
Domain service: feature encoding.

Turns price records into the binary vectors the models consume.
Every comparison is strictly greater-than; ties encode as 0.

Vector layout per compared pair: [open_up, high_up, low_up, last_up, volume_up]
"""

from typing import Sequence

from neurotrade.domain.trading.entities import PriceRecord, TrainingExample

FEATURE_FIELDS = ("open", "high", "low", "last", "volume")
INPUT_SIZE = len(FEATURE_FIELDS)


def build_input_item(past: PriceRecord, current: PriceRecord) -> tuple[int, ...]:
    """Return 1 for each field where ``current`` exceeds ``past``, else 0."""
    return tuple(
        1 if getattr(current, name) > getattr(past, name) else 0
        for name in FEATURE_FIELDS
    )


def build_window_input(
    window: Sequence[PriceRecord], past: PriceRecord
) -> tuple[int, ...]:
    """Concatenate ``build_input_item(past, w)`` for every record in the window."""
    vector: list[int] = []
    for current in window:
        vector.extend(build_input_item(past, current))
    return tuple(vector)


def build_window_output(
    window: Sequence[PriceRecord], past: PriceRecord
) -> tuple[float, ...]:
    """Return 1 for each record whose last price exceeds ``past.last``, else 0."""
    return tuple(1.0 if current.last > past.last else 0.0 for current in window)


def build_training_set(prices: Sequence[PriceRecord]) -> list[TrainingExample]:
    """Build examples from a sliding window of three consecutive records.

    For i in 1..n-3: past = prices[i-1], input from prices[i],
    output from prices[i+1]. Fewer than four records yield no examples.
    """
    examples: list[TrainingExample] = []
    for i in range(1, len(prices) - 2):
        past = prices[i - 1]
        examples.append(
            TrainingExample(
                input=build_window_input(prices[i:i + 1], past),
                expected_output=build_window_output(prices[i + 1:i + 2], past),
            )
        )
    return examples


def expected_output(prior_to_prior: PriceRecord, prior: PriceRecord) -> float:
    """Target for the previous prediction window.

    1 when the price went up, 0 when it went down, 0.5 when unchanged.
    """
    if prior_to_prior.last < prior.last:
        return 1.0
    if prior_to_prior.last > prior.last:
        return 0.0
    return 0.5
