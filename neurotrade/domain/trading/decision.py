"""
Domain service: threshold-band decisions.

Maps a prediction score to RAISE / FALL / STABLE. Both bounds are
exclusive: a score exactly on a threshold is STABLE.
"""

from neurotrade.domain.trading.entities import Decision

# TODO: read the bands from Settings once per-symbol tuning is needed.
RAISE_THRESHOLD = 0.7
FALL_THRESHOLD = 0.3


def decide(score: float) -> Decision:
    """Return the decision for a prediction score."""
    if score > RAISE_THRESHOLD:
        return Decision.RAISE
    if score < FALL_THRESHOLD:
        return Decision.FALL
    return Decision.STABLE
