"""Perceptual stroke weights for the rendered flow subset.

Weights are normalized in the log domain against the records passed in,
not against the whole dataset, so they change whenever the subset does.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence

from ..domain.models import FlowRecord

MIN_WEIGHT = 0.8
MAX_WEIGHT = 14.0
EMPHASIS_EXPONENT = 1.15
LOG_SPAN_EPSILON = 1e-6


@dataclass(frozen=True, slots=True)
class WeightScale:
    """Output range and curve of the weight mapping."""

    min_weight: float = MIN_WEIGHT
    max_weight: float = MAX_WEIGHT
    exponent: float = EMPHASIS_EXPONENT
    epsilon: float = LOG_SPAN_EPSILON

    def weight(self, log_value: float, min_log: float, max_log: float) -> float:
        """Map one log magnitude into ``[min_weight, max_weight]``."""
        t = (log_value - min_log) / (max_log - min_log)
        t2 = min(1.0, max(0.0, t)) ** self.exponent
        return self.min_weight + t2 * (self.max_weight - self.min_weight)


def log_magnitude(value: float) -> float:
    return math.log1p(max(0.0, value))


def assign_weights(
    flows: Sequence[FlowRecord],
    scale: WeightScale = WeightScale(),
) -> List[FlowRecord]:
    """Annotate each record of the rendered subset with a display weight.

    Args:
        flows: The rendered subset.
        scale: Output range and emphasis curve.

    Returns:
        New records, same order, each carrying ``display_weight``.
    """
    if not flows:
        return []

    logs = [log_magnitude(f.display_value) for f in flows]
    min_log = min(logs)
    max_log = max(max(logs), min_log + scale.epsilon)

    return [
        flow.with_weight(scale.weight(log_value, min_log, max_log))
        for flow, log_value in zip(flows, logs)
    ]
