"""
Weighted joint-space distance used to rank IK candidates.
"""

from typing import Sequence

import numpy as np

from ikarbiter.core.exceptions import ConfigurationError
from ikarbiter.core.types import DEFAULT_JOINT_WEIGHTS, JointVector, check_length


class WeightedDistanceScorer:
    """
    Weighted L1 distance between a candidate and the current posture.

        cost = sum_i weight_i * |current_i - candidate_i|

    A larger weight makes moving that joint more expensive. With the default
    weights the shoulder (joint 2) is the most expensive joint to move and
    the wrist joints 4 and 5 are the cheapest.
    """

    def __init__(self, weights: Sequence[float] = DEFAULT_JOINT_WEIGHTS) -> None:
        weights = np.asarray(weights, dtype=float)
        if weights.ndim != 1 or np.any(weights < 0) or not np.all(np.isfinite(weights)):
            raise ConfigurationError(
                "Joint weights must be a flat list of finite non-negative values",
                details={"weights": weights.tolist()},
            )
        self.weights = weights
        self.weights.setflags(write=False)

    def cost(self, current: JointVector, candidate: JointVector) -> float:
        check_length(current, len(self.weights), "current posture")
        check_length(candidate, len(self.weights), "candidate")
        displacement = np.abs(np.asarray(current, dtype=float) - np.asarray(candidate, dtype=float))
        return float(np.dot(self.weights, displacement))
