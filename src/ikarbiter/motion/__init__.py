"""
Motion module - candidate validation, scoring and ranking.

This module provides:
- Joint limit validation (JointLimitValidator)
- Collision and constraint validation against a planning scene
  (ConfigurationValidator, FreeSpaceOracle, PyBulletCollisionOracle)
- Weighted joint-space distance (WeightedDistanceScorer)
- Stable best-first ranking of IK candidates (SolutionRanker)
"""

from ikarbiter.motion.collision import (
    ConfigurationValidator,
    FreeSpaceOracle,
    PyBulletCollisionOracle,
    scene_session,
)
from ikarbiter.motion.limits import JointLimitValidator
from ikarbiter.motion.ranking import SolutionRanker
from ikarbiter.motion.scoring import WeightedDistanceScorer

__all__ = [
    "ConfigurationValidator",
    "FreeSpaceOracle",
    "PyBulletCollisionOracle",
    "scene_session",
    "JointLimitValidator",
    "SolutionRanker",
    "WeightedDistanceScorer",
]
