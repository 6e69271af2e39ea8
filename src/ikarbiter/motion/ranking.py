"""
Filtering and ranking of analytic IK candidates.

Candidates are filtered by joint limits, then by the collision oracle, then
scored against the current posture and sorted best first. Per-candidate
failures are folded into the result; nothing raised by validation escapes
``SolutionRanker.rank``.
"""

import math
from operator import attrgetter
from typing import Mapping, Optional, Sequence

from ikarbiter.core.exceptions import CollisionOracleError
from ikarbiter.core.logging import get_logger
from ikarbiter.core.types import (
    CandidateSolution,
    JointVector,
    RankedResult,
    RankingFailure,
    ScoredCandidate,
    ValidationVerdict,
    as_joint_vector,
)
from ikarbiter.kinematics.interfaces import CollisionOracle
from ikarbiter.motion.collision import ConfigurationValidator, scene_session
from ikarbiter.motion.limits import JointLimitValidator
from ikarbiter.motion.scoring import WeightedDistanceScorer

logger = get_logger(__name__)


class SolutionRanker:
    """
    Picks the safest, closest IK candidate.

    Example:
        >>> ranker = SolutionRanker(JointLimitValidator(limits),
        ...                         ConfigurationValidator(),
        ...                         WeightedDistanceScorer())
        >>> result = ranker.rank(current, candidates, scene)
        >>> result.best.joints if result.best else result.reason
    """

    def __init__(
        self,
        limit_validator: JointLimitValidator,
        configuration_validator: ConfigurationValidator,
        scorer: WeightedDistanceScorer,
    ) -> None:
        self.limit_validator = limit_validator
        self.configuration_validator = configuration_validator
        self.scorer = scorer

    def rank(
        self,
        current: JointVector,
        candidates: Sequence[CandidateSolution],
        scene: CollisionOracle,
        robot_state: Optional[Mapping[str, float]] = None,
    ) -> RankedResult:
        """
        Rank candidates against the current posture.

        Args:
            current: Present arm configuration
            candidates: Solver output, in solver order
            scene: Planning scene state; reset before the first query
            robot_state: Full robot state applied to the scene after the reset,
                so non-arm joints such as the gripper are posed for the checks

        Returns:
            RankedResult, ascending by cost. Equal costs keep solver order.

        Raises:
            ValueError: If the current posture is not finite.
        """
        current = as_joint_vector(current)
        if not all(math.isfinite(v) for v in current):
            raise ValueError(f"Current posture must be finite, got {current}")
        if not candidates:
            logger.info("ik_solver_empty")
            return RankedResult(reason=RankingFailure.SOLVER_EMPTY)

        verdicts = [
            self.limit_validator.validate(candidate.joints) for candidate in candidates
        ]

        try:
            with scene_session(scene, robot_state):
                for i, candidate in enumerate(candidates):
                    if verdicts[i] is ValidationVerdict.VALID:
                        verdicts[i] = self.configuration_validator.validate(
                            scene, candidate.joints
                        )
        except CollisionOracleError as e:
            # Unusable scene: nothing past the limit check can be cleared.
            logger.warning("scene_reset_failed", error=str(e))
            verdicts = [
                ValidationVerdict.ENVIRONMENT_COLLISION
                if v is ValidationVerdict.VALID
                else v
                for v in verdicts
            ]

        scored = [
            ScoredCandidate(candidate.joints, self.scorer.cost(current, candidate.joints))
            for candidate, verdict in zip(candidates, verdicts)
            if verdict is ValidationVerdict.VALID
        ]

        if not scored:
            reason = self._failure_reason(verdicts)
            logger.warning(
                reason.value,
                candidates=len(candidates),
                verdicts=[v.value for v in verdicts],
            )
            return RankedResult(verdicts=tuple(verdicts), reason=reason)

        ranked = tuple(sorted(scored, key=attrgetter("cost")))
        logger.info(
            "ik_solutions_ranked",
            candidates=len(candidates),
            valid=len(ranked),
            best_cost=ranked[0].cost,
        )
        return RankedResult(candidates=ranked, verdicts=tuple(verdicts))

    @staticmethod
    def _failure_reason(verdicts: Sequence[ValidationVerdict]) -> RankingFailure:
        if all(v is ValidationVerdict.JOINT_LIMIT_VIOLATED for v in verdicts):
            return RankingFailure.ALL_CANDIDATES_JOINT_LIMIT_VIOLATED
        return RankingFailure.ALL_CANDIDATES_IN_COLLISION_OR_CONSTRAINT_VIOLATED
