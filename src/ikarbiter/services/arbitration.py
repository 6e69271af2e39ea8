"""
IK arbitration service.

Two call modes:

- ``get_ik``: unconstrained. Returns the solver's first candidate as-is.
- ``get_constraint_aware_ik``: transforms the target into the arm root
  frame, ranks every candidate against the caller's current posture and
  the planning scene, and returns the lowest-cost valid one.

Constraint-aware calls share one planning scene, so they are serialised
with a lock at this boundary.
"""

import threading
from typing import Mapping, Sequence

from ikarbiter.core.config import ArmConfig
from ikarbiter.core.exceptions import (
    FrameTransformError,
    JointNameNotFoundError,
    SolverError,
)
from ikarbiter.core.logging import get_logger, request_context
from ikarbiter.core.types import (
    JointLimit,
    JointState,
    JointVector,
    KinematicSolverInfo,
    RankedResult,
    RankingFailure,
    ResultCode,
)
from ikarbiter.kinematics.interfaces import AnalyticSolver, CollisionOracle, FrameTransformer
from ikarbiter.motion.collision import ConfigurationValidator
from ikarbiter.motion.limits import JointLimitValidator
from ikarbiter.motion.ranking import SolutionRanker
from ikarbiter.motion.scoring import WeightedDistanceScorer
from ikarbiter.services.messages import ConstraintAwareIKRequest, IKRequest, IKResponse

logger = get_logger(__name__)

_FAILURE_CODES = {
    RankingFailure.SOLVER_EMPTY: ResultCode.NO_IK_SOLUTION,
    RankingFailure.ALL_CANDIDATES_JOINT_LIMIT_VIOLATED: ResultCode.JOINT_LIMITS_VIOLATED,
    RankingFailure.ALL_CANDIDATES_IN_COLLISION_OR_CONSTRAINT_VIOLATED: ResultCode.NO_IK_SOLUTION,
}


def seed_posture(seed_state: Mapping[str, float], joint_names: Sequence[str]) -> JointVector:
    """
    Read the arm's current posture out of a (possibly larger) joint state.

    Raises:
        JointNameNotFoundError: If an arm joint is missing from the state.
    """
    posture = []
    for name in joint_names:
        if name not in seed_state:
            raise JointNameNotFoundError(
                f"Seed state has no position for joint '{name}'",
                name=name,
                details={"available": sorted(seed_state)},
            )
        posture.append(float(seed_state[name]))
    return tuple(posture)


class IKArbitrationService:
    """Chooses one IK solution per request for a 6-DOF arm."""

    def __init__(
        self,
        solver: AnalyticSolver,
        ranker: SolutionRanker,
        transformer: FrameTransformer,
        scene: CollisionOracle,
        joint_names: Sequence[str],
        root_frame: str,
        link_names: Sequence[str] = (),
    ) -> None:
        """
        Args:
            solver: Closed-form IK backend
            ranker: Candidate filter and ranker
            transformer: Frame lookup used to reach the root frame
            scene: Planning scene state shared by constraint-aware calls
            joint_names: Arm joint names in JointVector order
            root_frame: Frame the solver expects poses in
            link_names: Links reported by ``get_ik_solver_info``
        """
        self.solver = solver
        self.ranker = ranker
        self.transformer = transformer
        self.scene = scene
        self.joint_names = tuple(joint_names)
        self.root_frame = root_frame
        self.link_names = tuple(link_names)
        self._lock = threading.Lock()

    @classmethod
    def from_config(
        cls,
        config: ArmConfig,
        solver: AnalyticSolver,
        transformer: FrameTransformer,
        scene: CollisionOracle,
        limits: Sequence[JointLimit],
        link_names: Sequence[str] = (),
    ) -> "IKArbitrationService":
        """Wire the standard validators and scorer for a configured arm."""
        ranker = SolutionRanker(
            JointLimitValidator(limits),
            ConfigurationValidator(),
            WeightedDistanceScorer(config.joint_weights),
        )
        return cls(
            solver,
            ranker,
            transformer,
            scene,
            config.joint_names,
            config.root_frame,
            link_names=link_names,
        )

    def _solution(self, joints: JointVector) -> JointState:
        return JointState(self.joint_names, tuple(joints), frame_id=self.root_frame)

    def get_ik(self, request: IKRequest) -> IKResponse:
        """First solver candidate, without validation or ranking."""
        with request_context("ik"):
            if request.pose.frame_id != self.root_frame:
                logger.debug(
                    "ik_pose_not_in_root_frame",
                    frame_id=request.pose.frame_id,
                    root_frame=self.root_frame,
                )

            try:
                candidates = self.solver.solve(request.pose.frame)
            except SolverError as e:
                logger.error("ik_solver_failed", error=str(e))
                return IKResponse(ResultCode.NO_IK_SOLUTION)
            if not candidates:
                logger.error("ik_no_solution")
                return IKResponse(ResultCode.NO_IK_SOLUTION)

            if len(candidates) > 1:
                logger.info("ik_taking_first_solution", solutions=len(candidates))
            return IKResponse(ResultCode.SUCCESS, self._solution(candidates[0].joints))

    def get_constraint_aware_ik(self, request: ConstraintAwareIKRequest) -> IKResponse:
        """
        Lowest-cost valid candidate for the requested pose.

        Raises:
            JointNameNotFoundError: If the seed state lacks an arm joint.
            ValueError: If the seed posture is not finite.
        """
        with self._lock, request_context("constraint_aware_ik"):
            try:
                target = self.transformer.transform(
                    request.pose.frame, request.pose.frame_id, self.root_frame
                )
            except FrameTransformError as e:
                logger.error(
                    "ik_frame_transform_failed",
                    source=request.pose.frame_id,
                    target=self.root_frame,
                    error=str(e),
                )
                return IKResponse(ResultCode.FRAME_TRANSFORM_FAILURE)

            current = seed_posture(request.seed_state, self.joint_names)
            try:
                candidates = self.solver.solve(target)
            except SolverError as e:
                logger.error("ik_solver_failed", error=str(e))
                return IKResponse(
                    ResultCode.NO_IK_SOLUTION,
                    ranking=RankedResult(reason=RankingFailure.SOLVER_EMPTY),
                )

            ranking = self.ranker.rank(
                current, candidates, self.scene, robot_state=request.seed_state
            )

            if ranking.best is None:
                return IKResponse(_FAILURE_CODES[ranking.reason], ranking=ranking)

            return IKResponse(
                ResultCode.SUCCESS,
                self._solution(ranking.best.joints),
                ranking=ranking,
            )

    def get_ik_solver_info(self) -> KinematicSolverInfo:
        return KinematicSolverInfo(
            joint_names=self.joint_names,
            limits=self.ranker.limit_validator.limits,
            link_names=self.link_names,
        )
