"""
Collaborator interfaces consumed by the ranking and service layers.

The analytic solver, chain evaluator, frame lookup and collision backend are
all injected. Anything with matching methods qualifies; the bundled adapters
live in ``ikarbiter.kinematics`` and ``ikarbiter.motion.collision``.
"""

from typing import Mapping, Optional, Protocol, Sequence, runtime_checkable

from compas.geometry import Frame

from ikarbiter.core.types import CandidateSolution, JointVector


@runtime_checkable
class AnalyticSolver(Protocol):
    """Closed-form IK: end-effector frame to candidate joint vectors."""

    def solve(self, frame: Frame) -> Sequence[CandidateSolution]:
        """Return candidates in solver-native order (possibly empty)."""
        ...


@runtime_checkable
class CollisionOracle(Protocol):
    """
    Planning scene state used to classify joint configurations.

    The three predicates are evaluated against the configuration most
    recently passed to ``set_configuration``.
    """

    def reset(self, robot_state: Optional[Mapping[str, float]] = None) -> None:
        """
        Return the scene to its start state, then apply ``robot_state``.

        ``robot_state`` maps joint names to positions and may name joints
        outside the arm (fingers, torso); names the scene does not know are
        ignored.
        """
        ...

    def set_configuration(self, joints: JointVector) -> None:
        ...

    def is_in_self_collision(self) -> bool:
        ...

    def is_in_environment_collision(self) -> bool:
        ...

    def obeys_constraints(self) -> bool:
        ...


@runtime_checkable
class FrameTransformer(Protocol):
    """Re-expresses poses between named frames."""

    def transform(self, frame: Frame, source_frame: str, target_frame: str) -> Frame:
        """
        Raises:
            FrameTransformError: If either frame is unknown or unreachable.
        """
        ...


@runtime_checkable
class ChainEvaluator(Protocol):
    """Forward kinematics over the arm's root-to-tip chain."""

    joint_names: Sequence[str]
    link_names: Sequence[str]

    def forward_kinematics(self, joints: JointVector, segment_index: int) -> Frame:
        """
        Pose of the given segment in the chain root frame.

        Raises:
            ChainEvaluationError: If evaluation fails.
        """
        ...

    def segment_index_for_link(self, link_name: str) -> int:
        """
        Raises:
            LinkNotFoundError: If the link is not in the chain.
        """
        ...

    def joint_index_for_name(self, joint_name: str) -> int:
        """
        Raises:
            JointNameNotFoundError: If the joint is not in the chain.
        """
        ...
