"""
Value types shared by the validation, ranking and service layers.

All records are immutable. Joint vectors are plain tuples of floats,
index-aligned with the arm's joint-name order fixed at startup.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Optional, Sequence

from compas.geometry import Frame

NUM_JOINTS = 6

JointVector = tuple[float, ...]

DEFAULT_JOINT_WEIGHTS: tuple[float, ...] = (0.4, 0.8, 0.5, 0.2, 0.2, 0.5)


def as_joint_vector(values: Iterable[float]) -> JointVector:
    """Coerce any iterable of numbers into a JointVector."""
    return tuple(float(v) for v in values)


class ValidationVerdict(Enum):
    """Outcome of validating one candidate."""

    VALID = "valid"
    JOINT_LIMIT_VIOLATED = "joint_limit_violated"
    SELF_COLLISION = "self_collision"
    ENVIRONMENT_COLLISION = "environment_collision"
    CONSTRAINT_VIOLATED = "constraint_violated"


class RankingFailure(Enum):
    """Why a ranking pass produced no candidate."""

    SOLVER_EMPTY = "solver_empty"
    ALL_CANDIDATES_JOINT_LIMIT_VIOLATED = "all_candidates_joint_limit_violated"
    ALL_CANDIDATES_IN_COLLISION_OR_CONSTRAINT_VIOLATED = (
        "all_candidates_in_collision_or_constraint_violated"
    )


class ResultCode(Enum):
    """Outcome reported to callers of the IK and FK services."""

    SUCCESS = "success"
    NO_IK_SOLUTION = "no_ik_solution"
    JOINT_LIMITS_VIOLATED = "joint_limits_violated"
    FRAME_TRANSFORM_FAILURE = "frame_transform_failure"
    NO_FK_SOLUTION = "no_fk_solution"


@dataclass(frozen=True)
class JointLimit:
    """Inclusive admissible range for one joint (radians)."""

    min_position: float
    max_position: float

    def __post_init__(self) -> None:
        if self.min_position > self.max_position:
            raise ValueError(
                f"Joint limit min {self.min_position} exceeds max {self.max_position}"
            )

    def contains(self, value: float) -> bool:
        return self.min_position <= value <= self.max_position


@dataclass(frozen=True)
class CandidateSolution:
    """One joint vector emitted by the analytic solver."""

    joints: JointVector
    free_joints: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "joints", as_joint_vector(self.joints))
        object.__setattr__(self, "free_joints", tuple(self.free_joints))


@dataclass(frozen=True)
class ScoredCandidate:
    """A valid candidate and its weighted distance to the current posture."""

    joints: JointVector
    cost: float


@dataclass(frozen=True)
class RankedResult:
    """
    Candidates that passed validation, best first.

    ``verdicts`` holds one verdict per input candidate, in solver order.
    ``reason`` is set only when ``candidates`` is empty.
    """

    candidates: tuple[ScoredCandidate, ...] = ()
    verdicts: tuple[ValidationVerdict, ...] = ()
    reason: Optional[RankingFailure] = None

    @property
    def best(self) -> Optional[ScoredCandidate]:
        return self.candidates[0] if self.candidates else None

    @property
    def is_empty(self) -> bool:
        return not self.candidates

    def __len__(self) -> int:
        return len(self.candidates)

    def __iter__(self) -> Iterator[ScoredCandidate]:
        return iter(self.candidates)


@dataclass(frozen=True)
class PoseStamped:
    """A pose together with the name of the frame it is expressed in."""

    frame: Frame
    frame_id: str


@dataclass(frozen=True)
class JointState:
    """Named joint positions, as returned to service callers."""

    names: tuple[str, ...]
    positions: JointVector
    frame_id: str = ""

    def as_dict(self) -> dict[str, float]:
        return dict(zip(self.names, self.positions))


@dataclass(frozen=True)
class KinematicSolverInfo:
    """What the kinematics node can solve for."""

    joint_names: tuple[str, ...]
    limits: tuple[JointLimit, ...]
    link_names: tuple[str, ...] = field(default_factory=tuple)


def check_length(joints: Sequence[float], expected: int, what: str = "joint vector") -> None:
    """Raise ValueError when a vector does not match the arm's joint count."""
    if len(joints) != expected:
        raise ValueError(f"Expected {what} of length {expected}, got {len(joints)}")
