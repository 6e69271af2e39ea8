"""
Request and response records for the IK and FK services.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional

from ikarbiter.core.types import JointState, PoseStamped, RankedResult, ResultCode


@dataclass(frozen=True)
class IKRequest:
    """Unconstrained IK: just a target pose."""

    pose: PoseStamped


@dataclass(frozen=True)
class ConstraintAwareIKRequest:
    """
    IK with validation against the current posture.

    ``seed_state`` maps joint names to positions. It may describe a larger
    robot; only the arm's own joints are read from it.
    """

    pose: PoseStamped
    seed_state: Mapping[str, float]


@dataclass(frozen=True)
class IKResponse:
    code: ResultCode
    solution: Optional[JointState] = None
    ranking: Optional[RankedResult] = None

    @property
    def success(self) -> bool:
        return self.code is ResultCode.SUCCESS


@dataclass(frozen=True)
class FKRequest:
    """Poses of ``link_names`` for ``joint_state``, expressed in ``frame_id``."""

    joint_state: Mapping[str, float]
    link_names: tuple[str, ...]
    frame_id: str


@dataclass(frozen=True)
class LinkPoseResult:
    link_name: str
    code: ResultCode
    pose: Optional[PoseStamped] = None


@dataclass(frozen=True)
class FKResponse:
    links: tuple[LinkPoseResult, ...] = field(default_factory=tuple)

    @property
    def success(self) -> bool:
        """True only if every requested link resolved."""
        return all(link.code is ResultCode.SUCCESS for link in self.links)

    @property
    def code(self) -> ResultCode:
        """SUCCESS, or the code of the first link that failed."""
        for link in self.links:
            if link.code is not ResultCode.SUCCESS:
                return link.code
        return ResultCode.SUCCESS
