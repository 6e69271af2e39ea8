"""
Adapter for ikfast-style closed-form IK bindings.

Bindings generated by OpenRAVE ikfast (e.g. ``ikfastpy``) take the target as
a row-major 3x4 ``[R | t]`` matrix and return all solutions as one flat
list. This module packs compas frames into that layout and unpacks the
result into CandidateSolution records.
"""

from typing import Any, Sequence

import numpy as np
from compas.geometry import Frame, Transformation

from ikarbiter.core.exceptions import SolverError
from ikarbiter.core.logging import get_logger
from ikarbiter.core.types import NUM_JOINTS, CandidateSolution

logger = get_logger(__name__)


def frame_to_ikfast(frame: Frame) -> tuple[list[float], list[float]]:
    """
    Split a frame into ikfast's translation and rotation arguments.

    Returns:
        ``(eetrans, eerot)``: 3 translation values and the 9 entries of the
        rotation matrix in row-major order.
    """
    matrix = np.asarray(Transformation.from_frame(frame).matrix, dtype=float)
    return matrix[:3, 3].tolist(), matrix[:3, :3].ravel().tolist()


def frame_to_pose_matrix(frame: Frame) -> list[float]:
    """Row-major 3x4 ``[R | t]`` as a flat list of 12 values."""
    matrix = np.asarray(Transformation.from_frame(frame).matrix, dtype=float)
    return matrix[:3, :4].ravel().tolist()


class IkFastSolver:
    """
    Analytic solver wrapping an ikfast binding.

    The binding must provide ``inverse(pose12) -> flat list``; the returned
    list is split into consecutive ``n_joints``-sized candidates.
    """

    def __init__(self, kinematics: Any, n_joints: int = NUM_JOINTS) -> None:
        self.kinematics = kinematics
        self.n_joints = n_joints

    def solve(self, frame: Frame) -> Sequence[CandidateSolution]:
        pose = frame_to_pose_matrix(frame)
        try:
            raw = self.kinematics.inverse(pose)
        except Exception as e:
            raise SolverError(f"ikfast binding failed: {e}") from e

        values = np.asarray(raw if raw is not None else [], dtype=float)
        if values.size % self.n_joints:
            raise SolverError(
                "ikfast returned a ragged solution list",
                details={"values": int(values.size), "n_joints": self.n_joints},
            )

        candidates = [
            CandidateSolution(tuple(row.tolist()))
            for row in values.reshape(-1, self.n_joints)
        ]
        logger.debug("ikfast_solved", solutions=len(candidates))
        return candidates
