"""
Forward kinematics service.

Resolves each requested link independently: one bad link name does not
spoil the poses of the others.
"""

from typing import Mapping, Sequence

from ikarbiter.core.exceptions import (
    ChainEvaluationError,
    FrameTransformError,
    JointNameNotFoundError,
    LinkNotFoundError,
)
from ikarbiter.core.logging import get_logger, request_context
from ikarbiter.core.types import (
    JointLimit,
    JointVector,
    KinematicSolverInfo,
    PoseStamped,
    ResultCode,
)
from ikarbiter.kinematics.interfaces import ChainEvaluator, FrameTransformer
from ikarbiter.services.messages import FKRequest, FKResponse, LinkPoseResult

logger = get_logger(__name__)


class ForwardKinematicsResolver:
    """Maps joint states to link poses in a caller-chosen frame."""

    def __init__(
        self,
        chain: ChainEvaluator,
        transformer: FrameTransformer,
        root_frame: str,
        limits: Sequence[JointLimit] = (),
    ) -> None:
        self.chain = chain
        self.transformer = transformer
        self.root_frame = root_frame
        self.limits = tuple(limits)

    def joint_vector(self, joint_state: Mapping[str, float]) -> JointVector:
        """
        Order a name-to-position mapping by chain joint index.

        Names that are not chain joints are ignored.

        Raises:
            JointNameNotFoundError: If a chain joint has no position.
        """
        values: list[float | None] = [None] * len(self.chain.joint_names)
        for name, position in joint_state.items():
            try:
                values[self.chain.joint_index_for_name(name)] = float(position)
            except JointNameNotFoundError:
                logger.debug("fk_ignoring_joint", joint=name)

        missing = [n for n, v in zip(self.chain.joint_names, values) if v is None]
        if missing:
            raise JointNameNotFoundError(
                f"Joint state has no position for '{missing[0]}'",
                name=missing[0],
                details={"missing": missing},
            )
        return tuple(values)

    def _resolve_link(self, joints: JointVector, link_name: str, frame_id: str) -> LinkPoseResult:
        try:
            segment = self.chain.segment_index_for_link(link_name)
            pose = self.chain.forward_kinematics(joints, segment)
        except (LinkNotFoundError, ChainEvaluationError) as e:
            logger.error("fk_no_solution", link=link_name, error=str(e))
            return LinkPoseResult(link_name, ResultCode.NO_FK_SOLUTION)

        try:
            pose = self.transformer.transform(pose, self.root_frame, frame_id)
        except FrameTransformError as e:
            logger.error("fk_frame_transform_failed", link=link_name, frame_id=frame_id, error=str(e))
            return LinkPoseResult(link_name, ResultCode.FRAME_TRANSFORM_FAILURE)

        return LinkPoseResult(link_name, ResultCode.SUCCESS, PoseStamped(pose, frame_id))

    def get_fk(self, request: FKRequest) -> FKResponse:
        """
        Poses for every requested link.

        Raises:
            JointNameNotFoundError: If the joint state lacks a chain joint.
        """
        with request_context("fk", links=len(request.link_names)):
            joints = self.joint_vector(request.joint_state)
            response = FKResponse(
                tuple(
                    self._resolve_link(joints, name, request.frame_id)
                    for name in request.link_names
                )
            )
            if not response.success:
                logger.warning(
                    "fk_partial_failure",
                    failed=[
                        r.link_name
                        for r in response.links
                        if r.code is not ResultCode.SUCCESS
                    ],
                )
            return response

    def get_fk_solver_info(self) -> KinematicSolverInfo:
        return KinematicSolverInfo(
            joint_names=tuple(self.chain.joint_names),
            limits=self.limits,
            link_names=tuple(self.chain.link_names),
        )
