"""
Forward kinematics over a compas_robots model.

The chain runs from the arm's root link to its tip link. Segment index ``i``
is the ``i``-th link of that chain, with the root at index 0.
"""

from pathlib import Path

from compas.geometry import Frame
from compas_robots import Configuration, RobotModel

from ikarbiter.core.exceptions import (
    ChainEvaluationError,
    ConfigurationError,
    JointNameNotFoundError,
    LinkNotFoundError,
)
from ikarbiter.core.logging import get_logger
from ikarbiter.core.types import JointVector, check_length

logger = get_logger(__name__)


class CompasChainEvaluator:
    """
    Chain evaluator backed by ``compas_robots.RobotModel``.

    Only configurable joints between root and tip take part; fixed joints
    are folded into the link transforms by compas.
    """

    def __init__(self, model: RobotModel, root_link: str, tip_link: str) -> None:
        """
        Args:
            model: Robot model, typically parsed from URDF
            root_link: First link of the chain (the arm's root frame)
            tip_link: Last link of the chain
        """
        self.model = model
        self.root_link = root_link
        self.tip_link = tip_link

        self.link_names = tuple(
            link.name for link in model.iter_link_chain(root_link, tip_link)
        )
        if not self.link_names or self.link_names[-1] != tip_link:
            raise ConfigurationError(
                f"No kinematic chain from '{root_link}' to '{tip_link}'",
                details={"links": list(self.link_names)},
            )

        self._joints = [
            j for j in model.iter_joint_chain(root_link, tip_link) if j.is_configurable()
        ]
        self.joint_names = tuple(j.name for j in self._joints)
        self._link_index = {name: i for i, name in enumerate(self.link_names)}
        self._joint_index = {name: i for i, name in enumerate(self.joint_names)}

        logger.info(
            "chain_loaded",
            root=root_link,
            tip=tip_link,
            joints=list(self.joint_names),
            links=len(self.link_names),
        )

    @classmethod
    def from_urdf(
        cls, urdf_path: str | Path, root_link: str, tip_link: str
    ) -> "CompasChainEvaluator":
        """
        Parse a URDF file and build the evaluator.

        Raises:
            ConfigurationError: If the file is missing or cannot be parsed.
        """
        path = Path(urdf_path)
        if not path.exists():
            raise ConfigurationError(f"URDF file not found: {path}")

        try:
            model = RobotModel.from_urdf_file(str(path))
        except Exception as e:
            raise ConfigurationError(f"Failed to load URDF from {path}: {e}") from e
        return cls(model, root_link, tip_link)

    def joint_limits(self) -> dict[str, tuple[float, float]]:
        """Joint limits declared in the model, for joints that declare any."""
        limits = {}
        for joint in self._joints:
            if joint.limit is not None and joint.limit.lower is not None:
                limits[joint.name] = (joint.limit.lower, joint.limit.upper)
        return limits

    def segment_index_for_link(self, link_name: str) -> int:
        try:
            return self._link_index[link_name]
        except KeyError:
            raise LinkNotFoundError(
                f"Link '{link_name}' is not in the chain",
                name=link_name,
                details={"chain": list(self.link_names)},
            ) from None

    def joint_index_for_name(self, joint_name: str) -> int:
        try:
            return self._joint_index[joint_name]
        except KeyError:
            raise JointNameNotFoundError(
                f"Joint '{joint_name}' is not in the chain",
                name=joint_name,
            ) from None

    def forward_kinematics(self, joints: JointVector, segment_index: int) -> Frame:
        check_length(joints, len(self.joint_names))
        if not 0 <= segment_index < len(self.link_names):
            raise ChainEvaluationError(
                f"Segment index {segment_index} out of range",
                details={"segments": len(self.link_names)},
            )

        config = Configuration.from_revolute_values(list(joints), list(self.joint_names))
        link_name = self.link_names[segment_index]
        try:
            return self.model.forward_kinematics(config, link_name=link_name)
        except Exception as e:
            raise ChainEvaluationError(
                f"Forward kinematics failed for '{link_name}': {e}"
            ) from e
