"""
Collision and constraint validation of joint configurations.

This module provides:
- ConfigurationValidator, which classifies a candidate against a collision
  oracle (the planning scene state)
- scene_session, which resets the scene before a ranking pass
- FreeSpaceOracle, a scene with no obstacles that only checks constraints
- PyBulletCollisionOracle, self and environment collision via PyBullet
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Mapping, Optional, Sequence

import pybullet as p

from ikarbiter.core.config import JointConstraint
from ikarbiter.core.exceptions import CollisionOracleError, ConfigurationError
from ikarbiter.core.logging import get_logger
from ikarbiter.core.types import JointVector, ValidationVerdict, as_joint_vector, check_length
from ikarbiter.kinematics.interfaces import CollisionOracle

logger = get_logger(__name__)


def constraints_satisfied(
    constraints: Sequence[JointConstraint],
    joint_names: Sequence[str],
    joints: JointVector,
) -> bool:
    """True when every constraint holds for the given configuration."""
    values = dict(zip(joint_names, joints))
    for constraint in constraints:
        if not constraint.is_satisfied(values[constraint.joint_name]):
            logger.debug(
                "constraint_violated",
                joint=constraint.joint_name,
                value=values[constraint.joint_name],
                target=constraint.position,
            )
            return False
    return True


@contextmanager
def scene_session(
    scene: CollisionOracle, robot_state: Optional[Mapping[str, float]] = None
) -> Iterator[CollisionOracle]:
    """
    Reset the scene and apply the caller's robot state before handing it out.

    Raises:
        CollisionOracleError: If the scene cannot be reset.
    """
    scene.reset(robot_state)
    yield scene


class ConfigurationValidator:
    """
    Classifies a joint configuration against a collision oracle.

    Queries run in a fixed order (self collision, environment collision,
    constraints) and stop at the first failure. The caller is expected to
    have checked joint limits already.
    """

    def validate(self, scene: CollisionOracle, joints: JointVector) -> ValidationVerdict:
        try:
            scene.set_configuration(joints)
            if scene.is_in_self_collision():
                return ValidationVerdict.SELF_COLLISION
            if scene.is_in_environment_collision():
                return ValidationVerdict.ENVIRONMENT_COLLISION
            if not scene.obeys_constraints():
                return ValidationVerdict.CONSTRAINT_VIOLATED
        except CollisionOracleError as e:
            logger.warning("collision_query_failed", error=str(e), joints=list(joints))
            return ValidationVerdict.ENVIRONMENT_COLLISION
        return ValidationVerdict.VALID


class FreeSpaceOracle:
    """Scene without obstacles; only goal constraints can reject a configuration."""

    def __init__(
        self,
        joint_names: Sequence[str],
        constraints: Sequence[JointConstraint] = (),
    ) -> None:
        self.joint_names = tuple(joint_names)
        self.constraints = tuple(constraints)
        self._joints: Optional[JointVector] = None

    def reset(self, robot_state: Optional[Mapping[str, float]] = None) -> None:
        self._joints = None

    def set_configuration(self, joints: JointVector) -> None:
        check_length(joints, len(self.joint_names))
        self._joints = as_joint_vector(joints)

    def is_in_self_collision(self) -> bool:
        return False

    def is_in_environment_collision(self) -> bool:
        return False

    def obeys_constraints(self) -> bool:
        if self._joints is None:
            raise CollisionOracleError("No configuration set on the scene")
        return constraints_satisfied(self.constraints, self.joint_names, self._joints)


class PyBulletCollisionOracle:
    """
    Collision oracle using PyBullet.

    Wraps PyBullet's contact queries to check for:
    - Self-collision (robot links colliding with each other)
    - Environment collision (robot colliding with any other body)
    """

    def __init__(
        self,
        client_id: int,
        robot_id: int,
        joint_names: Sequence[str],
        joint_indices: dict[str, int],
        start_state: Optional[JointVector] = None,
        constraints: Sequence[JointConstraint] = (),
        exclude_bodies: Sequence[int] = (),
    ) -> None:
        """
        Args:
            client_id: PyBullet physics client
            robot_id: Body id of the arm
            joint_names: Arm joint names in JointVector order
            joint_indices: PyBullet joint index by name for the model's joints;
                must cover every arm joint
            start_state: Configuration restored by ``reset`` (default: zeros)
            constraints: Goal constraints checked by ``obeys_constraints``
            exclude_bodies: Bodies ignored by environment collision checks
        """
        missing = [name for name in joint_names if name not in joint_indices]
        if missing:
            raise ConfigurationError(
                "Arm joints missing from the PyBullet model",
                details={"missing": missing},
            )

        self.client_id = client_id
        self.robot_id = robot_id
        self.joint_names = tuple(joint_names)
        self.model_joint_indices = dict(joint_indices)
        self.joint_indices = [joint_indices[name] for name in self.joint_names]
        self.start_state = (
            as_joint_vector(start_state)
            if start_state is not None
            else (0.0,) * len(self.joint_names)
        )
        self.constraints = tuple(constraints)
        self.exclude_bodies = set(exclude_bodies)
        self._joints: JointVector = self.start_state

    @classmethod
    def from_urdf(
        cls,
        urdf_path: str | Path,
        joint_names: Sequence[str],
        constraints: Sequence[JointConstraint] = (),
        base_position: tuple[float, float, float] = (0, 0, 0),
    ) -> "PyBulletCollisionOracle":
        """
        Start a headless PyBullet client and load the arm with self-collision on.

        Raises:
            ConfigurationError: If the URDF cannot be loaded.
        """
        path = Path(urdf_path)
        if not path.exists():
            raise ConfigurationError(f"URDF file not found: {path}")

        client_id = p.connect(p.DIRECT)
        if client_id < 0:
            raise ConfigurationError("Failed to connect to PyBullet")

        try:
            robot_id = p.loadURDF(
                str(path),
                basePosition=base_position,
                useFixedBase=True,
                flags=p.URDF_USE_SELF_COLLISION
                | p.URDF_USE_SELF_COLLISION_EXCLUDE_PARENT,
                physicsClientId=client_id,
            )

            joint_indices = {}
            for i in range(p.getNumJoints(robot_id, physicsClientId=client_id)):
                joint_info = p.getJointInfo(robot_id, i, physicsClientId=client_id)
                joint_indices[joint_info[1].decode("utf-8")] = i

            oracle = cls(
                client_id,
                robot_id,
                joint_names,
                joint_indices,
                constraints=constraints,
            )
        except p.error as e:
            p.disconnect(physicsClientId=client_id)
            raise ConfigurationError(f"Failed to load URDF from {path}: {e}") from e
        except ConfigurationError:
            p.disconnect(physicsClientId=client_id)
            raise

        logger.info("pybullet_scene_ready", urdf=str(path), joints=len(joint_indices))
        return oracle

    def add_obstacle(
        self, urdf_path: str | Path, position: tuple[float, float, float] = (0, 0, 0)
    ) -> int:
        """Load a fixed obstacle into the scene and return its body id."""
        try:
            return p.loadURDF(
                str(urdf_path),
                basePosition=position,
                useFixedBase=True,
                physicsClientId=self.client_id,
            )
        except p.error as e:
            raise ConfigurationError(f"Failed to load obstacle {urdf_path}: {e}") from e

    def close(self) -> None:
        p.disconnect(physicsClientId=self.client_id)

    def __enter__(self) -> "PyBulletCollisionOracle":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def reset(self, robot_state: Optional[Mapping[str, float]] = None) -> None:
        """
        Restore the start state, then pose the non-arm joints from ``robot_state``.

        Arm joints are left at the start state; each candidate sets them.
        """
        self.set_configuration(self.start_state)
        if not robot_state:
            return

        try:
            for name, value in robot_state.items():
                index = self.model_joint_indices.get(name)
                if index is None or name in self.joint_names:
                    continue
                p.resetJointState(
                    self.robot_id, index, float(value), physicsClientId=self.client_id
                )
        except p.error as e:
            raise CollisionOracleError(f"Failed to apply robot state: {e}") from e

    def set_configuration(self, joints: JointVector) -> None:
        check_length(joints, len(self.joint_names))
        try:
            for joint_index, value in zip(self.joint_indices, joints):
                p.resetJointState(
                    self.robot_id, joint_index, value, physicsClientId=self.client_id
                )
        except p.error as e:
            raise CollisionOracleError(f"Failed to set configuration: {e}") from e
        self._joints = as_joint_vector(joints)

    def is_in_self_collision(self) -> bool:
        try:
            p.performCollisionDetection(physicsClientId=self.client_id)
            contacts = p.getContactPoints(
                bodyA=self.robot_id,
                bodyB=self.robot_id,
                physicsClientId=self.client_id,
            )
        except p.error as e:
            raise CollisionOracleError(f"Self-collision query failed: {e}") from e
        return len(contacts) > 0

    def is_in_environment_collision(self) -> bool:
        try:
            p.performCollisionDetection(physicsClientId=self.client_id)
            num_bodies = p.getNumBodies(physicsClientId=self.client_id)
            for i in range(num_bodies):
                body_id = p.getBodyUniqueId(i, physicsClientId=self.client_id)
                if body_id == self.robot_id or body_id in self.exclude_bodies:
                    continue

                contacts = p.getContactPoints(
                    bodyA=self.robot_id,
                    bodyB=body_id,
                    physicsClientId=self.client_id,
                )
                if len(contacts) > 0:
                    return True
        except p.error as e:
            raise CollisionOracleError(f"Environment collision query failed: {e}") from e
        return False

    def obeys_constraints(self) -> bool:
        return constraints_satisfied(self.constraints, self.joint_names, self._joints)
