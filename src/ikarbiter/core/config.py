"""
Configuration management for ikarbiter.

Handles loading, validation, and access to arm configurations: joint
ordering, joint limits, scoring weights and goal constraints.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from ikarbiter.core.exceptions import ConfigurationError
from ikarbiter.core.types import DEFAULT_JOINT_WEIGHTS, NUM_JOINTS, JointLimit


class JointConstraint(BaseModel):
    """Goal constraint pinning one joint near a position."""

    joint_name: str
    position: float
    tolerance_above: float = Field(default=0.0, ge=0.0)
    tolerance_below: float = Field(default=0.0, ge=0.0)

    def is_satisfied(self, value: float) -> bool:
        return (
            self.position - self.tolerance_below
            <= value
            <= self.position + self.tolerance_above
        )


class ArmConfig(BaseModel):
    """Arm configuration model."""

    name: str
    manufacturer: str = ""
    urdf_path: str | None = None
    root_frame: str = "base_link"
    tip_frame: str = "tool0"
    joint_names: list[str]
    joint_limits: dict[str, dict[str, float]] = Field(default_factory=dict)
    joint_weights: list[float] = Field(
        default_factory=lambda: list(DEFAULT_JOINT_WEIGHTS)
    )
    constraints: list[JointConstraint] = Field(default_factory=list)

    @field_validator("joint_names")
    @classmethod
    def _six_unique_joints(cls, names: list[str]) -> list[str]:
        if len(names) != NUM_JOINTS:
            raise ValueError(f"expected {NUM_JOINTS} joint names, got {len(names)}")
        if len(set(names)) != len(names):
            raise ValueError("joint names must be unique")
        return names

    @field_validator("joint_weights")
    @classmethod
    def _non_negative_weights(cls, weights: list[float]) -> list[float]:
        if len(weights) != NUM_JOINTS:
            raise ValueError(f"expected {NUM_JOINTS} joint weights, got {len(weights)}")
        if any(w < 0 for w in weights):
            raise ValueError("joint weights must be non-negative")
        return weights

    @model_validator(mode="after")
    def _known_joints_only(self) -> "ArmConfig":
        unknown = set(self.joint_limits) - set(self.joint_names)
        unknown |= {c.joint_name for c in self.constraints} - set(self.joint_names)
        if unknown:
            raise ValueError(f"unknown joints referenced: {sorted(unknown)}")
        return self

    def limit_table(
        self, model_limits: Optional[Mapping[str, tuple[float, float]]] = None
    ) -> tuple[JointLimit, ...]:
        """
        Build the per-joint limit table in joint order.

        Limits declared in the configuration override those read from the
        robot model.

        Args:
            model_limits: Optional ``{joint_name: (min, max)}`` from the URDF.

        Returns:
            One JointLimit per joint.

        Raises:
            ConfigurationError: If a joint has no limit from either source.
        """
        model_limits = model_limits or {}
        table = []
        for name in self.joint_names:
            lower, upper = model_limits.get(name, (None, None))
            override = self.joint_limits.get(name, {})
            lower = override.get("min", lower)
            upper = override.get("max", upper)
            if lower is None or upper is None:
                raise ConfigurationError(
                    f"No joint limit available for '{name}'",
                    details={"arm": self.name},
                )
            try:
                table.append(JointLimit(float(lower), float(upper)))
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid joint limit for '{name}'", details={"error": str(e)}
                ) from e
        return tuple(table)


@dataclass
class ConfigManager:
    """
    Loads and validates arm configurations from YAML files.

    Expects ``<config_dir>/arms/*.yaml``; the file stem is the arm's key.

    Example:
        >>> config = ConfigManager(config_dir=Path("config"))
        >>> arm = config.get_arm("jaco")
    """

    config_dir: Path
    _arms: dict[str, ArmConfig] = field(default_factory=dict, init=False)
    _loaded: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.config_dir = Path(self.config_dir)
        if not self.config_dir.exists():
            raise ConfigurationError(
                f"Configuration directory not found: {self.config_dir}"
            )

    def load(self) -> None:
        """Load all arm configurations from disk."""
        arms_dir = self.config_dir / "arms"
        if arms_dir.exists():
            for config_file in sorted(arms_dir.glob("*.yaml")):
                self._arms[config_file.stem] = self.load_file(config_file)
        self._loaded = True

    @staticmethod
    def load_file(config_file: Path) -> ArmConfig:
        """
        Load a single arm configuration file.

        Raises:
            ConfigurationError: If the file is unreadable or invalid.
        """
        try:
            with open(config_file) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Failed to read arm config: {config_file}",
                details={"error": str(e)},
            ) from e

        if not data or "arm" not in data:
            raise ConfigurationError(
                f"Arm config has no 'arm' section: {config_file}"
            )

        arm_data: dict[str, Any] = dict(data["arm"])
        if "kinematics" in data:
            arm_data.update(data["kinematics"])
        if "limits" in data:
            arm_data["joint_limits"] = data["limits"].get("joints", {})
        if "scoring" in data:
            arm_data["joint_weights"] = data["scoring"].get(
                "joint_weights", list(DEFAULT_JOINT_WEIGHTS)
            )
        if "constraints" in data:
            arm_data["constraints"] = data["constraints"] or []

        try:
            return ArmConfig(**arm_data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid arm config: {config_file}",
                details={"error": str(e)},
            ) from e

    def get_arm(self, name: str) -> ArmConfig:
        """
        Get arm configuration by name.

        Raises:
            ConfigurationError: If the arm is not found.
        """
        if not self._loaded:
            self.load()

        if name not in self._arms:
            raise ConfigurationError(
                f"Arm configuration not found: {name}",
                details={"available": list(self._arms.keys())},
            )
        return self._arms[name]

    def list_arms(self) -> list[str]:
        """List available arm configurations."""
        if not self._loaded:
            self.load()
        return list(self._arms.keys())
