"""
Unit tests for configuration management.
"""

import pytest
from pydantic import ValidationError

from ikarbiter.core.config import ArmConfig, ConfigManager, JointConstraint
from ikarbiter.core.exceptions import ConfigurationError
from ikarbiter.core.types import DEFAULT_JOINT_WEIGHTS, JointLimit

JOINTS = ["j1", "j2", "j3", "j4", "j5", "j6"]


class TestArmConfig:
    """Tests for ArmConfig model."""

    def test_create_minimal(self):
        """Test creating config with minimal fields."""
        config = ArmConfig(name="Test", joint_names=JOINTS)
        assert config.name == "Test"
        assert config.root_frame == "base_link"
        assert config.joint_weights == list(DEFAULT_JOINT_WEIGHTS)
        assert config.constraints == []

    def test_default_weights(self):
        """Default weights penalise the shoulder most and the wrist least."""
        config = ArmConfig(name="Test", joint_names=JOINTS)
        assert config.joint_weights == [0.4, 0.8, 0.5, 0.2, 0.2, 0.5]

    def test_requires_six_joints(self):
        """Test that a five-joint arm is rejected."""
        with pytest.raises(ValidationError, match="6 joint names"):
            ArmConfig(name="Test", joint_names=JOINTS[:5])

    def test_rejects_duplicate_joints(self):
        with pytest.raises(ValidationError, match="unique"):
            ArmConfig(name="Test", joint_names=["j1"] * 6)

    def test_rejects_negative_weight(self):
        with pytest.raises(ValidationError, match="non-negative"):
            ArmConfig(
                name="Test",
                joint_names=JOINTS,
                joint_weights=[0.4, -0.8, 0.5, 0.2, 0.2, 0.5],
            )

    def test_rejects_limit_for_unknown_joint(self):
        with pytest.raises(ValidationError, match="unknown joints"):
            ArmConfig(
                name="Test",
                joint_names=JOINTS,
                joint_limits={"elbow": {"min": -1.0, "max": 1.0}},
            )

    def test_limit_table_from_config(self):
        """Test limit table ordering follows joint_names."""
        config = ArmConfig(
            name="Test",
            joint_names=JOINTS,
            joint_limits={name: {"min": -i, "max": i} for i, name in enumerate(JOINTS, 1)},
        )
        table = config.limit_table()
        assert table[0] == JointLimit(-1.0, 1.0)
        assert table[5] == JointLimit(-6.0, 6.0)

    def test_limit_table_config_overrides_model(self):
        """Config limits override limits read from the robot model."""
        config = ArmConfig(
            name="Test",
            joint_names=JOINTS,
            joint_limits={"j1": {"min": -0.5}},
        )
        model_limits = {name: (-3.0, 3.0) for name in JOINTS}
        table = config.limit_table(model_limits)
        assert table[0] == JointLimit(-0.5, 3.0)
        assert table[1] == JointLimit(-3.0, 3.0)

    def test_limit_table_missing_limit(self):
        config = ArmConfig(name="Test", joint_names=JOINTS)
        with pytest.raises(ConfigurationError, match="No joint limit"):
            config.limit_table()

    def test_limit_table_inverted_range(self):
        config = ArmConfig(
            name="Test",
            joint_names=JOINTS,
            joint_limits={name: {"min": 1.0, "max": -1.0} for name in JOINTS},
        )
        with pytest.raises(ConfigurationError, match="Invalid joint limit"):
            config.limit_table()


class TestJointConstraint:
    """Tests for JointConstraint model."""

    def test_tolerance_band_is_inclusive(self):
        constraint = JointConstraint(
            joint_name="j6", position=0.0, tolerance_above=0.5, tolerance_below=0.25
        )
        assert constraint.is_satisfied(0.5)
        assert constraint.is_satisfied(-0.25)
        assert not constraint.is_satisfied(0.51)
        assert not constraint.is_satisfied(-0.3)

    def test_negative_tolerance_rejected(self):
        with pytest.raises(ValidationError):
            JointConstraint(joint_name="j6", position=0.0, tolerance_above=-1.0)


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_init_with_valid_dir(self, sample_config_dir):
        manager = ConfigManager(sample_config_dir)
        assert manager.config_dir == sample_config_dir

    def test_init_with_invalid_dir(self, temp_dir):
        with pytest.raises(ConfigurationError):
            ConfigManager(temp_dir / "nonexistent")

    def test_list_arms(self, sample_config_dir):
        manager = ConfigManager(sample_config_dir)
        assert manager.list_arms() == ["test_arm"]

    def test_get_arm(self, sample_config_dir):
        """Test sections are merged into one ArmConfig."""
        manager = ConfigManager(sample_config_dir)

        arm = manager.get_arm("test_arm")
        assert arm.name == "Test Arm"
        assert arm.manufacturer == "Test Manufacturer"
        assert arm.tip_frame == "link_6"
        assert arm.joint_names[0] == "joint_1"
        assert arm.joint_limits["joint_1"] == {"min": -1.0, "max": 1.0}
        assert arm.constraints[0].joint_name == "joint_6"

    def test_get_arm_not_found(self, sample_config_dir):
        manager = ConfigManager(sample_config_dir)

        with pytest.raises(ConfigurationError) as exc_info:
            manager.get_arm("nonexistent")

        assert exc_info.value.details["available"] == ["test_arm"]

    def test_invalid_arm_file(self, sample_config_dir):
        """An arm file with the wrong joint count fails with ConfigurationError."""
        (sample_config_dir / "arms" / "broken.yaml").write_text(
            "arm:\n  name: Broken\nkinematics:\n  joint_names: [a, b]\n"
        )
        manager = ConfigManager(sample_config_dir)

        with pytest.raises(ConfigurationError, match="Invalid arm config") as exc_info:
            manager.load()
        assert "error" in exc_info.value.details

    def test_file_without_arm_section(self, temp_dir):
        path = temp_dir / "empty.yaml"
        path.write_text("robot:\n  name: nope\n")

        with pytest.raises(ConfigurationError, match="no 'arm' section"):
            ConfigManager.load_file(path)

    def test_malformed_yaml(self, temp_dir):
        path = temp_dir / "bad.yaml"
        path.write_text("arm: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Failed to read"):
            ConfigManager.load_file(path)
