"""
Tests for the compas_robots-backed chain evaluator.
"""

from unittest.mock import MagicMock, patch

import pytest
from compas.geometry import Frame
from compas_robots import RobotModel

from ikarbiter.core.exceptions import (
    ChainEvaluationError,
    ConfigurationError,
    JointNameNotFoundError,
    LinkNotFoundError,
)
from ikarbiter.kinematics.chain import CompasChainEvaluator

LINKS = ["base_link", "link_1", "link_2", "link_3", "link_4", "link_5", "link_6", "tool0"]


def _named(name, **attrs):
    item = MagicMock()
    item.name = name
    for key, value in attrs.items():
        setattr(item, key, value)
    return item


@pytest.fixture
def mock_robot_model():
    """Six revolute joints plus a fixed tool flange."""
    model = MagicMock(spec=RobotModel)

    joints = []
    for i in range(1, 7):
        joint = _named(f"joint_{i}")
        joint.is_configurable.return_value = True
        joint.limit = MagicMock(lower=-i * 0.5, upper=i * 0.5)
        joints.append(joint)

    flange = _named("flange")
    flange.is_configurable.return_value = False
    joints.append(flange)

    model.iter_link_chain.side_effect = lambda start, end: iter(_named(n) for n in LINKS)
    model.iter_joint_chain.side_effect = lambda start, end: iter(joints)
    model.forward_kinematics.return_value = Frame([0.1, 0.2, 0.3], [1, 0, 0], [0, 1, 0])
    return model


@pytest.fixture
def chain(mock_robot_model):
    return CompasChainEvaluator(mock_robot_model, "base_link", "tool0")


class TestCompasChainEvaluator:
    """Tests for CompasChainEvaluator."""

    def test_names(self, chain):
        assert chain.link_names == tuple(LINKS)
        assert chain.joint_names == tuple(f"joint_{i}" for i in range(1, 7))

    def test_unreachable_tip(self, mock_robot_model):
        with pytest.raises(ConfigurationError, match="No kinematic chain"):
            CompasChainEvaluator(mock_robot_model, "base_link", "camera_link")

    def test_segment_index(self, chain):
        assert chain.segment_index_for_link("base_link") == 0
        assert chain.segment_index_for_link("tool0") == 7

    def test_unknown_link(self, chain):
        with pytest.raises(LinkNotFoundError) as exc_info:
            chain.segment_index_for_link("gripper")
        assert exc_info.value.name == "gripper"

    def test_joint_index(self, chain):
        assert chain.joint_index_for_name("joint_3") == 2
        with pytest.raises(JointNameNotFoundError):
            chain.joint_index_for_name("flange")

    def test_joint_limits_from_model(self, chain):
        limits = chain.joint_limits()
        assert limits["joint_1"] == (-0.5, 0.5)
        assert limits["joint_6"] == (-3.0, 3.0)
        assert "flange" not in limits

    def test_forward_kinematics(self, chain, mock_robot_model):
        frame = chain.forward_kinematics((0.0,) * 6, 7)

        assert list(frame.point) == pytest.approx([0.1, 0.2, 0.3])
        config, = mock_robot_model.forward_kinematics.call_args.args
        assert mock_robot_model.forward_kinematics.call_args.kwargs == {"link_name": "tool0"}
        assert list(config.joint_values) == [0.0] * 6

    def test_forward_kinematics_bad_segment(self, chain):
        with pytest.raises(ChainEvaluationError, match="out of range"):
            chain.forward_kinematics((0.0,) * 6, 8)

    def test_forward_kinematics_backend_failure(self, chain, mock_robot_model):
        mock_robot_model.forward_kinematics.side_effect = KeyError("link_6")
        with pytest.raises(ChainEvaluationError, match="link_2"):
            chain.forward_kinematics((0.0,) * 6, 2)

    def test_from_urdf_missing(self):
        with pytest.raises(ConfigurationError, match="URDF file not found"):
            CompasChainEvaluator.from_urdf("/nonexistent/arm.urdf", "base_link", "tool0")

    @patch("ikarbiter.kinematics.chain.RobotModel.from_urdf_file")
    def test_from_urdf(self, mock_from_urdf, tmp_path, mock_robot_model):
        urdf_file = tmp_path / "arm.urdf"
        urdf_file.write_text("<robot></robot>")
        mock_from_urdf.return_value = mock_robot_model

        chain = CompasChainEvaluator.from_urdf(urdf_file, "base_link", "tool0")

        assert chain.model is mock_robot_model
        mock_from_urdf.assert_called_once_with(str(urdf_file))
