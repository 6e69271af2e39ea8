"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest
from compas.geometry import Frame

from ikarbiter.core.types import JointLimit
from ikarbiter.kinematics.frames import FrameTree
from ikarbiter.motion.collision import ConfigurationValidator
from ikarbiter.motion.limits import JointLimitValidator
from ikarbiter.motion.ranking import SolutionRanker
from ikarbiter.motion.scoring import WeightedDistanceScorer


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config_dir(temp_dir):
    """Create a sample configuration directory with one arm."""
    config_dir = temp_dir / "config"
    (config_dir / "arms").mkdir(parents=True)

    arm_config = """
arm:
  name: "Test Arm"
  manufacturer: "Test Manufacturer"

kinematics:
  root_frame: "base_link"
  tip_frame: "link_6"
  joint_names: [joint_1, joint_2, joint_3, joint_4, joint_5, joint_6]

limits:
  joints:
    joint_1: {min: -1.0, max: 1.0}
    joint_2: {min: -2.0, max: 2.0}
    joint_3: {min: -2.0, max: 2.0}
    joint_4: {min: -3.0, max: 3.0}
    joint_5: {min: -3.0, max: 3.0}
    joint_6: {min: -3.0, max: 3.0}

scoring:
  joint_weights: [0.4, 0.8, 0.5, 0.2, 0.2, 0.5]

constraints:
  - joint_name: joint_6
    position: 0.0
    tolerance_above: 1.0
    tolerance_below: 1.0
"""
    (config_dir / "arms" / "test_arm.yaml").write_text(arm_config)
    return config_dir


@pytest.fixture
def limits():
    """Joint 1 limited to [-1, 1], the rest to [-3, 3]."""
    return (JointLimit(-1.0, 1.0),) + (JointLimit(-3.0, 3.0),) * 5


@pytest.fixture
def ranker(limits):
    """Ranker wired with the default scoring weights."""
    return SolutionRanker(
        JointLimitValidator(limits),
        ConfigurationValidator(),
        WeightedDistanceScorer(),
    )


@pytest.fixture
def frame_tree():
    """World with the arm base lifted 0.5 m and a camera 1 m along x."""
    tree = FrameTree("world")
    tree.add_frame("base_link", "world", Frame([0, 0, 0.5], [1, 0, 0], [0, 1, 0]))
    tree.add_frame("camera", "world", Frame([1, 0, 0], [1, 0, 0], [0, 1, 0]))
    return tree
