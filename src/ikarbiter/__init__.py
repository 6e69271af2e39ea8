"""
ikarbiter - IK solution arbitration for 6-DOF manipulators.

Takes the candidate set of a closed-form IK solver, discards candidates that
violate joint limits, collide or break goal constraints, and returns the one
closest to the arm's current posture.
"""

__version__ = "0.1.0"
__author__ = "ikarbiter Contributors"

from ikarbiter.core.config import ArmConfig, ConfigManager
from ikarbiter.motion.ranking import SolutionRanker
from ikarbiter.services.arbitration import IKArbitrationService
from ikarbiter.services.forward import ForwardKinematicsResolver

__all__ = [
    "__version__",
    "ArmConfig",
    "ConfigManager",
    "SolutionRanker",
    "IKArbitrationService",
    "ForwardKinematicsResolver",
]
