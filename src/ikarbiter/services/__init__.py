"""
Services - IK arbitration and forward kinematics entry points.
"""

from ikarbiter.services.arbitration import IKArbitrationService, seed_posture
from ikarbiter.services.forward import ForwardKinematicsResolver
from ikarbiter.services.messages import (
    ConstraintAwareIKRequest,
    FKRequest,
    FKResponse,
    IKRequest,
    IKResponse,
    LinkPoseResult,
)

__all__ = [
    "IKArbitrationService",
    "ForwardKinematicsResolver",
    "seed_posture",
    "IKRequest",
    "ConstraintAwareIKRequest",
    "IKResponse",
    "FKRequest",
    "FKResponse",
    "LinkPoseResult",
]
