"""
Core module - Shared configuration, exceptions, logging and value types.
"""

from ikarbiter.core.config import ArmConfig, ConfigManager, JointConstraint
from ikarbiter.core.exceptions import (
    ChainEvaluationError,
    ChainResolutionError,
    CollisionOracleError,
    ConfigurationError,
    FrameTransformError,
    IKArbiterError,
    JointNameNotFoundError,
    KinematicsError,
    LinkNotFoundError,
    SolverError,
)
from ikarbiter.core.types import (
    CandidateSolution,
    JointLimit,
    JointState,
    KinematicSolverInfo,
    PoseStamped,
    RankedResult,
    RankingFailure,
    ResultCode,
    ScoredCandidate,
    ValidationVerdict,
)

__all__ = [
    # Config
    "ArmConfig",
    "ConfigManager",
    "JointConstraint",
    # Exceptions
    "IKArbiterError",
    "ConfigurationError",
    "KinematicsError",
    "FrameTransformError",
    "ChainResolutionError",
    "LinkNotFoundError",
    "JointNameNotFoundError",
    "ChainEvaluationError",
    "SolverError",
    "CollisionOracleError",
    # Types
    "CandidateSolution",
    "JointLimit",
    "JointState",
    "KinematicSolverInfo",
    "PoseStamped",
    "RankedResult",
    "RankingFailure",
    "ResultCode",
    "ScoredCandidate",
    "ValidationVerdict",
]
