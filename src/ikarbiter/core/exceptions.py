"""
Custom exceptions for ikarbiter.

All ikarbiter exceptions inherit from IKArbiterError for easy catching.
Per-candidate validation failures are not exceptions: they are aggregated
into ranking verdicts. Only malformed requests surface as errors.
"""

from typing import Any


class IKArbiterError(Exception):
    """Base exception for all ikarbiter errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(IKArbiterError):
    """Raised when configuration is invalid or missing."""

    pass


class KinematicsError(IKArbiterError):
    """Raised when a kinematics request cannot be served."""

    pass


class FrameTransformError(KinematicsError):
    """Raised when a pose cannot be expressed in the requested frame."""

    def __init__(
        self,
        message: str,
        source_frame: str | None = None,
        target_frame: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.source_frame = source_frame
        self.target_frame = target_frame


class ChainResolutionError(KinematicsError):
    """Raised when a name cannot be resolved against the kinematic chain."""

    def __init__(
        self,
        message: str,
        name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.name = name


class LinkNotFoundError(ChainResolutionError):
    """Raised when a link is not part of the kinematic chain."""

    pass


class JointNameNotFoundError(ChainResolutionError):
    """Raised when a joint name is not part of the arm."""

    pass


class ChainEvaluationError(KinematicsError):
    """Raised when forward kinematics evaluation fails."""

    pass


class SolverError(KinematicsError):
    """Raised when the analytic solver backend misbehaves."""

    pass


class CollisionOracleError(IKArbiterError):
    """Raised when the collision backend fails to answer a query."""

    pass
