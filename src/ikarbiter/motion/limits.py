"""
Joint limit validation.
"""

from typing import Sequence

from ikarbiter.core.logging import get_logger
from ikarbiter.core.types import JointLimit, JointVector, ValidationVerdict, check_length

logger = get_logger(__name__)


class JointLimitValidator:
    """
    Checks a joint vector against a static per-joint limit table.

    Ranges are inclusive: a value exactly at ``min_position`` or
    ``max_position`` is accepted. One joint out of range rejects the whole
    vector.
    """

    def __init__(self, limits: Sequence[JointLimit]) -> None:
        self.limits = tuple(limits)

    def first_violation(self, joints: JointVector) -> int | None:
        """Index of the first joint outside its range, or None."""
        check_length(joints, len(self.limits))
        for index, (value, limit) in enumerate(zip(joints, self.limits)):
            if not limit.contains(value):
                return index
        return None

    def validate(self, joints: JointVector) -> ValidationVerdict:
        index = self.first_violation(joints)
        if index is None:
            return ValidationVerdict.VALID

        logger.debug(
            "joint_limit_violated",
            joint_index=index,
            value=joints[index],
            min=self.limits[index].min_position,
            max=self.limits[index].max_position,
        )
        return ValidationVerdict.JOINT_LIMIT_VIOLATED
