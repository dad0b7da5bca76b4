"""
Four-Bar Linkage Transmission
=============================

Two actuators driving two serial joints where the second joint is actuated
through a four-bar linkage mounted on the first link. The first actuator
moves the first joint directly; because the linkage rides on that joint,
the second joint sees its own actuator's motion relative to the first
joint: rotating the first joint alone moves the second the opposite way.

Mathematical Background:

    Actuator to joint:
        τ_j1 = n_j1 n_a1 τ_a1
        τ_j2 = n_j2 (n_a2 τ_a2 - n_j1 n_a1 τ_a1)

        ẋ_j1 = ẋ_a1 / (n_j1 n_a1)
        ẋ_j2 = (ẋ_a2 / n_a2 - ẋ_a1 / (n_j1 n_a1)) / n_j2

        x_j  = velocity map applied to x_a, plus x_off

    Joint to actuator (exact inverse of the above):
        τ_a1 = τ_j1 / (n_j1 n_a1)
        τ_a2 = (τ_j1 + τ_j2 / n_j2) / n_a2

        ẋ_a1 = n_j1 n_a1 ẋ_j1
        ẋ_a2 = n_a2 (ẋ_j1 + n_j2 ẋ_j2)

        x_a  = velocity map applied to (x_j - x_off)

    The coupling matrices are lower-triangular, so each direction is
    solved by forward substitution without any iteration.

Author: Robot HW Interfaces Team
License: MIT
"""

from __future__ import annotations

import logging
from typing import Sequence

from .transmission import FloatArray, Transmission, ValueVector, validated_vector

logger = logging.getLogger(__name__)


class FourBarLinkageTransmission(Transmission):
    """
    Two-actuator, two-joint four-bar linkage.

    All four reduction ratios must be non-zero; offsets are free.
    """

    def __init__(
        self,
        actuator_reduction: Sequence[float],
        joint_reduction: Sequence[float],
        joint_offset: Sequence[float] = (0.0, 0.0)
    ) -> None:
        owner = type(self).__name__
        self._actuator_reduction = validated_vector(
            actuator_reduction, 2, "actuator reduction", owner, nonzero=True
        )
        self._joint_reduction = validated_vector(
            joint_reduction, 2, "joint reduction", owner, nonzero=True
        )
        self._joint_offset = validated_vector(joint_offset, 2, "joint offset", owner)
        super().__init__()

        logger.info(
            f"{owner}: actuator_reduction={self._actuator_reduction.tolist()}, "
            f"joint_reduction={self._joint_reduction.tolist()}, "
            f"joint_offset={self._joint_offset.tolist()}"
        )

    def num_actuators(self) -> int:
        return 2

    def num_joints(self) -> int:
        return 2

    @property
    def actuator_reduction(self) -> FloatArray:
        return self._actuator_reduction.copy()

    @property
    def joint_reduction(self) -> FloatArray:
        return self._joint_reduction.copy()

    @property
    def joint_offset(self) -> FloatArray:
        return self._joint_offset.copy()

    def _flow_to_joint(self, actuator: ValueVector, joint: ValueVector) -> None:
        ar, jr = self._actuator_reduction, self._joint_reduction
        j1 = actuator[0] / (jr[0] * ar[0])
        a2 = actuator[1] / ar[1]
        joint[0] = j1
        joint[1] = (a2 - j1) / jr[1]

    def _flow_to_actuator(self, joint: ValueVector, actuator: ValueVector) -> None:
        ar, jr = self._actuator_reduction, self._joint_reduction
        j1 = joint[0]
        j2 = joint[1]
        actuator[0] = j1 * jr[0] * ar[0]
        actuator[1] = (j1 + j2 * jr[1]) * ar[1]

    def actuator_to_joint_effort(self, actuator_eff: ValueVector, joint_eff: ValueVector) -> None:
        self._check_sizes("actuator_to_joint_effort", actuator_eff, joint_eff)
        ar, jr = self._actuator_reduction, self._joint_reduction
        j1 = jr[0] * ar[0] * actuator_eff[0]
        a2 = ar[1] * actuator_eff[1]
        joint_eff[0] = j1
        joint_eff[1] = jr[1] * (a2 - j1)

    def actuator_to_joint_velocity(self, actuator_vel: ValueVector, joint_vel: ValueVector) -> None:
        self._check_sizes("actuator_to_joint_velocity", actuator_vel, joint_vel)
        self._flow_to_joint(actuator_vel, joint_vel)

    def actuator_to_joint_position(self, actuator_pos: ValueVector, joint_pos: ValueVector) -> None:
        self._check_sizes("actuator_to_joint_position", actuator_pos, joint_pos)
        self._flow_to_joint(actuator_pos, joint_pos)
        joint_pos[0] += self._joint_offset[0]
        joint_pos[1] += self._joint_offset[1]

    def joint_to_actuator_effort(self, joint_eff: ValueVector, actuator_eff: ValueVector) -> None:
        self._check_sizes("joint_to_actuator_effort", actuator_eff, joint_eff)
        ar, jr = self._actuator_reduction, self._joint_reduction
        j1 = joint_eff[0]
        j2 = joint_eff[1] / jr[1]
        actuator_eff[0] = j1 / (jr[0] * ar[0])
        actuator_eff[1] = (j1 + j2) / ar[1]

    def joint_to_actuator_velocity(self, joint_vel: ValueVector, actuator_vel: ValueVector) -> None:
        self._check_sizes("joint_to_actuator_velocity", actuator_vel, joint_vel)
        self._flow_to_actuator(joint_vel, actuator_vel)

    def joint_to_actuator_position(self, joint_pos: ValueVector, actuator_pos: ValueVector) -> None:
        self._check_sizes("joint_to_actuator_position", actuator_pos, joint_pos)
        self._scratch[0] = joint_pos[0] - self._joint_offset[0]
        self._scratch[1] = joint_pos[1] - self._joint_offset[1]
        self._flow_to_actuator(self._scratch, actuator_pos)
