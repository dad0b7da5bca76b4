"""
Differential Transmission
=========================

Two actuators coupled to two joints through a differential mechanism
(e.g. a wrist where both motors move together for pitch and in opposition
for roll).

Mathematical Background:

    Actuator to joint:
        τ_j1 = n_j1 (n_a1 τ_a1 + n_a2 τ_a2)
        τ_j2 = n_j2 (n_a1 τ_a1 - n_a2 τ_a2)

        ẋ_j1 = (ẋ_a1 / n_a1 + ẋ_a2 / n_a2) / (2 n_j1)
        ẋ_j2 = (ẋ_a1 / n_a1 - ẋ_a2 / n_a2) / (2 n_j2)

        x_j  = velocity map applied to x_a, plus x_off

    Joint to actuator (exact inverse of the above):
        τ_a1 = (τ_j1 / n_j1 + τ_j2 / n_j2) / (2 n_a1)
        τ_a2 = (τ_j1 / n_j1 - τ_j2 / n_j2) / (2 n_a2)

        ẋ_a1 = n_a1 (n_j1 ẋ_j1 + n_j2 ẋ_j2)
        ẋ_a2 = n_a2 (n_j1 ẋ_j1 - n_j2 ẋ_j2)

        x_a  = velocity map applied to (x_j - x_off)

    The coupling is a sum/difference matrix scaled by diagonal reductions
    on each side, so the inverse is closed-form. The mapping conserves
    power: Σ τ_a ẋ_a = Σ τ_j ẋ_j.

Reduction ratios may take any non-zero real value. Magnitudes above one
reduce velocity and amplify effort; negative values flip direction and are
the way to match this sign convention to a given mechanical design.

Author: Robot HW Interfaces Team
License: MIT
"""

from __future__ import annotations

import logging
from typing import Sequence

from .transmission import FloatArray, Transmission, ValueVector, validated_vector

logger = logging.getLogger(__name__)


class DifferentialTransmission(Transmission):
    """
    Two-actuator, two-joint differential.

    Example:
        >>> trans = DifferentialTransmission([2.0, 2.0], [1.0, 1.0])
        >>> joint_eff = np.zeros(2)
        >>> trans.actuator_to_joint_effort(np.array([3.0, 1.0]), joint_eff)
        >>> joint_eff
        array([8., 4.])
    """

    def __init__(
        self,
        actuator_reduction: Sequence[float],
        joint_reduction: Sequence[float],
        joint_offset: Sequence[float] = (0.0, 0.0)
    ) -> None:
        """
        Args:
            actuator_reduction: Reduction ratio of each actuator
            joint_reduction: Reduction ratio of each joint
            joint_offset: Joint position offsets used in the position maps

        Raises:
            TransmissionConfigError: If a vector does not have size 2 or a
                reduction ratio is zero
        """
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

    # =========================================================================
    # Flow maps (velocity and offset-free position)
    # =========================================================================

    def _flow_to_joint(self, actuator: ValueVector, joint: ValueVector) -> None:
        ar, jr = self._actuator_reduction, self._joint_reduction
        a1 = actuator[0] / ar[0]
        a2 = actuator[1] / ar[1]
        joint[0] = (a1 + a2) / (2.0 * jr[0])
        joint[1] = (a1 - a2) / (2.0 * jr[1])

    def _flow_to_actuator(self, joint: ValueVector, actuator: ValueVector) -> None:
        ar, jr = self._actuator_reduction, self._joint_reduction
        j1 = joint[0] * jr[0]
        j2 = joint[1] * jr[1]
        actuator[0] = (j1 + j2) * ar[0]
        actuator[1] = (j1 - j2) * ar[1]

    # =========================================================================
    # Actuator to joint
    # =========================================================================

    def actuator_to_joint_effort(self, actuator_eff: ValueVector, joint_eff: ValueVector) -> None:
        self._check_sizes("actuator_to_joint_effort", actuator_eff, joint_eff)
        ar, jr = self._actuator_reduction, self._joint_reduction
        a1 = actuator_eff[0] * ar[0]
        a2 = actuator_eff[1] * ar[1]
        joint_eff[0] = jr[0] * (a1 + a2)
        joint_eff[1] = jr[1] * (a1 - a2)

    def actuator_to_joint_velocity(self, actuator_vel: ValueVector, joint_vel: ValueVector) -> None:
        self._check_sizes("actuator_to_joint_velocity", actuator_vel, joint_vel)
        self._flow_to_joint(actuator_vel, joint_vel)

    def actuator_to_joint_position(self, actuator_pos: ValueVector, joint_pos: ValueVector) -> None:
        self._check_sizes("actuator_to_joint_position", actuator_pos, joint_pos)
        self._flow_to_joint(actuator_pos, joint_pos)   # Apply flow map...
        joint_pos[0] += self._joint_offset[0]          # ...and add integration constant
        joint_pos[1] += self._joint_offset[1]          # ...to each joint

    # =========================================================================
    # Joint to actuator
    # =========================================================================

    def joint_to_actuator_effort(self, joint_eff: ValueVector, actuator_eff: ValueVector) -> None:
        self._check_sizes("joint_to_actuator_effort", actuator_eff, joint_eff)
        ar, jr = self._actuator_reduction, self._joint_reduction
        j1 = joint_eff[0] / jr[0]
        j2 = joint_eff[1] / jr[1]
        actuator_eff[0] = (j1 + j2) / (2.0 * ar[0])
        actuator_eff[1] = (j1 - j2) / (2.0 * ar[1])

    def joint_to_actuator_velocity(self, joint_vel: ValueVector, actuator_vel: ValueVector) -> None:
        self._check_sizes("joint_to_actuator_velocity", actuator_vel, joint_vel)
        self._flow_to_actuator(joint_vel, actuator_vel)

    def joint_to_actuator_position(self, joint_pos: ValueVector, actuator_pos: ValueVector) -> None:
        self._check_sizes("joint_to_actuator_position", actuator_pos, joint_pos)
        # Remove integration constant in the workspace vector, then apply the flow map
        self._scratch[0] = joint_pos[0] - self._joint_offset[0]
        self._scratch[1] = joint_pos[1] - self._joint_offset[1]
        self._flow_to_actuator(self._scratch, actuator_pos)
