"""
Simple Transmission
===================

One actuator driving one joint through a fixed reduction (gears, belts,
lead screws).

    Actuator to joint:              Joint to actuator:
        τ_j = n · τ_a                   τ_a = τ_j / n
        ẋ_j = ẋ_a / n                   ẋ_a = n · ẋ_j
        x_j = x_a / n + x_off           x_a = n · (x_j - x_off)

where ``n`` is the reduction ratio (non-zero; negative flips direction)
and ``x_off`` the joint position offset between actuator and joint zeros,
expressed in joint coordinates.

Author: Robot HW Interfaces Team
License: MIT
"""

from __future__ import annotations

from .transmission import Transmission, ValueVector, validated_vector


class SimpleTransmission(Transmission):
    """
    1:1 actuator-to-joint reduction.

    Example:
        >>> trans = SimpleTransmission(reduction=10.0, joint_offset=0.5)
        >>> joint_pos = np.zeros(1)
        >>> trans.actuator_to_joint_position(np.array([20.0]), joint_pos)
        >>> joint_pos
        array([2.5])
    """

    def __init__(self, reduction: float, joint_offset: float = 0.0) -> None:
        """
        Args:
            reduction: Reduction ratio, any non-zero real
            joint_offset: Joint position offset

        Raises:
            TransmissionConfigError: If ``reduction`` is zero
        """
        owner = type(self).__name__
        self._reduction = float(validated_vector(reduction, 1, "reduction", owner, nonzero=True)[0])
        self._joint_offset = float(validated_vector(joint_offset, 1, "joint offset", owner)[0])
        super().__init__()

    def num_actuators(self) -> int:
        return 1

    def num_joints(self) -> int:
        return 1

    @property
    def reduction(self) -> float:
        return self._reduction

    @property
    def joint_offset(self) -> float:
        return self._joint_offset

    def actuator_to_joint_effort(self, actuator_eff: ValueVector, joint_eff: ValueVector) -> None:
        self._check_sizes("actuator_to_joint_effort", actuator_eff, joint_eff)
        joint_eff[0] = actuator_eff[0] * self._reduction

    def actuator_to_joint_velocity(self, actuator_vel: ValueVector, joint_vel: ValueVector) -> None:
        self._check_sizes("actuator_to_joint_velocity", actuator_vel, joint_vel)
        joint_vel[0] = actuator_vel[0] / self._reduction

    def actuator_to_joint_position(self, actuator_pos: ValueVector, joint_pos: ValueVector) -> None:
        self._check_sizes("actuator_to_joint_position", actuator_pos, joint_pos)
        joint_pos[0] = actuator_pos[0] / self._reduction + self._joint_offset

    def joint_to_actuator_effort(self, joint_eff: ValueVector, actuator_eff: ValueVector) -> None:
        self._check_sizes("joint_to_actuator_effort", actuator_eff, joint_eff)
        actuator_eff[0] = joint_eff[0] / self._reduction

    def joint_to_actuator_velocity(self, joint_vel: ValueVector, actuator_vel: ValueVector) -> None:
        self._check_sizes("joint_to_actuator_velocity", actuator_vel, joint_vel)
        actuator_vel[0] = joint_vel[0] * self._reduction

    def joint_to_actuator_position(self, joint_pos: ValueVector, actuator_pos: ValueVector) -> None:
        self._check_sizes("joint_to_actuator_position", actuator_pos, joint_pos)
        self._scratch[0] = joint_pos[0] - self._joint_offset
        actuator_pos[0] = self._scratch[0] * self._reduction
