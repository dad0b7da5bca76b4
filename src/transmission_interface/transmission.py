"""
Transmission Contract
=====================

Abstract mapping between actuator space and joint space.

A transmission converts effort, velocity and position in both directions:

    State direction (once per sensing cycle):
        actuator_to_joint_effort / _velocity / _position

    Command direction (once per command cycle):
        joint_to_actuator_effort / _velocity / _position

Arguments are fixed-length mutable sequences of floats, one entry per
actuator or joint: a ``RefVector`` over driver storage, or any 1-D float
buffer such as a numpy array. Each conversion writes only its output
argument.

Conventions shared by every variant:
    - Input and output lengths must equal ``num_actuators()`` and
      ``num_joints()``; anything else raises ``ContractViolation``.
    - All inputs are read before any output is written, so calling a
      conversion with the output aliasing the input is well defined.
    - Position maps are the velocity maps plus the joint offset, which is
      removed in a private scratch buffer on the way back to actuators.
    - No unit conversion, clamping or filtering takes place.

Author: Robot HW Interfaces Team
License: MIT
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import MutableSequence, Sequence, Union

import numpy as np
from numpy.typing import NDArray

from .exceptions import ContractViolation, TransmissionConfigError

logger = logging.getLogger(__name__)

FloatArray = NDArray[np.floating]
ValueVector = MutableSequence[float]


def validated_vector(
    values: Union[float, Sequence[float]],
    size: int,
    label: str,
    owner: str,
    nonzero: bool = False
) -> FloatArray:
    """
    Coerce transmission parameters to a float vector of fixed size.

    Raises:
        TransmissionConfigError: On wrong size, or on a zero entry when
            ``nonzero`` is set
    """
    try:
        vector = np.atleast_1d(np.asarray(values, dtype=np.float64))
    except (TypeError, ValueError) as e:
        raise TransmissionConfigError(
            f"{label} of a {owner} must be numeric, got {values!r}"
        ) from e
    if vector.ndim != 1 or vector.shape[0] != size:
        raise TransmissionConfigError(
            f"{label} vector of a {owner} must have size {size}, got {vector.tolist()}"
        )
    if nonzero and np.any(vector == 0.0):
        raise TransmissionConfigError(
            f"{owner} reduction ratios cannot be zero, got {label} {vector.tolist()}"
        )
    return vector


class Transmission(ABC):
    """
    Kinematic mapping between actuator and joint space.

    Subclasses provide ``num_actuators``, ``num_joints`` and the six
    conversions. The only mutable state is the scratch buffer used by
    ``joint_to_actuator_position``; a transmission instance must therefore
    not be shared between threads.
    """

    def __init__(self) -> None:
        self._scratch = np.zeros(self.num_joints())

    @abstractmethod
    def num_actuators(self) -> int:
        """Number of actuators this transmission drives."""

    @abstractmethod
    def num_joints(self) -> int:
        """Number of joints this transmission drives."""

    # State direction

    @abstractmethod
    def actuator_to_joint_effort(self, actuator_eff: ValueVector, joint_eff: ValueVector) -> None:
        pass

    @abstractmethod
    def actuator_to_joint_velocity(self, actuator_vel: ValueVector, joint_vel: ValueVector) -> None:
        pass

    @abstractmethod
    def actuator_to_joint_position(self, actuator_pos: ValueVector, joint_pos: ValueVector) -> None:
        pass

    # Command direction

    @abstractmethod
    def joint_to_actuator_effort(self, joint_eff: ValueVector, actuator_eff: ValueVector) -> None:
        pass

    @abstractmethod
    def joint_to_actuator_velocity(self, joint_vel: ValueVector, actuator_vel: ValueVector) -> None:
        pass

    @abstractmethod
    def joint_to_actuator_position(self, joint_pos: ValueVector, actuator_pos: ValueVector) -> None:
        pass

    def _check_sizes(
        self,
        conversion: str,
        actuator_values: Sequence[float],
        joint_values: Sequence[float]
    ) -> None:
        n_act, n_jnt = self.num_actuators(), self.num_joints()
        if len(actuator_values) != n_act or len(joint_values) != n_jnt:
            msg = (
                f"{type(self).__name__}.{conversion}: expected {n_act} actuator and "
                f"{n_jnt} joint values, got {len(actuator_values)} and {len(joint_values)}"
            )
            logger.critical(msg)
            raise ContractViolation(msg)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(actuators={self.num_actuators()}, "
            f"joints={self.num_joints()})"
        )
