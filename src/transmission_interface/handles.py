"""
Transmission Handles
====================

Bind a transmission to the actuator-space and joint-space storage it maps
between, so a control loop can propagate values with one call per cycle.

    ActuatorData ──┐                    ┌── JointData
    (RefVectors    │   Transmission     │   (RefVectors
     over driver   ├──────────────────► │    or buffers read
     storage)      │   propagate()      │    by controllers)
                   └────────────────────┘

State-direction handles map actuator → joint; command-direction handles map
joint → actuator. Multi-quantity handles map every quantity populated on
both sides; single-quantity handles require theirs.

Author: Robot HW Interfaces Team
License: MIT
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .exceptions import TransmissionConfigError
from .transmission import Transmission, ValueVector

logger = logging.getLogger(__name__)

QUANTITIES = ("position", "velocity", "effort")


@dataclass
class ActuatorData:
    """
    Actuator-space vectors, one entry per actuator.

    Attributes:
        position: Actuator positions
        velocity: Actuator velocities
        effort: Actuator efforts
    """
    position: Optional[ValueVector] = None
    velocity: Optional[ValueVector] = None
    effort: Optional[ValueVector] = None


@dataclass
class JointData:
    """
    Joint-space vectors, one entry per joint.

    Attributes:
        position: Joint positions
        velocity: Joint velocities
        effort: Joint efforts
    """
    position: Optional[ValueVector] = None
    velocity: Optional[ValueVector] = None
    effort: Optional[ValueVector] = None


class TransmissionHandle:
    """
    Named binding of a transmission to actuator and joint data.

    Subclasses choose the direction and the quantities they map.

    Raises (at construction):
        TransmissionConfigError: On an empty name, missing transmission,
            missing required data, no quantity populated on both sides, or
            a populated vector whose length does not match the transmission
    """

    quantities: Tuple[str, ...] = QUANTITIES
    to_joint: bool = True
    require_all: bool = False

    def __init__(
        self,
        name: str,
        transmission: Transmission,
        actuator_data: ActuatorData,
        joint_data: JointData
    ) -> None:
        kind = type(self).__name__
        if not name:
            raise TransmissionConfigError(f"Cannot create {kind} with an empty name")
        if transmission is None:
            raise TransmissionConfigError(f"Cannot create {kind} '{name}': no transmission")

        self._name = name
        self._transmission = transmission
        self._actuator_data = actuator_data
        self._joint_data = joint_data
        self._bindings: List[Tuple[Callable[[ValueVector, ValueVector], None], ValueVector, ValueVector]] = []

        for quantity in self.quantities:
            act = getattr(actuator_data, quantity)
            jnt = getattr(joint_data, quantity)
            if act is None or jnt is None:
                if self.require_all:
                    raise TransmissionConfigError(
                        f"Cannot create {kind} '{name}': {quantity} data missing "
                        f"on the {'actuator' if act is None else 'joint'} side"
                    )
                continue

            if len(act) != transmission.num_actuators() or len(jnt) != transmission.num_joints():
                raise TransmissionConfigError(
                    f"Cannot create {kind} '{name}': {quantity} data sizes "
                    f"({len(act)} actuators, {len(jnt)} joints) do not match "
                    f"transmission ({transmission.num_actuators()}, {transmission.num_joints()})"
                )

            if self.to_joint:
                conversion = getattr(transmission, f"actuator_to_joint_{quantity}")
                self._bindings.append((conversion, act, jnt))
            else:
                conversion = getattr(transmission, f"joint_to_actuator_{quantity}")
                self._bindings.append((conversion, jnt, act))

        if not self._bindings:
            raise TransmissionConfigError(
                f"Cannot create {kind} '{name}': no quantity is populated on both sides"
            )
        logger.debug(f"{kind} '{name}' maps {self.mapped_quantities}")

    @property
    def name(self) -> str:
        return self._name

    @property
    def transmission(self) -> Transmission:
        return self._transmission

    @property
    def actuator_data(self) -> ActuatorData:
        return self._actuator_data

    @property
    def joint_data(self) -> JointData:
        return self._joint_data

    @property
    def mapped_quantities(self) -> Tuple[str, ...]:
        """Quantities this handle actually propagates."""
        return tuple(
            q for q in self.quantities
            if getattr(self._actuator_data, q) is not None
            and getattr(self._joint_data, q) is not None
        )

    def propagate(self) -> None:
        """Run the bound conversions once."""
        for conversion, source, target in self._bindings:
            conversion(source, target)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, quantities={self.mapped_quantities})"


# =============================================================================
# State direction
# =============================================================================

class ActuatorToJointStateHandle(TransmissionHandle):
    """Maps every populated quantity from actuator to joint space."""
    pass


class ActuatorToJointPositionHandle(TransmissionHandle):
    quantities = ("position",)
    require_all = True


class ActuatorToJointVelocityHandle(TransmissionHandle):
    quantities = ("velocity",)
    require_all = True


class ActuatorToJointEffortHandle(TransmissionHandle):
    quantities = ("effort",)
    require_all = True


# =============================================================================
# Command direction
# =============================================================================

class JointToActuatorStateHandle(TransmissionHandle):
    """Maps every populated quantity from joint to actuator space."""
    to_joint = False


class JointToActuatorPositionHandle(TransmissionHandle):
    quantities = ("position",)
    to_joint = False
    require_all = True


class JointToActuatorVelocityHandle(TransmissionHandle):
    quantities = ("velocity",)
    to_joint = False
    require_all = True


class JointToActuatorEffortHandle(TransmissionHandle):
    quantities = ("effort",)
    to_joint = False
    require_all = True
