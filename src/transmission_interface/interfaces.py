"""
Transmission Interfaces
=======================

Registries of transmission handles, keyed by transmission name, with a
single ``propagate()`` that runs every handle in registration order.

Cycle ordering:
    driver.read()
    actuator_to_joint_state.propagate()     # before any controller runs
    controllers update joint commands
    joint_to_actuator_position.propagate()  # after every controller ran
    driver.write()

Author: Robot HW Interfaces Team
License: MIT
"""

from __future__ import annotations

from ..hardware_interface.interfaces import ResourceManager

from .handles import (
    ActuatorToJointEffortHandle,
    ActuatorToJointPositionHandle,
    ActuatorToJointStateHandle,
    ActuatorToJointVelocityHandle,
    JointToActuatorEffortHandle,
    JointToActuatorPositionHandle,
    JointToActuatorStateHandle,
    JointToActuatorVelocityHandle,
    TransmissionHandle,
)


class TransmissionInterface(ResourceManager[TransmissionHandle]):
    """Registry of transmission handles of one kind."""

    handle_type = TransmissionHandle

    def propagate(self) -> None:
        """Propagate every registered handle."""
        for handle in self._handles.values():
            handle.propagate()


class ActuatorToJointStateInterface(TransmissionInterface):
    handle_type = ActuatorToJointStateHandle


class ActuatorToJointPositionInterface(TransmissionInterface):
    handle_type = ActuatorToJointPositionHandle


class ActuatorToJointVelocityInterface(TransmissionInterface):
    handle_type = ActuatorToJointVelocityHandle


class ActuatorToJointEffortInterface(TransmissionInterface):
    handle_type = ActuatorToJointEffortHandle


class JointToActuatorStateInterface(TransmissionInterface):
    handle_type = JointToActuatorStateHandle


class JointToActuatorPositionInterface(TransmissionInterface):
    handle_type = JointToActuatorPositionHandle


class JointToActuatorVelocityInterface(TransmissionInterface):
    handle_type = JointToActuatorVelocityHandle


class JointToActuatorEffortInterface(TransmissionInterface):
    handle_type = JointToActuatorEffortHandle
