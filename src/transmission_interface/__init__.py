"""
Transmission Interface Module
=============================

Kinematic transmissions between actuator space and joint space.

Key Components:
    - Transmission: Six-conversion contract (effort, velocity, position in
      both directions)
    - SimpleTransmission: One actuator, one joint, fixed reduction
    - DifferentialTransmission: Two actuators, two joints, sum/difference
      coupling
    - FourBarLinkageTransmission: Two actuators, two serial joints coupled
      through a four-bar linkage
    - Transmission handles/interfaces: Bind transmissions to storage and
      propagate once per cycle
    - Config: YAML transmission descriptions and factory

Author: Robot HW Interfaces Team
License: MIT
"""

from .exceptions import (
    TransmissionException,
    TransmissionConfigError,
    ContractViolation,
)

from .transmission import Transmission

from .simple_transmission import SimpleTransmission
from .differential_transmission import DifferentialTransmission
from .four_bar_linkage_transmission import FourBarLinkageTransmission

from .handles import (
    ActuatorData,
    JointData,
    TransmissionHandle,
    ActuatorToJointStateHandle,
    ActuatorToJointPositionHandle,
    ActuatorToJointVelocityHandle,
    ActuatorToJointEffortHandle,
    JointToActuatorStateHandle,
    JointToActuatorPositionHandle,
    JointToActuatorVelocityHandle,
    JointToActuatorEffortHandle,
)

from .interfaces import (
    TransmissionInterface,
    ActuatorToJointStateInterface,
    ActuatorToJointPositionInterface,
    ActuatorToJointVelocityInterface,
    ActuatorToJointEffortInterface,
    JointToActuatorStateInterface,
    JointToActuatorPositionInterface,
    JointToActuatorVelocityInterface,
    JointToActuatorEffortInterface,
)

from .config import (
    TransmissionType,
    TransmissionConfig,
    build_transmission,
    load_transmission_configs,
    save_transmission_configs,
)

__version__ = "0.1.0"

__all__ = [
    # Exceptions
    "TransmissionException",
    "TransmissionConfigError",
    "ContractViolation",
    # Transmissions
    "Transmission",
    "SimpleTransmission",
    "DifferentialTransmission",
    "FourBarLinkageTransmission",
    # Handles
    "ActuatorData",
    "JointData",
    "TransmissionHandle",
    "ActuatorToJointStateHandle",
    "ActuatorToJointPositionHandle",
    "ActuatorToJointVelocityHandle",
    "ActuatorToJointEffortHandle",
    "JointToActuatorStateHandle",
    "JointToActuatorPositionHandle",
    "JointToActuatorVelocityHandle",
    "JointToActuatorEffortHandle",
    # Interfaces
    "TransmissionInterface",
    "ActuatorToJointStateInterface",
    "ActuatorToJointPositionInterface",
    "ActuatorToJointVelocityInterface",
    "ActuatorToJointEffortInterface",
    "JointToActuatorStateInterface",
    "JointToActuatorPositionInterface",
    "JointToActuatorVelocityInterface",
    "JointToActuatorEffortInterface",
    # Config
    "TransmissionType",
    "TransmissionConfig",
    "build_transmission",
    "load_transmission_configs",
    "save_transmission_configs",
]
