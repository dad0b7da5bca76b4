"""
Hardware Interface Module
=========================

Named, typed access to raw actuator and joint memory for control code.

Key Components:
    - Storage: Driver-owned arena and non-owning value references
    - Handles: Read-only state handles and read-write command handles
    - Interfaces: Name-keyed registries per handle kind
    - Claims: Exclusive ownership of command resources
    - InterfaceManager: Per-robot aggregate of interfaces
    - SimulatedActuatorDriver: Reference driver for tests and demos

Ownership:
    The driver owns the storage arena. Handles only reference it and are
    valid for the driver's lifetime. Command interfaces guarantee at most
    one live claim per resource name.

Author: Robot HW Interfaces Team
License: MIT
"""

from .exceptions import (
    HardwareInterfaceException,
    InvalidHandle,
    ResourceNotFound,
    DuplicateResource,
    ResourceAlreadyClaimed,
    InterfaceNotFound,
)

from .storage import (
    Quantity,
    ValueRef,
    RefVector,
    StorageArena,
)

from .handles import (
    StateHandle,
    JointStateHandle,
    ActuatorStateHandle,
    CommandHandle,
    JointHandle,
    ActuatorHandle,
)

from .claims import ResourceClaim

from .interfaces import (
    ResourceManager,
    HardwareInterface,
    JointStateInterface,
    ActuatorStateInterface,
    CommandInterface,
    PositionJointInterface,
    VelocityJointInterface,
    EffortJointInterface,
    PositionActuatorInterface,
    VelocityActuatorInterface,
    EffortActuatorInterface,
)

from .robot_hw import InterfaceManager

from .driver import (
    ControlMode,
    SimulatedActuatorDriver,
)

__version__ = "0.1.0"

__all__ = [
    # Exceptions
    "HardwareInterfaceException",
    "InvalidHandle",
    "ResourceNotFound",
    "DuplicateResource",
    "ResourceAlreadyClaimed",
    "InterfaceNotFound",
    # Storage
    "Quantity",
    "ValueRef",
    "RefVector",
    "StorageArena",
    # Handles
    "StateHandle",
    "JointStateHandle",
    "ActuatorStateHandle",
    "CommandHandle",
    "JointHandle",
    "ActuatorHandle",
    # Claims
    "ResourceClaim",
    # Interfaces
    "ResourceManager",
    "HardwareInterface",
    "JointStateInterface",
    "ActuatorStateInterface",
    "CommandInterface",
    "PositionJointInterface",
    "VelocityJointInterface",
    "EffortJointInterface",
    "PositionActuatorInterface",
    "VelocityActuatorInterface",
    "EffortActuatorInterface",
    "InterfaceManager",
    # Driver
    "ControlMode",
    "SimulatedActuatorDriver",
]
