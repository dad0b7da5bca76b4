"""
Simulated Actuator Driver
=========================

Reference driver that owns the raw actuator memory and exposes it through
hardware interfaces, for tests and demos without hardware.

Per control cycle:
    driver.read(dt)   # simulated sensors → actuator state slots
    ...               # transmissions + controllers
    driver.write()    # latch actuator command slots for the next read

Dynamics per control mode:
    - POSITION: first-order lag toward the position command
    - VELOCITY: velocity follows the command, position integrates
    - EFFORT:   effort follows the command, unit-inertia double integrator

Author: Robot HW Interfaces Team
License: MIT
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import List, Sequence

import numpy as np

from .handles import ActuatorHandle, ActuatorStateHandle
from .interfaces import (
    ActuatorStateInterface,
    EffortActuatorInterface,
    PositionActuatorInterface,
    VelocityActuatorInterface,
)
from .robot_hw import InterfaceManager
from .storage import FloatArray, Quantity, StorageArena

logger = logging.getLogger(__name__)


class ControlMode(Enum):
    """Actuator command mode."""
    POSITION = auto()       # Position control
    VELOCITY = auto()       # Velocity control
    EFFORT = auto()         # Torque/force control
    OFF = auto()            # Commands ignored


class SimulatedActuatorDriver:
    """
    Simulated actuator bank.

    Owns a ``StorageArena`` with one slot per actuator and registers:
        - ActuatorStateInterface
        - PositionActuatorInterface / VelocityActuatorInterface /
          EffortActuatorInterface

    with its ``interfaces`` manager. Handles stay valid for the driver's
    lifetime.

    Example:
        >>> driver = SimulatedActuatorDriver(["motor_1", "motor_2"])
        >>> driver.enable()
        >>> iface = driver.interfaces.get(PositionActuatorInterface)
        >>> with iface.claim("motor_1") as claim:
        ...     claim.handle.set_command(1.0)
        ...     driver.write()
        ...     driver.read(0.01)
    """

    def __init__(
        self,
        actuator_names: Sequence[str],
        dynamics_time_constant: float = 0.02,
        mode: ControlMode = ControlMode.POSITION
    ) -> None:
        """
        Initialize simulated actuators.

        Args:
            actuator_names: Actuator names, one storage slot each
            dynamics_time_constant: Response time constant of position mode (s)
            mode: Initial control mode
        """
        if dynamics_time_constant <= 0:
            raise ValueError("dynamics_time_constant must be positive")

        self.names: List[str] = list(actuator_names)
        self.tau = dynamics_time_constant
        self._mode = mode
        self._enabled = False

        self.arena = StorageArena(self.names)
        self._latched = np.zeros(len(self.names))

        self.interfaces = InterfaceManager()
        self._register_interfaces()

        logger.info(f"SimulatedActuatorDriver: {len(self.names)} actuators, mode={mode.name}")

    def _register_interfaces(self) -> None:
        state_iface = ActuatorStateInterface()
        command_ifaces = {
            Quantity.POSITION_COMMAND: PositionActuatorInterface(),
            Quantity.VELOCITY_COMMAND: VelocityActuatorInterface(),
            Quantity.EFFORT_COMMAND: EffortActuatorInterface(),
        }

        for name in self.names:
            state = ActuatorStateHandle(
                name,
                self.arena.ref(Quantity.POSITION, name),
                self.arena.ref(Quantity.VELOCITY, name),
                self.arena.ref(Quantity.EFFORT, name),
            )
            state_iface.register_handle(state)
            for quantity, iface in command_ifaces.items():
                iface.register_handle(ActuatorHandle(state, self.arena.ref(quantity, name)))

        self.interfaces.register_interface(state_iface)
        for iface in command_ifaces.values():
            self.interfaces.register_interface(iface)

    # =========================================================================
    # State
    # =========================================================================

    @property
    def mode(self) -> ControlMode:
        return self._mode

    def set_mode(self, mode: ControlMode) -> None:
        old_mode = self._mode
        self._mode = mode
        self._hold()
        logger.info(f"Driver mode: {old_mode.name} → {mode.name}")

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self) -> bool:
        """Enable actuators, holding the current position."""
        self._enabled = True
        self._hold()
        return True

    def _hold(self) -> None:
        # Position mode latches the current position; other modes latch zero.
        pos = self.arena.buffer(Quantity.POSITION)
        self.arena.buffer(Quantity.POSITION_COMMAND)[:] = pos
        if self._mode == ControlMode.POSITION:
            self._latched = pos.copy()
        else:
            self._latched = np.zeros(len(self.names))

    def disable(self) -> bool:
        """Disable actuators."""
        self._enabled = False
        self.arena.buffer(Quantity.VELOCITY)[:] = 0.0
        self.arena.buffer(Quantity.EFFORT)[:] = 0.0
        return True

    # =========================================================================
    # Cycle
    # =========================================================================

    def _command_buffer(self) -> FloatArray:
        if self._mode == ControlMode.POSITION:
            return self.arena.buffer(Quantity.POSITION_COMMAND)
        if self._mode == ControlMode.VELOCITY:
            return self.arena.buffer(Quantity.VELOCITY_COMMAND)
        return self.arena.buffer(Quantity.EFFORT_COMMAND)

    def write(self) -> None:
        """Latch the command slots of the active mode."""
        if not self._enabled or self._mode == ControlMode.OFF:
            return
        self._latched = self._command_buffer().copy()

    def read(self, dt: float) -> None:
        """
        Advance the simulation by ``dt`` seconds and publish the new state.

        Args:
            dt: Time step (s)
        """
        if dt <= 0:
            raise ValueError(f"dt must be positive, got {dt}")

        pos = self.arena.buffer(Quantity.POSITION)
        vel = self.arena.buffer(Quantity.VELOCITY)
        eff = self.arena.buffer(Quantity.EFFORT)

        if not self._enabled or self._mode == ControlMode.OFF:
            vel[:] = 0.0
            return

        if self._mode == ControlMode.POSITION:
            # Simple first-order dynamics
            alpha = 1.0 - np.exp(-dt / self.tau)
            step = alpha * (self._latched - pos)
            vel[:] = step / dt
            pos += step
        elif self._mode == ControlMode.VELOCITY:
            vel[:] = self._latched
            pos += vel * dt
        else:
            eff[:] = self._latched
            vel += eff * dt
            pos += vel * dt

    def close(self) -> None:
        """Shut the driver down; reports claims still held by controllers."""
        self.disable()
        leaks = self.interfaces.close()
        if leaks:
            logger.error(f"Driver closed with leaked claims: {leaks}")
