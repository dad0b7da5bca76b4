"""
Resource Handles
================

Lightweight named views over driver-owned storage.

Handle kinds:
    - JointStateHandle / ActuatorStateHandle: read-only position, velocity
      and optional effort
    - JointHandle / ActuatorHandle: a state handle plus a writable command

Handles never copy or cache values; every accessor reads through the bound
``ValueRef``. Position and velocity are required at construction. Effort
is optional so that effort-less sensors can be exposed; asking such a
handle for its effort raises ``InvalidHandle`` instead of returning a
zero that could be mistaken for a measurement.

Author: Robot HW Interfaces Team
License: MIT
"""

from __future__ import annotations

from typing import Optional, Tuple

from .exceptions import InvalidHandle
from .storage import ValueRef


# =============================================================================
# State Handles
# =============================================================================

class StateHandle:
    """
    Read-only handle to the state of one named resource.

    Attributes:
        name: Resource name, unique within its interface
    """

    __slots__ = ("_name", "_pos", "_vel", "_eff")

    def __init__(
        self,
        name: str,
        pos: Optional[ValueRef],
        vel: Optional[ValueRef],
        eff: Optional[ValueRef] = None
    ) -> None:
        if not name:
            raise InvalidHandle(f"Cannot create {type(self).__name__} with an empty name")
        if pos is None:
            raise InvalidHandle(
                f"Cannot create {type(self).__name__} '{name}': position storage is missing"
            )
        if vel is None:
            raise InvalidHandle(
                f"Cannot create {type(self).__name__} '{name}': velocity storage is missing"
            )
        self._name = name
        self._pos = pos
        self._vel = vel
        self._eff = eff

    @property
    def name(self) -> str:
        return self._name

    def get_name(self) -> str:
        return self._name

    def get_position(self) -> float:
        return self._pos.get()

    def get_velocity(self) -> float:
        return self._vel.get()

    def has_effort(self) -> bool:
        return self._eff is not None

    def get_effort(self) -> float:
        """
        Current effort.

        Raises:
            InvalidHandle: If the handle was built without effort storage
        """
        if self._eff is None:
            raise InvalidHandle(
                f"{type(self).__name__} '{self._name}' has no effort storage bound"
            )
        return self._eff.get()

    def _bindings(self) -> Tuple[Optional[ValueRef], ...]:
        return (self._pos, self._vel, self._eff)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._name == other._name and self._bindings() == other._bindings()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._name, self._bindings()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"


class JointStateHandle(StateHandle):
    """Read-only handle to a joint's position, velocity and effort."""
    __slots__ = ()


class ActuatorStateHandle(StateHandle):
    """Read-only handle to an actuator's position, velocity and effort."""
    __slots__ = ()


# =============================================================================
# Command Handles
# =============================================================================

class CommandHandle:
    """
    Read-write handle: a state handle plus one command slot.

    The command slot is interpreted by the owning interface (position,
    velocity or effort command); the handle itself only reads and writes it.
    """

    __slots__ = ("_state", "_cmd")

    state_handle_type = StateHandle

    def __init__(self, state: StateHandle, cmd: Optional[ValueRef]) -> None:
        if not isinstance(state, self.state_handle_type):
            raise InvalidHandle(
                f"{type(self).__name__} requires a {self.state_handle_type.__name__}, "
                f"got {type(state).__name__}"
            )
        if cmd is None:
            raise InvalidHandle(
                f"Cannot create {type(self).__name__} '{state.name}': "
                "command storage is missing"
            )
        self._state = state
        self._cmd = cmd

    @property
    def name(self) -> str:
        return self._state.name

    @property
    def state(self) -> StateHandle:
        return self._state

    def get_name(self) -> str:
        return self._state.name

    def get_position(self) -> float:
        return self._state.get_position()

    def get_velocity(self) -> float:
        return self._state.get_velocity()

    def has_effort(self) -> bool:
        return self._state.has_effort()

    def get_effort(self) -> float:
        return self._state.get_effort()

    def get_command(self) -> float:
        return self._cmd.get()

    def set_command(self, value: float) -> None:
        self._cmd.set(value)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._state == other._state and self._cmd == other._cmd

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._state, self._cmd))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class JointHandle(CommandHandle):
    """Command handle of a joint."""
    __slots__ = ()
    state_handle_type = JointStateHandle


class ActuatorHandle(CommandHandle):
    """Command handle of an actuator."""
    __slots__ = ()
    state_handle_type = ActuatorStateHandle
