"""
Raw Storage Module
==================

Driver-owned memory that handles and transmissions operate on.

The driver owns one ``StorageArena`` holding a contiguous float64 buffer
per physical quantity (position, velocity, effort and one command buffer per
command kind), one slot per named resource. Everything else in the stack
holds *non-owning* views into that memory:

    StorageArena ──owns──► buffers[quantity][slot]
         │
         └─ ref(quantity, name) ──► ValueRef (buffer, slot)
                                       │
                       Handle ◄────────┤
                       RefVector ◄─────┘ (fixed-length group for transmissions)

A ``ValueRef`` is valid for as long as the arena that produced it is
alive. Writing through a ``ValueRef`` mutates the arena in place, so the
driver sees controller commands without any copy.

Author: Robot HW Interfaces Team
License: MIT
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

FloatArray = NDArray[np.floating]


class Quantity(Enum):
    """Physical quantity stored in an arena buffer."""
    POSITION = "position"
    VELOCITY = "velocity"
    EFFORT = "effort"
    POSITION_COMMAND = "position_command"
    VELOCITY_COMMAND = "velocity_command"
    EFFORT_COMMAND = "effort_command"


# =============================================================================
# Value References
# =============================================================================

class ValueRef:
    """
    Non-owning reference to one scalar slot of a 1-D float buffer.

    Two references are equal when they point at the same slot of the same
    buffer object, regardless of the value currently stored there.

    Example:
        >>> buffer = np.zeros(3)
        >>> ref = ValueRef(buffer, 1)
        >>> ref.set(2.5)
        >>> buffer[1]
        2.5
    """

    __slots__ = ("_buffer", "_index")

    def __init__(self, buffer: FloatArray, index: int) -> None:
        if buffer.ndim != 1:
            raise ValueError(f"buffer must be 1-D, got {buffer.ndim}-D")
        if not 0 <= index < buffer.shape[0]:
            raise IndexError(
                f"slot {index} out of range for buffer of size {buffer.shape[0]}"
            )
        self._buffer = buffer
        self._index = int(index)

    @classmethod
    def standalone(cls, value: float = 0.0) -> "ValueRef":
        """Create a reference over a private single-slot buffer."""
        return cls(np.array([value], dtype=np.float64), 0)

    def get(self) -> float:
        return float(self._buffer[self._index])

    def set(self, value: float) -> None:
        self._buffer[self._index] = value

    value = property(get, set)

    @property
    def index(self) -> int:
        return self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValueRef):
            return NotImplemented
        return self._buffer is other._buffer and self._index == other._index

    def __hash__(self) -> int:
        return hash((id(self._buffer), self._index))

    def __repr__(self) -> str:
        return f"ValueRef(slot={self._index}, value={self.get()!r})"


class RefVector:
    """
    Fixed-length group of ``ValueRef`` usable as a transmission argument.

    Indexing reads the referenced value; item assignment writes through to
    the referenced slot. The length never changes after construction.
    """

    __slots__ = ("_refs",)

    def __init__(self, refs: Iterable[ValueRef]) -> None:
        self._refs = tuple(refs)
        for ref in self._refs:
            if not isinstance(ref, ValueRef):
                raise TypeError(f"RefVector entries must be ValueRef, got {type(ref).__name__}")

    @property
    def refs(self) -> tuple:
        return self._refs

    def __len__(self) -> int:
        return len(self._refs)

    def __getitem__(self, i: int) -> float:
        return self._refs[i].get()

    def __setitem__(self, i: int, value: float) -> None:
        self._refs[i].set(value)

    def __iter__(self) -> Iterator[float]:
        return (ref.get() for ref in self._refs)

    def to_array(self) -> FloatArray:
        """Snapshot of the referenced values."""
        return np.array([ref.get() for ref in self._refs], dtype=np.float64)

    def __repr__(self) -> str:
        return f"RefVector({[ref.get() for ref in self._refs]!r})"


# =============================================================================
# Storage Arena
# =============================================================================

class StorageArena:
    """
    Contiguous raw storage owned by a hardware driver.

    Attributes:
        names: Resource names, one storage slot each
        quantities: Quantities allocated in this arena

    Example:
        >>> arena = StorageArena(["motor_1", "motor_2"])
        >>> pos = arena.ref(Quantity.POSITION, "motor_2")
        >>> arena.buffer(Quantity.POSITION)[:] = [0.1, 0.2]
        >>> pos.get()
        0.2
    """

    def __init__(
        self,
        names: Sequence[str],
        quantities: Sequence[Union[Quantity, str]] = tuple(Quantity),
    ) -> None:
        self.names: List[str] = list(names)
        if len(set(self.names)) != len(self.names):
            raise ValueError(f"Duplicate resource names in arena: {self.names}")

        self._slots: Dict[str, int] = {name: i for i, name in enumerate(self.names)}
        self.quantities = tuple(Quantity(q) for q in quantities)
        self._buffers: Dict[Quantity, FloatArray] = {
            q: np.zeros(len(self.names), dtype=np.float64) for q in self.quantities
        }

        logger.debug(
            f"StorageArena allocated: {len(self.names)} slots x "
            f"{[q.value for q in self.quantities]}"
        )

    def has(self, quantity: Union[Quantity, str]) -> bool:
        return Quantity(quantity) in self._buffers

    def buffer(self, quantity: Union[Quantity, str]) -> FloatArray:
        """
        Live buffer of one quantity.

        The returned array is the arena's own memory; writes through it are
        visible to every reference into the same quantity. Reassign slices
        (``buf[:] = ...``) rather than rebinding.

        Raises:
            KeyError: If the quantity was not allocated
        """
        quantity = Quantity(quantity)
        if quantity not in self._buffers:
            raise KeyError(f"Quantity '{quantity.value}' not allocated in this arena")
        return self._buffers[quantity]

    def slot(self, name: str) -> int:
        if name not in self._slots:
            raise KeyError(f"Unknown resource '{name}' in arena")
        return self._slots[name]

    def ref(self, quantity: Union[Quantity, str], name: str) -> ValueRef:
        """Reference to the slot of ``name`` in the ``quantity`` buffer."""
        return ValueRef(self.buffer(quantity), self.slot(name))

    def refs(
        self,
        quantity: Union[Quantity, str],
        names: Optional[Sequence[str]] = None
    ) -> RefVector:
        """Ordered references for ``names`` (all arena names by default)."""
        if names is None:
            names = self.names
        return RefVector(self.ref(quantity, name) for name in names)

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self._slots
