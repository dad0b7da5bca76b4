"""
Resource Claims
===============

Scope-bound ownership tokens over command resources.

A claim is handed out by ``CommandInterface.claim`` and is the only proof
that a controller owns a command resource. The owning interface keeps at
most one live claim per name; releasing the claim (explicitly, or by
leaving its ``with`` block) frees the name for the next controller.

Example:
    >>> with position_iface.claim("elbow") as claim:
    ...     claim.handle.set_command(0.5)
    ...     start_controller()   # an exception here still releases "elbow"

Author: Robot HW Interfaces Team
License: MIT
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .interfaces import CommandInterface

logger = logging.getLogger(__name__)


class ResourceClaim:
    """
    Exclusive ownership of one named command resource.

    Do not construct directly; use ``CommandInterface.claim(name)``.

    Attributes:
        name: Claimed resource name
        interface: Owning command interface
        handle: Command handle of the claimed resource
        released: Whether the claim has been given back
    """

    def __init__(self, interface: "CommandInterface", name: str, handle: Any) -> None:
        self._interface = interface
        self._name = name
        self._handle = handle
        self._released = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def interface(self) -> "CommandInterface":
        return self._interface

    @property
    def handle(self) -> Any:
        return self._handle

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """Give the resource back. Calling this more than once is a no-op."""
        if self._released:
            return
        self._released = True
        self._interface._release(self)
        logger.debug(f"Released '{self._name}' in {type(self._interface).__name__}")

    def _invalidate(self) -> None:
        # The owning interface dropped the claim itself.
        self._released = True

    def __enter__(self) -> "ResourceClaim":
        return self

    def __exit__(self, exc_type: Optional[type], exc: Optional[BaseException], tb: Any) -> bool:
        self.release()
        return False

    def __repr__(self) -> str:
        state = "released" if self._released else "live"
        return (
            f"ResourceClaim(name={self._name!r}, "
            f"interface={type(self._interface).__name__}, {state})"
        )
