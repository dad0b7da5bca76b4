"""
Interface Manager
=================

Aggregate of the hardware interfaces a robot exposes. Controllers ask the
manager for an interface by type, then resolve and claim handles on it.

Author: Robot HW Interfaces Team
License: MIT
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, List, Type, TypeVar

from .exceptions import DuplicateResource, InterfaceNotFound
from .interfaces import CommandInterface, HardwareInterface

logger = logging.getLogger(__name__)

InterfaceT = TypeVar("InterfaceT", bound=HardwareInterface)


class InterfaceManager:
    """
    Registry of hardware interfaces keyed by their concrete type.

    Example:
        >>> manager = InterfaceManager()
        >>> manager.register_interface(joint_state_iface)
        >>> manager.get(JointStateInterface).get_handle("elbow")
    """

    def __init__(self) -> None:
        self._interfaces: Dict[str, HardwareInterface] = {}

    def register_interface(self, iface: HardwareInterface) -> None:
        """
        Register one interface instance per concrete type.

        Raises:
            DuplicateResource: If a different instance of the same type is
                already registered
        """
        key = type(iface).__name__
        existing = self._interfaces.get(key)
        if existing is iface:
            return
        if existing is not None:
            msg = f"An interface of type '{key}' is already registered"
            logger.error(msg)
            raise DuplicateResource(msg)

        self._interfaces[key] = iface
        logger.info(f"Registered interface {key} ({len(iface)} resources)")

    def get(self, iface_type: Type[InterfaceT]) -> InterfaceT:
        """
        Look up the registered instance of ``iface_type``.

        Raises:
            InterfaceNotFound: If no such interface was registered
        """
        iface = self._interfaces.get(iface_type.__name__)
        if iface is None:
            raise InterfaceNotFound(
                f"Could not find interface '{iface_type.__name__}'; "
                f"available: {sorted(self._interfaces)}"
            )
        return iface

    def has(self, iface_type: Type[HardwareInterface]) -> bool:
        return iface_type.__name__ in self._interfaces

    def get_names(self) -> List[str]:
        return list(self._interfaces)

    def get_claimed_resources(self) -> Dict[str, FrozenSet[str]]:
        """Currently claimed names, per interface that has any."""
        return {
            name: iface.get_claims()
            for name, iface in self._interfaces.items()
            if iface.get_claims()
        }

    def close(self) -> Dict[str, List[str]]:
        """Close every command interface; returns leaked claims per interface."""
        leaks = {}
        for name, iface in self._interfaces.items():
            if isinstance(iface, CommandInterface) and not iface.closed:
                leaked = iface.close()
                if leaked:
                    leaks[name] = leaked
        return leaks
