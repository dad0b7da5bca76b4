"""
Interface Registries
====================

Typed containers that index handles by resource name.

Hierarchy (flat: one level of specialisation per concern):

    ResourceManager            name -> handle, lookup, duplicate policy
      └─ HardwareInterface     adds get_claims() (always empty)
           ├─ JointStateInterface, ActuatorStateInterface
           └─ CommandInterface adds claim() / clear_claims() / close()
                ├─ Position/Velocity/EffortJointInterface
                └─ Position/Velocity/EffortActuatorInterface

State interfaces cannot hand out claims at all; only command interfaces
carry a claimed set. Error messages always use the concrete class name so
that a lookup failure in, say, ``EffortJointInterface`` is not confused
with one in ``PositionJointInterface`` over the same joint names.

Author: Robot HW Interfaces Team
License: MIT
"""

from __future__ import annotations

import logging
import warnings
from typing import Dict, FrozenSet, Generic, Iterator, List, TypeVar

from .claims import ResourceClaim
from .exceptions import (
    DuplicateResource,
    HardwareInterfaceException,
    ResourceAlreadyClaimed,
    ResourceNotFound,
)
from .handles import (
    ActuatorHandle,
    ActuatorStateHandle,
    JointHandle,
    JointStateHandle,
)

logger = logging.getLogger(__name__)

HandleT = TypeVar("HandleT")


# =============================================================================
# Base Registries
# =============================================================================

class ResourceManager(Generic[HandleT]):
    """
    Name-keyed handle registry.

    Registration policy:
        - Registering a handle equal to the one already stored under the
          same name is a no-op.
        - Registering a different handle under an existing name raises
          ``DuplicateResource``.
    """

    handle_type: type = object

    def __init__(self) -> None:
        self._handles: Dict[str, HandleT] = {}

    def register_handle(self, handle: HandleT) -> None:
        """
        Register ``handle`` under its name.

        Raises:
            TypeError: If the handle is of the wrong kind for this interface
            DuplicateResource: If another handle already owns the name
        """
        if not isinstance(handle, self.handle_type):
            raise TypeError(
                f"{type(self).__name__} accepts {self.handle_type.__name__}, "
                f"got {type(handle).__name__}"
            )

        name = handle.name
        existing = self._handles.get(name)
        if existing is not None:
            if existing == handle:
                logger.debug(f"'{name}' already registered in {type(self).__name__}")
                return
            msg = (
                f"Resource '{name}' is already registered in "
                f"{type(self).__name__} with a different handle"
            )
            logger.error(msg)
            raise DuplicateResource(msg)

        self._handles[name] = handle
        logger.debug(f"Registered '{name}' in {type(self).__name__}")

    def get_handle(self, name: str) -> HandleT:
        """
        Resolve a resource name.

        Raises:
            ResourceNotFound: If no handle is registered under ``name``
        """
        try:
            return self._handles[name]
        except KeyError:
            raise ResourceNotFound(
                f"Could not find resource '{name}' in '{type(self).__name__}'"
            ) from None

    def get_names(self) -> List[str]:
        return list(self._handles)

    def __contains__(self, name: object) -> bool:
        return name in self._handles

    def __len__(self) -> int:
        return len(self._handles)

    def __iter__(self) -> Iterator[str]:
        return iter(self._handles)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self._handles)} resources)"


class HardwareInterface(ResourceManager[HandleT]):
    """Registry exposed to controllers. Claims nothing by default."""

    def get_claims(self) -> FrozenSet[str]:
        return frozenset()


# =============================================================================
# State Interfaces
# =============================================================================

class JointStateInterface(HardwareInterface[JointStateHandle]):
    """Read-only joint state."""
    handle_type = JointStateHandle


class ActuatorStateInterface(HardwareInterface[ActuatorStateHandle]):
    """Read-only actuator state."""
    handle_type = ActuatorStateHandle


# =============================================================================
# Command Interfaces
# =============================================================================

class CommandInterface(HardwareInterface[HandleT]):
    """
    Registry of writable resources with exclusive claims.

    At most one live ``ResourceClaim`` exists per name. Claims must be
    released before the interface is closed; outstanding claims at
    ``close()`` are reported as a leak.
    """

    def __init__(self) -> None:
        super().__init__()
        self._claims: Dict[str, ResourceClaim] = {}
        self._closed = False
        logger.info(f"{type(self).__name__} created")

    def claim(self, name: str) -> ResourceClaim:
        """
        Take exclusive ownership of ``name``.

        Args:
            name: Registered resource name

        Returns:
            Live claim; release it or use it as a context manager

        Raises:
            ResourceNotFound: If ``name`` is not registered
            ResourceAlreadyClaimed: If ``name`` already has a live claim
        """
        if self._closed:
            raise HardwareInterfaceException(f"{type(self).__name__} is closed")

        if name in self._claims:
            msg = f"Resource '{name}' in '{type(self).__name__}' is already claimed"
            logger.error(msg)
            raise ResourceAlreadyClaimed(msg)

        handle = self.get_handle(name)
        claim = ResourceClaim(self, name, handle)
        self._claims[name] = claim
        logger.debug(f"Claimed '{name}' in {type(self).__name__}")
        return claim

    def get_claims(self) -> FrozenSet[str]:
        return frozenset(self._claims)

    def clear_claims(self) -> None:
        """Drop every claim. Outstanding claim objects become released."""
        for claim in self._claims.values():
            claim._invalidate()
        self._claims.clear()

    def _release(self, claim: ResourceClaim) -> None:
        if self._claims.get(claim.name) is claim:
            del self._claims[claim.name]

    def close(self) -> List[str]:
        """
        Tear the interface down.

        Returns:
            Names whose claims were still live (leaked); empty on a clean
            shutdown
        """
        leaked = sorted(self._claims)
        if leaked:
            msg = f"{type(self).__name__} closed with unreleased claims: {leaked}"
            logger.error(msg)
            warnings.warn(msg, ResourceWarning, stacklevel=2)
            self.clear_claims()
        self._closed = True
        return leaked

    @property
    def closed(self) -> bool:
        return self._closed

    def __del__(self) -> None:
        if getattr(self, "_claims", None) and not getattr(self, "_closed", True):
            self.close()


class JointCommandInterface(CommandInterface[JointHandle]):
    handle_type = JointHandle


class PositionJointInterface(JointCommandInterface):
    """Joint position commands."""
    pass


class VelocityJointInterface(JointCommandInterface):
    """Joint velocity commands."""
    pass


class EffortJointInterface(JointCommandInterface):
    """Joint effort commands."""
    pass


class ActuatorCommandInterface(CommandInterface[ActuatorHandle]):
    handle_type = ActuatorHandle


class PositionActuatorInterface(ActuatorCommandInterface):
    """Actuator position commands."""
    pass


class VelocityActuatorInterface(ActuatorCommandInterface):
    """Actuator velocity commands."""
    pass


class EffortActuatorInterface(ActuatorCommandInterface):
    """Actuator effort commands."""
    pass
