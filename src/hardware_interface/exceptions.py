"""
Hardware Interface Exceptions
=============================

Error taxonomy for handle construction, registry lookup and resource
claiming. All errors are raised synchronously at the offending call and
are local to the activation path of the controller that triggered them.

Author: Robot HW Interfaces Team
License: MIT
"""


class HardwareInterfaceException(Exception):
    """Base exception for hardware interface errors."""
    pass


class InvalidHandle(HardwareInterfaceException):
    """
    Raised when a handle is built over missing required storage, or when
    an accessor is called for an optional quantity that was never bound.
    """
    pass


class ResourceNotFound(HardwareInterfaceException, KeyError):
    """Raised when a resource name is not registered in an interface."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class DuplicateResource(HardwareInterfaceException):
    """Raised when a different handle is registered under an existing name."""
    pass


class ResourceAlreadyClaimed(HardwareInterfaceException):
    """Raised when a command resource already has a live claim."""
    pass


class InterfaceNotFound(HardwareInterfaceException):
    """Raised when an interface manager holds no interface of a given type."""
    pass
