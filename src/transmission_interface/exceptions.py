"""
Transmission Exceptions
=======================

Configuration errors are recoverable: they surface while a controller
assembly is being built and only abort that assembly. Arity mismatches in
conversion calls are wiring bugs and raise ``ContractViolation``, which
deliberately shares no base class with the recoverable errors.

Author: Robot HW Interfaces Team
License: MIT
"""


class TransmissionException(Exception):
    """Base exception for transmission errors."""
    pass


class TransmissionConfigError(TransmissionException, ValueError):
    """Raised for zero reductions or wrong-size reduction/offset vectors."""
    pass


class ContractViolation(AssertionError):
    """Raised when a conversion receives vectors of the wrong length."""
    pass
