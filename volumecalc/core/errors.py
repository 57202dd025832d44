"""Typed errors for the calculator core."""


class VolumeCalcError(Exception):
    """Base class for calculator errors."""


class ValidationError(VolumeCalcError):
    """Raised when an instrument or calculation input is malformed."""


class NotFoundError(VolumeCalcError):
    """Raised when an instrument name is unknown to the catalog."""


class PersistenceError(VolumeCalcError):
    """Raised by store adapters when a snapshot cannot be read or written."""
