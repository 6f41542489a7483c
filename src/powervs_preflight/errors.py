"""
Exceptions raised by powervs-preflight.
"""


class PreflightError(Exception):
    """Base class for all powervs-preflight errors."""


class SpecificationError(PreflightError):
    """The install config could not be read or is malformed."""


class InventoryError(PreflightError):
    """An inventory snapshot could not be read or is malformed."""


class CloudAPIError(PreflightError):
    """A cloud inventory lookup failed."""
