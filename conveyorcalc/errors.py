"""
Exception types.

Expected domain conditions (no matching gearmotor, zero tension, missing
optional fields) are returned as values, never raised. These exceptions
cover structural problems only.
"""


class ConveyorCalcError(Exception):
    """Base class for conveyorcalc errors."""


class CatalogError(ConveyorCalcError):
    """Gearmotor catalog data is missing or violates its own structure."""
