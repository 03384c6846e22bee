"""
Unit registry and helpers for dimensional calculations.

Uses pint for conversions at the presentation edge (metric equivalents in
reports). The formula path works on plain floats in inch-pound units so
results match the spreadsheet-era formulas exactly.
"""

import math

import pint

# Create a shared unit registry for the entire application
ureg = pint.UnitRegistry()

# Shorthand for creating quantities
Q_ = ureg.Quantity

# Exact by definition; kept as literals so formula results stay bit-stable
INCHES_PER_FOOT = 12.0
MINUTES_PER_HOUR = 60.0


def magnitude_in(quantity: pint.Quantity, unit: str) -> float:
    """Get the magnitude of a quantity in specified units."""
    return quantity.to(unit).magnitude


def inches_to_feet(length_in: float) -> float:
    """Convert inches to feet."""
    return length_in / INCHES_PER_FOOT


def deg_to_rad(angle_deg: float) -> float:
    """Convert degrees to radians."""
    return angle_deg * math.pi / 180


def fpm_to_in_per_hour(speed_fpm: float) -> float:
    """Convert belt speed in ft/min to inches of travel per hour."""
    return speed_fpm * INCHES_PER_FOOT * MINUTES_PER_HOUR


def round_half_up(value: float, places: int = 0) -> float:
    """
    Round to a fixed number of decimals, halves away from minus infinity.

    Python's round() uses banker's rounding; reported engineering values
    round .5 upward so 12.25 -> 12.3 at one decimal.
    """
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def to_metric(value: float, unit: str, metric_unit: str) -> float:
    """
    Convert an inch-pound value to a metric unit for display.

    Example:
        to_metric(1.25, "inch", "mm") -> 31.75
    """
    return magnitude_in(Q_(value, unit), metric_unit)
