"""
Belt weight, load and pull calculations.

Every function here is a pure formula over plain floats in inch-pound
units. The order in which the engine calls them matters for bit-identical
results against saved configurations: coefficients, belt length, belt
weight, parts and load, total load, friction pull, incline pull, starting
pull, total pull.

ASSUMPTIONS:
- Open belt with wrap of half a circumference on each pulley (pi*D/2)
- Belt weight is uniform: PIW * PIL * width * length
- Parts sit evenly spaced along the carrying run
- Friction acts on the full supported load (belt plus parts)
"""

import math
from dataclasses import dataclass
from typing import Optional

from conveyorcalc.models.inputs import CalculationParameters, Orientation
from conveyorcalc.physics.units import deg_to_rad, inches_to_feet


# Drive pulley diameter that selects the 2.5" coefficient table
REFERENCE_PULLEY_DIAMETER_IN = 2.5


@dataclass
class BeltCoefficients:
    """Belt weight coefficients after override/catalog/default resolution."""
    piw: float                  # Coefficient used in the belt weight formula (lb/in)
    pil: float
    belt_piw_effective: float   # Override or catalog value, else piw
    belt_pil_effective: float


def default_belt_coefficients(
    drive_pulley_diameter_in: float,
    parameters: CalculationParameters,
) -> tuple[float, float]:
    """
    Parameter-table PIW/PIL for a drive pulley.

    The 2.5" table applies only to an exact 2.5" drive pulley; every
    other diameter uses the general table.
    """
    if drive_pulley_diameter_in == REFERENCE_PULLEY_DIAMETER_IN:
        return parameters.piw_2p5, parameters.pil_2p5
    return parameters.piw_other, parameters.pil_other


def _first_set(*values: Optional[float]) -> Optional[float]:
    for value in values:
        if value is not None:
            return value
    return None


def resolve_belt_coefficients(
    drive_pulley_diameter_in: float,
    parameters: CalculationParameters,
    piw_override: Optional[float] = None,
    pil_override: Optional[float] = None,
    catalog_piw: Optional[float] = None,
    catalog_pil: Optional[float] = None,
    advanced_piw: Optional[float] = None,
    advanced_pil: Optional[float] = None,
) -> BeltCoefficients:
    """
    Resolve belt coefficients.

    Priority: user override, then selected catalog belt, then the advanced
    coefficient fields, then the parameter table for the drive pulley.
    """
    default_piw, default_pil = default_belt_coefficients(drive_pulley_diameter_in, parameters)

    piw = _first_set(piw_override, catalog_piw, advanced_piw, default_piw)
    pil = _first_set(pil_override, catalog_pil, advanced_pil, default_pil)

    return BeltCoefficients(
        piw=piw,
        pil=pil,
        belt_piw_effective=_first_set(piw_override, catalog_piw, piw),
        belt_pil_effective=_first_set(pil_override, catalog_pil, pil),
    )


def calculate_total_belt_length(
    conveyor_length_cc_in: float,
    drive_pulley_diameter_in: float,
    tail_pulley_diameter_in: float,
) -> float:
    """
    Total belt length for an open two-pulley conveyor.

    Equations:
        L = 2 * C + pi * (D_drive + D_tail) / 2

    Each pulley carries half its circumference of belt (pi * D / 2).
    """
    wrap = math.pi * (drive_pulley_diameter_in + tail_pulley_diameter_in) / 2
    return 2 * conveyor_length_cc_in + wrap


def calculate_belt_weight(piw: float, pil: float, belt_width_in: float, total_belt_length_in: float) -> float:
    """Belt weight (lbf) = PIW * PIL * width * length."""
    return piw * pil * belt_width_in * total_belt_length_in


def part_travel_dimension(
    orientation: Orientation,
    part_length_in: Optional[float],
    part_width_in: Optional[float],
) -> Optional[float]:
    """Part dimension along the direction of travel."""
    if orientation == Orientation.CROSSWISE:
        return part_width_in
    return part_length_in


def calculate_pitch(travel_dimension_in: Optional[float], part_spacing_in: float) -> float:
    """Centre-to-centre distance between parts (in); 0 without part data."""
    if travel_dimension_in is None:
        return 0.0
    return travel_dimension_in + part_spacing_in


def calculate_parts_on_belt(conveyor_length_cc_in: float, pitch_in: float) -> float:
    """Number of parts on the carrying run (fractional)."""
    if pitch_in <= 0:
        return 0.0
    return conveyor_length_cc_in / pitch_in


def calculate_load_on_belt(parts_on_belt: float, part_weight_lbs: Optional[float]) -> float:
    """Product load (lbf) carried on the belt."""
    if part_weight_lbs is None:
        return 0.0
    return parts_on_belt * part_weight_lbs


def calculate_total_load(belt_weight_lbf: float, load_on_belt_lbf: float) -> float:
    return belt_weight_lbf + load_on_belt_lbf


def calculate_avg_load_per_ft(total_load_lbf: float, conveyor_length_cc_in: float) -> float:
    """Average supported load per foot of conveyor (lbf/ft)."""
    length_ft = inches_to_feet(conveyor_length_cc_in)
    if length_ft <= 0:
        return 0.0
    return total_load_lbf / length_ft


def calculate_belt_pull_legacy(avg_load_per_ft: float, friction_coeff: float, conveyor_length_cc_in: float) -> float:
    """
    Legacy average-load belt pull.

    Kept in the outputs for older reports; it does not feed the drive
    torque, which uses the total belt pull.
    """
    return avg_load_per_ft * friction_coeff * inches_to_feet(conveyor_length_cc_in)


def calculate_friction_pull(friction_coeff: float, total_load_lbf: float) -> float:
    """Friction pull (lb) = coefficient * total load."""
    return friction_coeff * total_load_lbf


def calculate_incline_pull(total_load_lbf: float, incline_deg: float) -> float:
    """Incline pull (lb) = total load * sin(incline)."""
    return total_load_lbf * math.sin(deg_to_rad(incline_deg))


def calculate_total_belt_pull(friction_pull_lb: float, incline_pull_lb: float, starting_belt_pull_lb: float) -> float:
    return friction_pull_lb + incline_pull_lb + starting_belt_pull_lb
