"""
Pulley shaft sizing by von Mises combined stress.

Sizes a drive or tail pulley shaft from the effective belt tension,
rounds up to a standard stock diameter and reports stress and deflection
at that standard size.

ASSUMPTIONS:
- Shaft is simply supported at the bearings with the belt load at center
- Tight and slack side tensions follow the capstan (Euler-Eytelwein) relation
- Only the drive shaft carries torque and a keyway
- 1045 steel unless a yield strength is supplied
- Deflection limit is advisory; it never changes the selected diameter
"""

import logging
import math
from typing import Optional

from conveyorcalc.models.inputs import ShaftSizingInputs
from conveyorcalc.models.outputs import ShaftSizingResult
from conveyorcalc.physics.units import deg_to_rad, round_half_up

logger = logging.getLogger(__name__)


# Defaults applied to unset optional inputs
DEFAULT_WRAP_ANGLE_DEG = 180.0
DEFAULT_FRICTION_COEFFICIENT = 0.3    # lagged pulley face
DEFAULT_BEARING_SPAN_EXTRA_IN = 5.0   # span = belt width + 5"
DEFAULT_YIELD_STRENGTH_PSI = 45000.0  # 1045 steel
DEFAULT_SAFETY_FACTOR = 3.0
DEFAULT_SERVICE_FACTOR = 1.2

E_STEEL_PSI = 30e6
KT_KEYWAY = 1.6
KT_PLAIN = 1.0
MAX_DEFLECTION_RATIO = 0.001          # span / 1000

STANDARD_SHAFT_DIAMETERS = [
    0.5, 0.625, 0.75, 0.875, 1.0, 1.125, 1.25, 1.375, 1.5,
    1.625, 1.75, 1.875, 2.0, 2.25, 2.5, 2.75, 3.0,
]
OVERSIZE_INCREMENT_IN = 0.25


def get_next_standard_diameter(diameter_in: float) -> float:
    """
    Round a diameter up to the next standard shaft size.

    Above the largest ladder size, rounds up to the next 0.25".
    """
    for standard in STANDARD_SHAFT_DIAMETERS:
        if standard >= diameter_in:
            return standard
    return math.ceil(diameter_in / OVERSIZE_INCREMENT_IN) * OVERSIZE_INCREMENT_IN


def is_standard_diameter(diameter_in: float) -> bool:
    """True if the diameter is on the standard ladder (within 0.001")."""
    return any(abs(standard - diameter_in) < 0.001 for standard in STANDARD_SHAFT_DIAMETERS)


def _minimal_result(bearing_span_in: float, wrap_angle_deg: float) -> ShaftSizingResult:
    """Result for zero or negative tension: smallest shaft, no load."""
    min_diameter = STANDARD_SHAFT_DIAMETERS[0]
    return ShaftSizingResult(
        required_diameter_in=min_diameter,
        calculated_diameter_in=min_diameter,
        T1_lbf=0.0,
        T2_lbf=0.0,
        radial_load_lbf=0.0,
        bending_moment_inlbf=0.0,
        torque_inlbf=0.0,
        von_mises_stress_psi=0.0,
        deflection_in=0.0,
        deflection_ok=True,
        bearing_span_in=bearing_span_in,
        wrap_angle_deg=wrap_angle_deg,
    )


def calculate_shaft_diameter(inputs: ShaftSizingInputs) -> ShaftSizingResult:
    """
    Size a pulley shaft.

    Args:
        inputs: Belt width, pulley diameter, effective tension, drive flag
            and optional overrides

    Returns:
        ShaftSizingResult with the standard diameter and the loads, stress
        and deflection behind it

    Equations:
        ratio = e^(mu * theta)
        Te = effective_tension * service_factor
        T2 = Te / (ratio - 1),  T1 = T2 * ratio
        R = sqrt(T1^2 + T2^2 - 2 * T1 * T2 * cos(theta))
        M = R * span / 4
        T = Te * D / 2 (drive only)
        d = cbrt((32 * SF * Kt / (pi * Sy)) * sqrt(M^2 + 0.75 * T^2))
        sigma_b = 32 * M * Kt / (pi * d^3),  tau = 16 * T / (pi * d^3)
        sigma_vm = sqrt(sigma_b^2 + 3 * tau^2)
        delta = R * span^3 / (48 * E * I),  I = pi * d^4 / 64
    """
    wrap_angle_deg = inputs.wrap_angle_deg if inputs.wrap_angle_deg is not None else DEFAULT_WRAP_ANGLE_DEG
    mu = (
        inputs.friction_coefficient
        if inputs.friction_coefficient is not None
        else DEFAULT_FRICTION_COEFFICIENT
    )
    bearing_span_in = (
        inputs.bearing_span_in
        if inputs.bearing_span_in is not None
        else inputs.belt_width_in + DEFAULT_BEARING_SPAN_EXTRA_IN
    )
    yield_psi = inputs.yield_strength_psi if inputs.yield_strength_psi is not None else DEFAULT_YIELD_STRENGTH_PSI
    safety_factor = inputs.safety_factor if inputs.safety_factor is not None else DEFAULT_SAFETY_FACTOR
    service_factor = inputs.service_factor if inputs.service_factor is not None else DEFAULT_SERVICE_FACTOR

    theta = deg_to_rad(wrap_angle_deg)
    tension_ratio = math.exp(mu * theta)
    te = inputs.effective_tension_lbf * service_factor

    if te <= 0:
        return _minimal_result(bearing_span_in, wrap_angle_deg)

    # Tight/slack split
    t2 = te / (tension_ratio - 1)
    t1 = t2 * tension_ratio

    # Resultant of the two belt strands on the shaft
    radial_load = math.sqrt(t1 ** 2 + t2 ** 2 - 2 * t1 * t2 * math.cos(theta))

    bending_moment = radial_load * bearing_span_in / 4
    torque = te * inputs.pulley_diameter_in / 2 if inputs.is_drive_pulley else 0.0
    kt = KT_KEYWAY if inputs.is_drive_pulley else KT_PLAIN

    equivalent = math.sqrt(bending_moment ** 2 + 0.75 * torque ** 2)
    calculated_diameter = ((32 * safety_factor * kt / (math.pi * yield_psi)) * equivalent) ** (1 / 3)
    required_diameter = get_next_standard_diameter(calculated_diameter)

    # Report at the standard diameter
    d = required_diameter
    sigma_b = 32 * bending_moment * kt / (math.pi * d ** 3)
    tau = 16 * torque / (math.pi * d ** 3)
    von_mises = math.sqrt(sigma_b ** 2 + 3 * tau ** 2)

    moment_of_inertia = math.pi * d ** 4 / 64
    deflection = radial_load * bearing_span_in ** 3 / (48 * E_STEEL_PSI * moment_of_inertia)
    deflection_ok = deflection <= MAX_DEFLECTION_RATIO * bearing_span_in

    logger.debug(
        "Shaft sizing (%s): Te=%.1f R=%.1f M=%.1f T=%.1f d_calc=%.4f -> %.3f",
        "drive" if inputs.is_drive_pulley else "tail",
        te, radial_load, bending_moment, torque, calculated_diameter, required_diameter,
    )

    return ShaftSizingResult(
        required_diameter_in=required_diameter,
        calculated_diameter_in=round_half_up(calculated_diameter, 3),
        T1_lbf=round_half_up(t1, 1),
        T2_lbf=round_half_up(t2, 1),
        radial_load_lbf=round_half_up(radial_load, 1),
        bending_moment_inlbf=round_half_up(bending_moment, 1),
        torque_inlbf=round_half_up(torque, 1),
        von_mises_stress_psi=round_half_up(von_mises, 0),
        deflection_in=round_half_up(deflection, 4),
        deflection_ok=deflection_ok,
        bearing_span_in=bearing_span_in,
        wrap_angle_deg=wrap_angle_deg,
    )


def shaft_sizing_from_outputs(
    belt_width_in: float,
    pulley_diameter_in: float,
    total_belt_pull_lb: float,
    is_drive_pulley: bool,
    service_factor: Optional[float] = None,
) -> ShaftSizingResult:
    """Size a shaft straight from conveyor outputs (total belt pull as Te)."""
    return calculate_shaft_diameter(
        ShaftSizingInputs(
            belt_width_in=belt_width_in,
            pulley_diameter_in=pulley_diameter_in,
            effective_tension_lbf=total_belt_pull_lb,
            is_drive_pulley=is_drive_pulley,
            service_factor=service_factor,
        )
    )
