"""
Physics calculations for belt conveyor sizing.

This module provides plain-float formulas in inch-pound units for:
- Belt weight, load and pull
- Drive speed, torque, ratios and throughput
- Frame, pulley face and return roller geometry
- Pulley shaft sizing by von Mises stress

pint is used for metric conversions at the reporting edge.
"""

from conveyorcalc.physics.units import ureg, Q_, round_half_up, to_metric
from conveyorcalc.physics.belt import (
    BeltCoefficients,
    resolve_belt_coefficients,
    calculate_total_belt_length,
    calculate_belt_weight,
    calculate_parts_on_belt,
    calculate_friction_pull,
    calculate_incline_pull,
)
from conveyorcalc.physics.drive import (
    ThroughputMetrics,
    drive_rpm_from_belt_speed,
    belt_speed_from_drive_rpm,
    calculate_drive_torque,
    calculate_chain_ratio,
    calculate_throughput,
)
from conveyorcalc.physics.geometry import (
    FrameHeightResult,
    calculate_frame_height,
    calculate_pulley_face,
    calculate_roller_layout,
    check_minimum_pulley,
)
from conveyorcalc.physics.shaft import (
    STANDARD_SHAFT_DIAMETERS,
    calculate_shaft_diameter,
    get_next_standard_diameter,
    is_standard_diameter,
    shaft_sizing_from_outputs,
)

__all__ = [
    # Units
    "ureg",
    "Q_",
    "round_half_up",
    "to_metric",
    # Belt
    "BeltCoefficients",
    "resolve_belt_coefficients",
    "calculate_total_belt_length",
    "calculate_belt_weight",
    "calculate_parts_on_belt",
    "calculate_friction_pull",
    "calculate_incline_pull",
    # Drive
    "ThroughputMetrics",
    "drive_rpm_from_belt_speed",
    "belt_speed_from_drive_rpm",
    "calculate_drive_torque",
    "calculate_chain_ratio",
    "calculate_throughput",
    # Geometry
    "FrameHeightResult",
    "calculate_frame_height",
    "calculate_pulley_face",
    "calculate_roller_layout",
    "check_minimum_pulley",
    # Shaft
    "STANDARD_SHAFT_DIAMETERS",
    "calculate_shaft_diameter",
    "get_next_standard_diameter",
    "is_standard_diameter",
    "shaft_sizing_from_outputs",
]
