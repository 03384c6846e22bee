"""
Drive speed, torque, ratio and throughput calculations.

ASSUMPTIONS:
- No belt slip: belt speed equals drive pulley surface speed
- Drive torque is total belt pull at the drive pulley radius times the
  safety factor
- Bottom mount drives add a single chain stage between gearmotor and
  drive shaft; shaft mounted drives have none
"""

import math
from dataclasses import dataclass
from typing import Optional

from conveyorcalc.models.inputs import GearmotorMountingStyle
from conveyorcalc.physics.units import INCHES_PER_FOOT, MINUTES_PER_HOUR, fpm_to_in_per_hour


@dataclass
class ThroughputMetrics:
    """Capacity and, when a requirement is given, margin against it."""
    pitch_in: float
    capacity_pph: float
    target_pph: Optional[float] = None
    meets_throughput: Optional[bool] = None
    rpm_required_for_target: Optional[float] = None
    throughput_margin_achieved_pct: Optional[float] = None


def pulley_circumference_ft(pulley_diameter_in: float) -> float:
    return math.pi * pulley_diameter_in / INCHES_PER_FOOT


def drive_rpm_from_belt_speed(belt_speed_fpm: float, pulley_diameter_in: float) -> float:
    """
    Drive shaft speed for a belt speed.

    Equations:
        rpm = fpm / (pi * D / 12)
    """
    circumference = pulley_circumference_ft(pulley_diameter_in)
    if circumference <= 0:
        return 0.0
    return belt_speed_fpm / circumference


def belt_speed_from_drive_rpm(drive_rpm: float, pulley_diameter_in: float) -> float:
    """
    Belt speed for a drive shaft speed.

    Equations:
        fpm = rpm * pi * D / 12
    """
    return drive_rpm * pulley_circumference_ft(pulley_diameter_in)


def calculate_drive_torque(total_belt_pull_lb: float, drive_pulley_diameter_in: float, safety_factor: float) -> float:
    """Drive shaft torque (in-lbf) = total pull * D/2 * safety factor."""
    return total_belt_pull_lb * (drive_pulley_diameter_in / 2) * safety_factor


def calculate_gear_ratio(motor_rpm: float, drive_shaft_rpm: float) -> float:
    """Overall reduction from motor to drive shaft; 0 for a stopped drive."""
    if drive_shaft_rpm <= 0:
        return 0.0
    return motor_rpm / drive_shaft_rpm


def calculate_chain_ratio(
    mounting_style: GearmotorMountingStyle,
    drive_shaft_sprocket_teeth: int,
    gm_sprocket_teeth: int,
) -> float:
    """
    Chain stage ratio between gearmotor and drive shaft.

    1.0 for shaft mounted drives, and for a bottom mount with no usable
    gearmotor sprocket.
    """
    if mounting_style != GearmotorMountingStyle.BOTTOM_MOUNT:
        return 1.0
    if gm_sprocket_teeth <= 0:
        return 1.0
    return drive_shaft_sprocket_teeth / gm_sprocket_teeth


def calculate_throughput(
    belt_speed_fpm: float,
    pitch_in: float,
    drive_pulley_diameter_in: float,
    required_throughput_pph: Optional[float] = None,
    throughput_margin_pct: float = 0.0,
) -> ThroughputMetrics:
    """
    Parts-per-hour capacity and margin to the required rate.

    Equations:
        capacity = fpm * 12 * 60 / pitch
        target = required * (1 + margin / 100)
        rpm_required = target * pitch / (12 * 60 * pi * D / 12)
        margin_achieved = (capacity / required - 1) * 100

    Target metrics are reported only for a positive requirement.
    """
    capacity = fpm_to_in_per_hour(belt_speed_fpm) / pitch_in if pitch_in > 0 else 0.0
    metrics = ThroughputMetrics(pitch_in=pitch_in, capacity_pph=capacity)

    if required_throughput_pph is None or required_throughput_pph <= 0:
        return metrics

    target = required_throughput_pph * (1 + throughput_margin_pct / 100)
    circumference = pulley_circumference_ft(drive_pulley_diameter_in)
    denominator = INCHES_PER_FOOT * MINUTES_PER_HOUR * circumference

    metrics.target_pph = target
    metrics.meets_throughput = capacity >= target
    metrics.rpm_required_for_target = target * pitch_in / denominator if denominator > 0 else 0.0
    metrics.throughput_margin_achieved_pct = (capacity / required_throughput_pph - 1) * 100
    return metrics
