"""
Gearmotor candidate evaluation.

PASS RULES:
- pass_torque: catalog torque >= required torque (no SF adjustment)
- pass_rpm: catalog rpm within +/- tolerance % of required rpm
- pass_sf: catalog SF >= applied SF (unset catalog SF reads as 1.0)

The service factor only filters. Margin is always against the raw
required torque, so it does not move when the applied SF changes.
"""

import math
from typing import Optional

from conveyorcalc.gearmotor.models import CandidateEvaluation, PerformancePoint


DEFAULT_SPEED_TOLERANCE_PCT = 15.0


def evaluate_candidate(
    required_torque: float,
    required_rpm: float,
    service_factor: float,
    candidate_torque: float,
    candidate_rpm: float,
    candidate_sf: Optional[float] = None,
    speed_tolerance_pct: float = DEFAULT_SPEED_TOLERANCE_PCT,
) -> CandidateEvaluation:
    """
    Evaluate one catalog row against the requirement.

    Args:
        required_torque: Required output torque (lb-in)
        required_rpm: Required output speed (rev/min)
        service_factor: Applied service factor
        candidate_torque: Catalog output torque (lb-in)
        candidate_rpm: Catalog output speed (rev/min)
        candidate_sf: Catalog service factor
        speed_tolerance_pct: Allowed speed deviation (%)

    Returns:
        CandidateEvaluation
    """
    catalog_sf = candidate_sf or 1.0

    pass_torque = candidate_torque >= required_torque

    if required_rpm > 0:
        rpm_delta_pct = (candidate_rpm - required_rpm) / required_rpm * 100
        pass_rpm = abs(rpm_delta_pct) <= speed_tolerance_pct
    else:
        rpm_delta_pct = 0.0
        pass_rpm = False

    pass_sf = catalog_sf >= service_factor

    if required_torque > 0:
        margin_pct = (candidate_torque / required_torque - 1) * 100
    else:
        margin_pct = 0.0

    return CandidateEvaluation(
        pass_torque=pass_torque,
        pass_rpm=pass_rpm,
        pass_sf=pass_sf,
        pass_all=pass_torque and pass_rpm and pass_sf,
        margin_pct=margin_pct,
        rpm_delta_pct=rpm_delta_pct,
        required_torque_raw=required_torque,
    )


def evaluate_point(
    point: PerformancePoint,
    required_torque: float,
    required_rpm: float,
    service_factor: float,
    speed_tolerance_pct: float = DEFAULT_SPEED_TOLERANCE_PCT,
) -> CandidateEvaluation:
    return evaluate_candidate(
        required_torque=required_torque,
        required_rpm=required_rpm,
        service_factor=service_factor,
        candidate_torque=point.output_torque_lb_in,
        candidate_rpm=point.output_rpm,
        candidate_sf=point.service_factor_catalog,
        speed_tolerance_pct=speed_tolerance_pct,
    )


def format_margin_pct(margin_pct: float) -> int:
    """Whole-percent margin for display, halves rounded up: 20.5 -> 21, -15.3 -> -15."""
    return int(math.floor(margin_pct + 0.5))
