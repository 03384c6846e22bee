"""
Gearmotor selector.

Selects gearmotors from already-fetched catalog performance points:
- Required output RPM
- Required output torque (lb-in)
- Chosen service factor
- Speed tolerance percentage

Series policy: FLEXBLOC first, MINICASE as fallback.

Ranking:
1. Smallest oversize ratio (catalog torque / required torque)
2. Closest speed match
3. Smallest motor HP

Everything here is synchronous and pure; catalog access lives in
conveyorcalc.gearmotor.source.
"""

import functools
import logging
from typing import Iterable, Optional

from conveyorcalc.gearmotor.evaluate import evaluate_point
from conveyorcalc.gearmotor.models import (
    EvaluatedPoint,
    GearmotorCandidate,
    GearmotorSelectionInputs,
    GearmotorSelectionResult,
    GearmotorSeries,
    PerformancePoint,
    SERIES_ORDER,
)

logger = logging.getLogger(__name__)


OVERSIZE_TOLERANCE = 0.001
SPEED_DELTA_TOLERANCE = 0.01


def speed_bounds(inputs: GearmotorSelectionInputs) -> tuple[float, float]:
    """(min_rpm, max_rpm) for the requirement and tolerance."""
    band = inputs.required_output_rpm * (inputs.speed_tolerance_pct / 100)
    return inputs.required_output_rpm - band, inputs.required_output_rpm + band


def evaluate_points(
    points: Iterable[PerformancePoint],
    inputs: GearmotorSelectionInputs,
) -> list[EvaluatedPoint]:
    """Evaluate every row, keeping failures for display."""
    return [
        EvaluatedPoint(
            point=point,
            evaluation=evaluate_point(
                point,
                required_torque=inputs.required_output_torque_lb_in,
                required_rpm=inputs.required_output_rpm,
                service_factor=inputs.chosen_service_factor,
                speed_tolerance_pct=inputs.speed_tolerance_pct,
            ),
        )
        for point in points
    ]


def _to_candidate(evaluated: EvaluatedPoint, inputs: GearmotorSelectionInputs) -> GearmotorCandidate:
    point = evaluated.point
    speed_delta = abs(point.output_rpm - inputs.required_output_rpm)
    return GearmotorCandidate(
        point=point,
        evaluation=evaluated.evaluation,
        oversize_ratio=point.output_torque_lb_in / inputs.required_output_torque_lb_in,
        speed_delta=speed_delta,
        speed_delta_pct=speed_delta / inputs.required_output_rpm * 100,
    )


def filter_candidates(
    points: Iterable[PerformancePoint],
    inputs: GearmotorSelectionInputs,
) -> list[GearmotorCandidate]:
    """
    Rows whose evaluation passes on torque, speed and service factor.

    Invalid requirements (any of rpm, torque or service factor <= 0)
    match nothing.
    """
    if input_error(inputs):
        return []
    return [
        _to_candidate(evaluated, inputs)
        for evaluated in evaluate_points(points, inputs)
        if evaluated.evaluation.pass_all
    ]


def _compare(a: GearmotorCandidate, b: GearmotorCandidate) -> float:
    oversize_diff = a.oversize_ratio - b.oversize_ratio
    if abs(oversize_diff) > OVERSIZE_TOLERANCE:
        return oversize_diff

    speed_diff = a.speed_delta - b.speed_delta
    if abs(speed_diff) > SPEED_DELTA_TOLERANCE:
        return speed_diff

    return a.point.motor_hp - b.point.motor_hp


def rank_candidates(candidates: list[GearmotorCandidate]) -> list[GearmotorCandidate]:
    """Best first. Ties within tolerance fall through to the next key."""
    return sorted(candidates, key=functools.cmp_to_key(_compare))


def input_error(inputs: GearmotorSelectionInputs) -> Optional[str]:
    if inputs.required_output_rpm <= 0:
        return "Required output RPM must be greater than 0"
    if inputs.required_output_torque_lb_in <= 0:
        return "Required output torque must be greater than 0"
    if inputs.chosen_service_factor <= 0:
        return "Service factor must be greater than 0"
    return None


def no_match_message(inputs: GearmotorSelectionInputs) -> str:
    return (
        f"No gearmotor found matching requirements: {inputs.required_output_rpm:g} RPM, "
        f"{inputs.required_output_torque_lb_in:g} lb-in @ SF {inputs.chosen_service_factor:g}. "
        "Try adjusting the service factor or speed tolerance."
    )


def select_from_series(
    points_by_series: dict[GearmotorSeries, list[PerformancePoint]],
    inputs: GearmotorSelectionInputs,
) -> GearmotorSelectionResult:
    """
    Apply the series policy over points grouped by series.

    The first series in SERIES_ORDER with any passing row wins.
    """
    error = input_error(inputs)
    if error:
        return GearmotorSelectionResult(candidates=[], selected_series=None, message=error, inputs=inputs)

    evaluations: list[EvaluatedPoint] = []
    for series in SERIES_ORDER:
        series_points = points_by_series.get(series, [])
        evaluated = evaluate_points(series_points, inputs)
        evaluations.extend(evaluated)

        passing = [_to_candidate(e, inputs) for e in evaluated if e.evaluation.pass_all]
        if passing:
            ranked = rank_candidates(passing)
            logger.info("Selected %d %s candidate(s)", len(ranked), series.value)
            return GearmotorSelectionResult(
                candidates=ranked,
                selected_series=series,
                message=None,
                inputs=inputs,
                evaluations=evaluations,
            )

    logger.warning(
        "No gearmotor candidates for %.2f RPM / %.1f lb-in @ SF %.2f",
        inputs.required_output_rpm,
        inputs.required_output_torque_lb_in,
        inputs.chosen_service_factor,
    )
    return GearmotorSelectionResult(
        candidates=[],
        selected_series=None,
        message=no_match_message(inputs),
        inputs=inputs,
        evaluations=evaluations,
    )


def select_gearmotor(
    points: Iterable[PerformancePoint],
    inputs: GearmotorSelectionInputs,
) -> GearmotorSelectionResult:
    """
    Select gearmotor candidates from a catalog.

    Args:
        points: Catalog performance points (any series)
        inputs: Selection requirements

    Returns:
        GearmotorSelectionResult with ranked candidates, or an empty list
        and a message
    """
    grouped: dict[GearmotorSeries, list[PerformancePoint]] = {}
    for point in points:
        grouped.setdefault(point.series, []).append(point)
    return select_from_series(grouped, inputs)
