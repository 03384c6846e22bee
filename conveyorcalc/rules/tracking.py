"""
Belt tracking guidance (crowned vs V-guided).

Produces a plain-English recommendation from six risk factors:
- Length-to-width ratio
- Reversing operation
- Side loading
- Accumulation (start/stop with short cycles)
- Environment
- Belt speed

No crown geometry is calculated here; this is advisory only.
"""

import math
from typing import Optional

from conveyorcalc.models.inputs import (
    BeltTrackingMethod,
    ConveyorInputs,
    DirectionMode,
    EnvironmentFactors,
    SideLoadingDirection,
    SideLoadingSeverity,
)
from conveyorcalc.models.outputs import TrackingGuidance, TrackingRiskFactor, TrackingRiskLevel


def _fmt(value: float) -> str:
    """Format a number without a trailing .0 (50 -> '50', 62.5 -> '62.5')."""
    return f"{value:g}"


class TrackingAdvisor:
    """
    Assesses belt tracking risk for a configuration.

    Overall risk:
    - any High factor, or two or more Medium factors: High
    - exactly one Medium factor: Medium
    - otherwise Low

    Medium and High both recommend V-guided tracking.
    """

    # Length-to-width ratio thresholds
    LW_RATIO_TOO_LOW = 2.0
    LW_RATIO_LOW = 3.0
    LW_RATIO_HIGH = 6.0

    # Belt speed thresholds (fpm)
    SPEED_MEDIUM = 100.0
    SPEED_HIGH = 200.0

    SHORT_CYCLE_S = 10.0
    NARROW_BELT_IN = 12.0

    def __init__(self, inputs: ConveyorInputs, belt_speed_fpm: Optional[float] = None):
        """
        Args:
            inputs: Conveyor configuration
            belt_speed_fpm: Resolved belt speed. Defaults to the input belt
                speed, which is unset in drive_rpm mode.
        """
        self.inputs = inputs
        if belt_speed_fpm is None:
            belt_speed_fpm = inputs.belt_speed_fpm or 0.0
        self.belt_speed_fpm = belt_speed_fpm

    @property
    def lw_ratio(self) -> float:
        width = self.inputs.belt_width_in
        if not width or width <= 0:
            return math.inf
        return self.inputs.conveyor_length_cc_in / width

    @property
    def is_crowned(self) -> bool:
        return self.inputs.belt_tracking_method == BeltTrackingMethod.CROWNED

    def assess(self) -> TrackingGuidance:
        factors = [
            self._assess_lw_ratio(),
            self._assess_direction(),
            self._assess_side_loading(),
            self._assess_accumulation(),
            self._assess_environment(),
            self._assess_belt_speed(),
        ]

        risk_level = self._overall_risk(factors)
        if risk_level == TrackingRiskLevel.LOW:
            recommendation = BeltTrackingMethod.CROWNED
        else:
            recommendation = BeltTrackingMethod.V_GUIDED

        return TrackingGuidance(
            recommendation=recommendation,
            risk_level=risk_level,
            summary=self._summary(risk_level),
            factors=factors,
            warnings=self._warnings(),
            notes=self._notes(recommendation),
        )

    @staticmethod
    def _overall_risk(factors: list[TrackingRiskFactor]) -> TrackingRiskLevel:
        high = sum(1 for f in factors if f.risk == TrackingRiskLevel.HIGH)
        medium = sum(1 for f in factors if f.risk == TrackingRiskLevel.MEDIUM)
        if high >= 1 or medium >= 2:
            return TrackingRiskLevel.HIGH
        if medium == 1:
            return TrackingRiskLevel.MEDIUM
        return TrackingRiskLevel.LOW

    def _assess_lw_ratio(self) -> TrackingRiskFactor:
        ratio = self.lw_ratio
        name = "Length-to-Width Ratio"
        if ratio <= self.LW_RATIO_LOW:
            return TrackingRiskFactor(
                name=name,
                risk=TrackingRiskLevel.LOW,
                explanation=f"L:W ratio of {ratio:.1f}:1 is favorable for crowned tracking.",
            )
        if ratio <= self.LW_RATIO_HIGH:
            return TrackingRiskFactor(
                name=name,
                risk=TrackingRiskLevel.MEDIUM,
                explanation=(
                    f"L:W ratio of {ratio:.1f}:1 is moderate. "
                    "Consider V-guided for better tracking stability."
                ),
            )
        return TrackingRiskFactor(
            name=name,
            risk=TrackingRiskLevel.HIGH,
            explanation=f"L:W ratio of {ratio:.1f}:1 is high. V-guided tracking is strongly recommended.",
        )

    def _assess_direction(self) -> TrackingRiskFactor:
        name = "Reversing Operation"
        if self.inputs.direction_mode == DirectionMode.REVERSING:
            return TrackingRiskFactor(
                name=name,
                risk=TrackingRiskLevel.HIGH,
                explanation=(
                    "Reversing operation makes crowned tracking unreliable. "
                    "V-guided is strongly recommended."
                ),
            )
        return TrackingRiskFactor(
            name=name,
            risk=TrackingRiskLevel.LOW,
            explanation="One-direction operation is compatible with crowned tracking.",
        )

    def _assess_side_loading(self) -> TrackingRiskFactor:
        name = "Side Loading"
        direction = self.inputs.side_loading_direction
        if direction == SideLoadingDirection.NONE:
            return TrackingRiskFactor(
                name=name,
                risk=TrackingRiskLevel.LOW,
                explanation="No side loading allows crowned tracking to work effectively.",
            )

        side = direction.value.lower()
        severity = self.inputs.side_loading_severity
        if severity == SideLoadingSeverity.LIGHT:
            return TrackingRiskFactor(
                name=name,
                risk=TrackingRiskLevel.MEDIUM,
                explanation=f"Light side loading from {side} may cause occasional mis-tracking with crowned pulleys.",
            )
        if severity == SideLoadingSeverity.MODERATE:
            return TrackingRiskFactor(
                name=name,
                risk=TrackingRiskLevel.MEDIUM,
                explanation=(
                    f"Moderate side loading from {side} increases tracking difficulty. V-guided is recommended."
                ),
            )
        return TrackingRiskFactor(
            name=name,
            risk=TrackingRiskLevel.HIGH,
            explanation=(
                f"Heavy side loading from {side} will likely cause belt mis-tracking. "
                "V-guided is strongly recommended."
            ),
        )

    def _assess_accumulation(self) -> TrackingRiskFactor:
        name = "Accumulation"
        if not self.inputs.start_stop_application:
            return TrackingRiskFactor(
                name=name,
                risk=TrackingRiskLevel.LOW,
                explanation="Continuous operation without accumulation is ideal for crowned tracking.",
            )

        cycle = self.inputs.cycle_time_seconds
        if cycle is not None and cycle < self.SHORT_CYCLE_S:
            return TrackingRiskFactor(
                name=name,
                risk=TrackingRiskLevel.MEDIUM,
                explanation=(
                    f"Frequent start/stop ({_fmt(cycle)}s cycle) with accumulation may stress belt tracking."
                ),
            )
        return TrackingRiskFactor(
            name=name,
            risk=TrackingRiskLevel.LOW,
            explanation="Start/stop operation with adequate cycle time is compatible with crowned tracking.",
        )

    def _assess_environment(self) -> TrackingRiskFactor:
        name = "Environment"
        environment = self.inputs.environment_factors
        if environment == EnvironmentFactors.WASHDOWN:
            return TrackingRiskFactor(
                name=name,
                risk=TrackingRiskLevel.MEDIUM,
                explanation=(
                    "Washdown environments may cause belt slip on crowned pulleys. "
                    "Consider V-guided or lagged pulleys."
                ),
            )
        if environment == EnvironmentFactors.DUSTY:
            return TrackingRiskFactor(
                name=name,
                risk=TrackingRiskLevel.MEDIUM,
                explanation=(
                    "Dusty environments can affect belt grip on crowned pulleys. "
                    "Regular maintenance is important."
                ),
            )
        if environment == EnvironmentFactors.OUTDOOR:
            return TrackingRiskFactor(
                name=name,
                risk=TrackingRiskLevel.LOW,
                explanation="Outdoor installation is compatible with crowned tracking with proper belt selection.",
            )
        return TrackingRiskFactor(
            name=name,
            risk=TrackingRiskLevel.LOW,
            explanation="Indoor environment is ideal for crowned tracking.",
        )

    def _assess_belt_speed(self) -> TrackingRiskFactor:
        name = "Belt Speed"
        speed = _fmt(self.belt_speed_fpm)
        if self.belt_speed_fpm <= self.SPEED_MEDIUM:
            return TrackingRiskFactor(
                name=name,
                risk=TrackingRiskLevel.LOW,
                explanation=f"Belt speed of {speed} FPM is low. Crowned tracking is suitable.",
            )
        if self.belt_speed_fpm <= self.SPEED_HIGH:
            return TrackingRiskFactor(
                name=name,
                risk=TrackingRiskLevel.MEDIUM,
                explanation=f"Belt speed of {speed} FPM is moderate. Tracking adjustment may be needed.",
            )
        return TrackingRiskFactor(
            name=name,
            risk=TrackingRiskLevel.HIGH,
            explanation=f"Belt speed of {speed} FPM is high. V-guided tracking provides better stability.",
        )

    def _warnings(self) -> list[str]:
        """Warnings about the current selection, only raised for crowned tracking."""
        warnings: list[str] = []
        if not self.is_crowned:
            return warnings

        if self.inputs.direction_mode == DirectionMode.REVERSING:
            warnings.append(
                "Reversing operation with crowned tracking may cause belt mis-tracking. "
                "V-guided is strongly recommended."
            )

        ratio = self.lw_ratio
        if ratio > self.LW_RATIO_HIGH:
            warnings.append(
                f"High length-to-width ratio ({ratio:.1f}:1) with crowned tracking increases mis-tracking risk."
            )
        if ratio < self.LW_RATIO_TOO_LOW:
            warnings.append(
                f"Low length-to-width ratio ({ratio:.1f}:1) with crowned tracking increases "
                "mis-tracking risk. Consider V-guided tracking."
            )

        if (
            self.inputs.side_loading_direction != SideLoadingDirection.NONE
            and self.inputs.side_loading_severity == SideLoadingSeverity.HEAVY
        ):
            warnings.append("Heavy side loading with crowned tracking will likely cause belt wander.")

        return warnings

    def _notes(self, recommendation: BeltTrackingMethod) -> list[str]:
        notes: list[str] = []
        if recommendation == BeltTrackingMethod.CROWNED:
            notes.append("Crowned pulleys are cost-effective and suitable for this application.")
            if self.inputs.belt_width_in < self.NARROW_BELT_IN:
                notes.append("Narrow belts may require more frequent tracking adjustment.")
            return notes

        notes.append("V-guided tracking provides positive belt control for demanding applications.")
        notes.append("V-guide adds belt cost but reduces maintenance and downtime.")
        if self.is_crowned:
            notes.append("Current selection: Crowned. Consider switching to V-guided for better reliability.")
        return notes

    @staticmethod
    def _summary(risk_level: TrackingRiskLevel) -> str:
        if risk_level == TrackingRiskLevel.LOW:
            return "Crowned tracking is suitable for this application."
        if risk_level == TrackingRiskLevel.MEDIUM:
            return "V-guided tracking is recommended for improved reliability."
        return "V-guided tracking is strongly recommended due to demanding conditions."


def calculate_tracking_guidance(
    inputs: ConveyorInputs,
    belt_speed_fpm: Optional[float] = None,
) -> TrackingGuidance:
    return TrackingAdvisor(inputs, belt_speed_fpm).assess()


def tracking_tooltip(inputs: ConveyorInputs, belt_speed_fpm: Optional[float] = None) -> str:
    """Short tooltip naming the factors that drive the recommendation."""
    guidance = calculate_tracking_guidance(inputs, belt_speed_fpm)

    high = [f.name.lower() for f in guidance.factors if f.risk == TrackingRiskLevel.HIGH]
    if high:
        return f"V-guided recommended due to: {', '.join(high)}"

    medium = [f.name.lower() for f in guidance.factors if f.risk == TrackingRiskLevel.MEDIUM]
    if medium:
        return f"Consider V-guided due to: {', '.join(medium)}"

    return "Crowned tracking is suitable for this application."


def is_tracking_selection_optimal(inputs: ConveyorInputs, belt_speed_fpm: Optional[float] = None) -> bool:
    guidance = calculate_tracking_guidance(inputs, belt_speed_fpm)
    return inputs.belt_tracking_method == guidance.recommendation
