"""
Validation of conveyor inputs and calculation parameters.

Three layers, all returning field-tagged ValidationMessage lists:
- validate_inputs: range and presence checks (errors)
- validate_parameters: sanity checks on engine-wide parameters (errors)
- apply_application_rules: application fit (errors, warnings, info)

Errors block the calculation. Warnings and info travel with a
successful result.
"""

import logging
from typing import Optional

from conveyorcalc.models.inputs import (
    CalculationParameters,
    ConveyorInputs,
    EndGuards,
    FluidType,
    FrameHeightMode,
    LacingStyle,
    PartTemperatureClass,
    ShaftDiameterMode,
    SideLoadingDirection,
    SideLoadingSeverity,
    SpeedMode,
)
from conveyorcalc.models.outputs import ValidationMessage, ValidationSeverity
from conveyorcalc.rules.premium import calculate_premium_flags

logger = logging.getLogger(__name__)


# Power-user override ranges
SAFETY_FACTOR_RANGE = (1.0, 5.0)
BELT_COEFF_RANGE = (0.05, 0.30)
STARTING_PULL_MAX_LB = 2000.0
FRICTION_OVERRIDE_RANGE = (0.05, 0.6)
MOTOR_RPM_RANGE = (800.0, 3600.0)
SHAFT_DIAMETER_RANGE_IN = (0.5, 4.0)

# Application thresholds
LONG_CONVEYOR_IN = 120.0
HIGH_DROP_IN = 24.0
INCLINE_ERROR_DEG = 45.0
INCLINE_STRONG_WARNING_DEG = 35.0
INCLINE_WARNING_DEG = 20.0
SHORT_CYCLE_S = 10.0


def _error(field: str, message: str) -> ValidationMessage:
    return ValidationMessage(field=field, message=message, severity=ValidationSeverity.ERROR)


def _warning(field: str, message: str) -> ValidationMessage:
    return ValidationMessage(field=field, message=message, severity=ValidationSeverity.WARNING)


def _info(field: str, message: str) -> ValidationMessage:
    return ValidationMessage(field=field, message=message, severity=ValidationSeverity.INFO)


def _fmt(value: float) -> str:
    return f"{value:g}"


def _check_belt_coefficient(
    errors: list[ValidationMessage],
    field: str,
    label: str,
    value: Optional[float],
) -> None:
    """PIW/PIL style check: positive, then inside the 0.05-0.30 lb/in band."""
    if value is None:
        return
    low, high = BELT_COEFF_RANGE
    if value <= 0:
        errors.append(_error(field, f"{label} must be > 0"))
    if value < low or value > high:
        errors.append(_error(field, f"{label} should be between 0.05 and 0.30 lb/in"))


def _check_shaft_range(errors: list[ValidationMessage], field: str, label: str, value: Optional[float]) -> None:
    if value is None:
        return
    low, high = SHAFT_DIAMETER_RANGE_IN
    if value < low:
        errors.append(_error(field, f'{label} shaft diameter must be >= {low}"'))
    if value > high:
        errors.append(_error(field, f'{label} shaft diameter must be <= {high}"'))


def validate_inputs(inputs: ConveyorInputs) -> list[ValidationMessage]:
    """Range and presence checks on the inputs."""
    errors: list[ValidationMessage] = []

    # Geometry
    if inputs.conveyor_length_cc_in <= 0:
        errors.append(_error("conveyor_length_cc_in", "Conveyor Length (C-C) must be greater than 0"))
    if inputs.belt_width_in <= 0:
        errors.append(_error("belt_width_in", "Belt Width must be greater than 0"))
    if inputs.conveyor_incline_deg < 0:
        errors.append(_error("conveyor_incline_deg", "Incline Angle must be >= 0"))
    if inputs.drive_pulley_diameter_in is None or inputs.drive_pulley_diameter_in <= 0:
        errors.append(_error("pulley_diameter_in", "Pulley Diameter must be greater than 0"))
    if inputs.tail_pulley_diameter_in is None or inputs.tail_pulley_diameter_in <= 0:
        errors.append(_error("tail_pulley_diameter_in", "Tail Pulley Diameter must be greater than 0"))

    # Speed and throughput
    if inputs.speed_mode == SpeedMode.DRIVE_RPM:
        if inputs.drive_rpm is None or inputs.drive_rpm <= 0:
            errors.append(_error("drive_rpm", "Drive RPM must be greater than 0"))
    elif inputs.belt_speed_fpm is None or inputs.belt_speed_fpm <= 0:
        errors.append(_error("belt_speed_fpm", "Belt Speed must be greater than 0"))

    if inputs.required_throughput_pph is not None and inputs.required_throughput_pph < 0:
        errors.append(_error("required_throughput_pph", "Required throughput must be >= 0"))
    if inputs.throughput_margin_pct < 0:
        errors.append(_error("throughput_margin_pct", "Throughput margin must be >= 0"))

    # Parts (optional, checked only when given)
    if inputs.part_weight_lbs is not None and inputs.part_weight_lbs <= 0:
        errors.append(_error("part_weight_lbs", "Part Weight must be greater than 0"))
    if inputs.part_length_in is not None and inputs.part_length_in <= 0:
        errors.append(_error("part_length_in", "Part Length must be greater than 0"))
    if inputs.part_width_in is not None and inputs.part_width_in <= 0:
        errors.append(_error("part_width_in", "Part Width must be greater than 0"))
    if inputs.part_spacing_in < 0:
        errors.append(_error("part_spacing_in", "Part Spacing must be >= 0"))
    if inputs.drop_height_in < 0:
        errors.append(_error("drop_height_in", "Drop height cannot be negative."))

    # Power-user overrides
    if inputs.safety_factor is not None:
        low, high = SAFETY_FACTOR_RANGE
        if inputs.safety_factor < low:
            errors.append(_error("safety_factor", "Safety factor must be >= 1.0"))
        if inputs.safety_factor > high:
            errors.append(_error("safety_factor", "Safety factor must be <= 5.0"))

    _check_belt_coefficient(errors, "belt_coeff_piw", "PIW", inputs.belt_coeff_piw)
    _check_belt_coefficient(errors, "belt_coeff_pil", "PIL", inputs.belt_coeff_pil)

    if inputs.starting_belt_pull_lb is not None:
        if inputs.starting_belt_pull_lb < 0:
            errors.append(_error("starting_belt_pull_lb", "Starting belt pull must be >= 0"))
        if inputs.starting_belt_pull_lb > STARTING_PULL_MAX_LB:
            errors.append(_error("starting_belt_pull_lb", "Starting belt pull must be <= 2000"))

    if inputs.friction_coeff is not None:
        low, high = FRICTION_OVERRIDE_RANGE
        if inputs.friction_coeff < low:
            errors.append(_error("friction_coeff", "Friction coefficient must be >= 0.05"))
        if inputs.friction_coeff > high:
            errors.append(_error("friction_coeff", "Friction coefficient must be <= 0.6"))

    if inputs.motor_rpm is not None:
        low, high = MOTOR_RPM_RANGE
        if inputs.motor_rpm < low:
            errors.append(_error("motor_rpm", "Motor RPM must be >= 800"))
        if inputs.motor_rpm > high:
            errors.append(_error("motor_rpm", "Motor RPM must be <= 3600"))

    # Tracking
    if inputs.is_v_guided and not inputs.v_guide_profile:
        errors.append(
            _error("v_guide_profile", "V-guide profile is required when belt tracking method is V-guided")
        )

    # Shafts
    if inputs.shaft_diameter_mode == ShaftDiameterMode.MANUAL:
        if inputs.drive_shaft_diameter_in is None or inputs.drive_shaft_diameter_in <= 0:
            errors.append(
                _error("drive_shaft_diameter_in", "Drive shaft diameter is required when shaft diameter mode is Manual")
            )
        if inputs.tail_shaft_diameter_in is None or inputs.tail_shaft_diameter_in <= 0:
            errors.append(
                _error("tail_shaft_diameter_in", "Tail shaft diameter is required when shaft diameter mode is Manual")
            )

    _check_belt_coefficient(errors, "belt_piw_override", "Belt PIW override", inputs.belt_piw_override)
    _check_belt_coefficient(errors, "belt_pil_override", "Belt PIL override", inputs.belt_pil_override)

    _check_shaft_range(errors, "drive_shaft_diameter_in", "Drive", inputs.drive_shaft_diameter_in)
    _check_shaft_range(errors, "tail_shaft_diameter_in", "Tail", inputs.tail_shaft_diameter_in)

    # Frame
    if inputs.frame_height_mode == FrameHeightMode.CUSTOM:
        if inputs.custom_frame_height_in is None or inputs.custom_frame_height_in <= 0:
            errors.append(
                _error("custom_frame_height_in", "Custom frame height is required when frame height mode is Custom")
            )

    return errors


def validate_parameters(parameters: CalculationParameters) -> list[ValidationMessage]:
    errors: list[ValidationMessage] = []

    if parameters.friction_coeff < 0.1 or parameters.friction_coeff > 1.0:
        errors.append(_error("friction_coeff", "Friction coefficient must be between 0.1 and 1.0"))
    if parameters.safety_factor < 1.0:
        errors.append(_error("safety_factor", "Safety factor must be >= 1.0"))
    if parameters.starting_belt_pull_lb < 0:
        errors.append(_error("starting_belt_pull_lb", "Starting belt pull must be >= 0"))
    if parameters.motor_rpm <= 0:
        errors.append(_error("motor_rpm", "Motor RPM must be greater than 0"))
    if parameters.gravity_in_per_s2 <= 0:
        errors.append(_error("gravity_in_per_s2", "Gravity constant must be greater than 0"))

    return errors


def _minimum_pulley_errors(inputs: ConveyorInputs) -> list[ValidationMessage]:
    """Errors for pulleys below the selected belt's minimum diameter."""
    minimum = (
        inputs.belt_min_pulley_dia_with_vguide_in
        if inputs.is_v_guided
        else inputs.belt_min_pulley_dia_no_vguide_in
    )
    if minimum is None:
        return []

    tracking = "V-guided" if inputs.is_v_guided else "crowned"
    errors = []
    pulleys = [
        ("pulley_diameter_in", "Pulley diameter", inputs.drive_pulley_diameter_in),
        ("tail_pulley_diameter_in", "Tail pulley diameter", inputs.tail_pulley_diameter_in),
    ]
    for field, label, diameter in pulleys:
        if diameter is not None and 0 < diameter < minimum:
            errors.append(_error(
                field,
                f'{label} ({_fmt(diameter)}") is below the belt minimum ({_fmt(minimum)}" for {tracking} '
                "tracking). Increase pulley diameter or select a different belt.",
            ))
    return errors


def apply_application_rules(
    inputs: ConveyorInputs,
) -> tuple[list[ValidationMessage], list[ValidationMessage]]:
    """
    Application fit rules.

    Returns:
        Tuple of (errors, warnings); warnings include info notices
    """
    errors: list[ValidationMessage] = []
    warnings: list[ValidationMessage] = []

    # Temperature and fluids
    if inputs.part_temperature_class == PartTemperatureClass.RED_HOT:
        errors.append(_error("part_temperature_class", "Do not use belt conveyor for red hot parts"))
    if inputs.fluid_type == FluidType.CONSIDERABLE_OIL_LIQUID:
        warnings.append(_warning("fluid_type", "Consider ribbed or specialty belt"))
    if inputs.conveyor_length_cc_in > LONG_CONVEYOR_IN:
        warnings.append(_warning("conveyor_length_cc_in", "Consider multi-section body"))
    if inputs.part_temperature_class == PartTemperatureClass.HOT:
        warnings.append(_warning("part_temperature_class", "Consider high-temperature belt"))
    if inputs.fluid_type == FluidType.MINIMAL_RESIDUAL_OIL:
        warnings.append(_info("fluid_type", "Minimal residual oil present"))

    if inputs.drop_height_in >= HIGH_DROP_IN:
        warnings.append(_warning("drop_height_in", "Drop height is high. Consider impact or wear protection."))

    # Incline bands
    incline = inputs.conveyor_incline_deg
    if incline > INCLINE_ERROR_DEG:
        errors.append(_error(
            "conveyor_incline_deg",
            "Incline exceeds 45°. Belt conveyor without positive engagement is not supported by this model.",
        ))
    elif incline > INCLINE_STRONG_WARNING_DEG:
        warnings.append(_warning(
            "conveyor_incline_deg",
            "Incline exceeds 35°. Product retention by friction alone is unlikely. "
            "Cleats or positive engagement features are required for reliable operation.",
        ))
    elif incline > INCLINE_WARNING_DEG:
        warnings.append(_warning(
            "conveyor_incline_deg",
            "Incline exceeds 20°. Product retention by friction alone may be insufficient. "
            "Cleats or other retention features are typically required at this angle.",
        ))

    # Features and options
    if inputs.finger_safe and inputs.end_guards == EndGuards.NONE:
        warnings.append(_warning("end_guards", "Finger safety may require end guards depending on layout."))
    if inputs.finger_safe and not inputs.bottom_covers:
        warnings.append(_warning(
            "bottom_covers", "Bottom covers may be required to achieve finger-safe access underneath."
        ))
    if inputs.lacing_style == LacingStyle.CLIPPER_LACING:
        warnings.append(_warning("lacing_style", "Clipper lacing may interfere with end guards due to protrusion."))

    errors.extend(_minimum_pulley_errors(inputs))

    # Duty
    if (
        inputs.start_stop_application
        and inputs.cycle_time_seconds is not None
        and inputs.cycle_time_seconds < SHORT_CYCLE_S
    ):
        warnings.append(_warning(
            "cycle_time_seconds", "Frequent start/stop applications may require a higher-duty gearbox."
        ))

    # Side loading without a V-guide
    if inputs.side_loading_direction != SideLoadingDirection.NONE and not inputs.is_v_guided:
        if inputs.side_loading_severity == SideLoadingSeverity.HEAVY:
            warnings.append(_warning(
                "side_loading_severity", "Heavy side loading typically requires a V-guide for reliable tracking."
            ))
        elif inputs.side_loading_severity == SideLoadingSeverity.MODERATE:
            warnings.append(_warning(
                "side_loading_severity", "Moderate side loading may require a V-guide for reliable tracking."
            ))

    for reason in calculate_premium_flags(inputs).premium_reasons:
        warnings.append(_info("premium", f"Premium feature: {reason}"))

    return errors, warnings


def validate(
    inputs: ConveyorInputs,
    parameters: CalculationParameters,
) -> tuple[list[ValidationMessage], list[ValidationMessage]]:
    """
    Run every validation layer.

    Returns:
        Tuple of (errors, warnings) in input, parameter, rule order
    """
    input_errors = validate_inputs(inputs)
    parameter_errors = validate_parameters(parameters)
    rule_errors, warnings = apply_application_rules(inputs)

    errors = input_errors + parameter_errors + rule_errors
    if errors:
        logger.info("Validation found %d error(s), %d warning(s)", len(errors), len(warnings))
    return errors, warnings
