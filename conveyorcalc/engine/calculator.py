"""
Belt conveyor calculation engine.

calculate() runs the formula pipeline over validated inputs and always
returns a complete ConveyorOutputs. run_calculation() wraps it with
validation and audit metadata; validation errors short-circuit with no
outputs at all.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from conveyorcalc.config import settings
from conveyorcalc.models.inputs import (
    BedType,
    CalculationParameters,
    ConveyorInputs,
    DEFAULT_PARAMETERS,
    ShaftDiameterMode,
    SpeedMode,
)
from conveyorcalc.models.outputs import CalculationMetadata, CalculationResult, ConveyorOutputs
from conveyorcalc.engine.resolve import resolve_inputs
from conveyorcalc.physics import belt, drive, geometry
from conveyorcalc.physics.shaft import shaft_sizing_from_outputs
from conveyorcalc.rules.premium import calculate_premium_flags
from conveyorcalc.rules.tracking import calculate_tracking_guidance
from conveyorcalc.rules.validation import validate

logger = logging.getLogger(__name__)


MODEL_KEY = "belt_conveyor_v1"

# Keys of earlier models that now calculate with the belt conveyor model
LEGACY_MODEL_KEYS = {
    "sliderbed_conveyor_v1": MODEL_KEY,
}


def is_legacy_model_key(key: str) -> bool:
    return key in LEGACY_MODEL_KEYS


def resolve_model_key(key: Optional[str]) -> str:
    """
    Canonical model key.

    Raises:
        ValueError: If the key names no known model
    """
    if key is None or key == MODEL_KEY:
        return MODEL_KEY
    if key in LEGACY_MODEL_KEYS:
        return LEGACY_MODEL_KEYS[key]
    raise ValueError(f"Unknown model key: {key!r}")


def calculate(
    inputs: ConveyorInputs,
    parameters: CalculationParameters = DEFAULT_PARAMETERS,
) -> ConveyorOutputs:
    """
    Run the full formula pipeline.

    Args:
        inputs: Validated conveyor configuration
        parameters: Engine-wide defaults

    Returns:
        ConveyorOutputs with every derived quantity

    The step order matches saved-configuration behavior: coefficients,
    belt length, belt weight, parts and load, total load, friction pull,
    incline pull, starting pull, total pull, speed, torque, ratios,
    throughput, then tracking, shafts, frame and classification.
    """
    r = resolve_inputs(inputs, parameters)
    coeffs = r.coefficients

    # Belt and load
    belt_length = belt.calculate_total_belt_length(
        inputs.conveyor_length_cc_in, r.drive_pulley_diameter_in, r.tail_pulley_diameter_in
    )
    belt_weight = belt.calculate_belt_weight(coeffs.piw, coeffs.pil, inputs.belt_width_in, belt_length)

    travel = belt.part_travel_dimension(inputs.orientation, inputs.part_length_in, inputs.part_width_in)
    pitch = belt.calculate_pitch(travel, inputs.part_spacing_in)
    parts_on_belt = belt.calculate_parts_on_belt(inputs.conveyor_length_cc_in, pitch)
    load_on_belt = belt.calculate_load_on_belt(parts_on_belt, r.part_weight_lbs)
    total_load = belt.calculate_total_load(belt_weight, load_on_belt)
    avg_load_per_ft = belt.calculate_avg_load_per_ft(total_load, inputs.conveyor_length_cc_in)
    belt_pull_calc = belt.calculate_belt_pull_legacy(avg_load_per_ft, r.friction_coeff, inputs.conveyor_length_cc_in)

    # Pull
    friction_pull = belt.calculate_friction_pull(r.friction_coeff, total_load)
    incline_pull = belt.calculate_incline_pull(total_load, inputs.conveyor_incline_deg)
    total_pull = belt.calculate_total_belt_pull(friction_pull, incline_pull, r.starting_belt_pull_lb)

    # Speed and drive
    if r.speed_mode == SpeedMode.DRIVE_RPM:
        drive_shaft_rpm = r.drive_rpm
        belt_speed = drive.belt_speed_from_drive_rpm(drive_shaft_rpm, r.drive_pulley_diameter_in)
    else:
        belt_speed = r.belt_speed_fpm
        drive_shaft_rpm = drive.drive_rpm_from_belt_speed(belt_speed, r.drive_pulley_diameter_in)

    torque = drive.calculate_drive_torque(total_pull, r.drive_pulley_diameter_in, r.safety_factor)
    gear_ratio = drive.calculate_gear_ratio(r.motor_rpm, drive_shaft_rpm)
    chain_ratio = drive.calculate_chain_ratio(
        inputs.gearmotor_mounting_style, inputs.drive_shaft_sprocket_teeth, inputs.gm_sprocket_teeth
    )

    throughput = drive.calculate_throughput(
        belt_speed,
        pitch,
        r.drive_pulley_diameter_in,
        r.required_throughput_pph,
        inputs.throughput_margin_pct,
    )

    # Tracking and pulleys
    face = geometry.calculate_pulley_face(inputs.belt_width_in, inputs.is_v_guided, parameters)
    min_pulley = geometry.check_minimum_pulley(
        inputs.is_v_guided,
        r.drive_pulley_diameter_in,
        r.tail_pulley_diameter_in,
        inputs.belt_min_pulley_dia_no_vguide_in,
        inputs.belt_min_pulley_dia_with_vguide_in,
    )

    # Shafts
    drive_sizing = None
    tail_sizing = None
    if inputs.shaft_diameter_mode == ShaftDiameterMode.MANUAL:
        drive_shaft_diameter = r.manual_drive_shaft_diameter_in
        tail_shaft_diameter = r.manual_tail_shaft_diameter_in
    else:
        drive_sizing = shaft_sizing_from_outputs(
            inputs.belt_width_in, r.drive_pulley_diameter_in, total_pull, is_drive_pulley=True
        )
        tail_sizing = shaft_sizing_from_outputs(
            inputs.belt_width_in, r.tail_pulley_diameter_in, total_pull, is_drive_pulley=False
        )
        drive_shaft_diameter = drive_sizing.required_diameter_in
        tail_shaft_diameter = tail_sizing.required_diameter_in

    # Frame and rollers
    frame = geometry.calculate_frame_height(
        inputs.frame_height_mode,
        r.drive_pulley_diameter_in,
        r.tail_pulley_diameter_in,
        inputs.custom_frame_height_in,
    )
    rollers = geometry.calculate_roller_layout(inputs.conveyor_length_cc_in, frame.requires_snub_rollers)

    logger.debug(
        "Pipeline: load=%.3f pull=%.3f torque=%.3f rpm=%.3f",
        total_load, total_pull, torque, drive_shaft_rpm,
    )

    return ConveyorOutputs(
        piw_used=coeffs.piw,
        pil_used=coeffs.pil,
        belt_piw_effective=coeffs.belt_piw_effective,
        belt_pil_effective=coeffs.belt_pil_effective,
        total_belt_length_in=belt_length,
        belt_weight_lbf=belt_weight,
        parts_on_belt=parts_on_belt,
        load_on_belt_lbf=load_on_belt,
        total_load_lbf=total_load,
        avg_load_per_ft_lbf=avg_load_per_ft,
        belt_pull_calc_lb=belt_pull_calc,
        friction_coeff_used=r.friction_coeff,
        friction_pull_lb=friction_pull,
        incline_pull_lb=incline_pull,
        starting_belt_pull_lb=r.starting_belt_pull_lb,
        total_belt_pull_lb=total_pull,
        speed_mode_used=r.speed_mode,
        belt_speed_fpm=belt_speed,
        drive_shaft_rpm=drive_shaft_rpm,
        torque_drive_shaft_inlbf=torque,
        safety_factor_used=r.safety_factor,
        motor_rpm_used=r.motor_rpm,
        gear_ratio=gear_ratio,
        chain_ratio=chain_ratio,
        gearmotor_output_rpm=drive_shaft_rpm * chain_ratio,
        total_drive_ratio=gear_ratio * chain_ratio,
        pitch_in=throughput.pitch_in,
        capacity_pph=throughput.capacity_pph,
        target_pph=throughput.target_pph,
        meets_throughput=throughput.meets_throughput,
        rpm_required_for_target=throughput.rpm_required_for_target,
        throughput_margin_achieved_pct=throughput.throughput_margin_achieved_pct,
        is_v_guided=inputs.is_v_guided,
        pulley_requires_crown=face.requires_crown,
        pulley_face_extra_in=face.face_extra_in,
        pulley_face_length_in=face.face_length_in,
        drive_pulley_diameter_in=r.drive_pulley_diameter_in,
        tail_pulley_diameter_in=r.tail_pulley_diameter_in,
        min_pulley_required_in=min_pulley.min_pulley_required_in,
        drive_pulley_meets_minimum=min_pulley.drive_meets_minimum,
        tail_pulley_meets_minimum=min_pulley.tail_meets_minimum,
        drive_shaft_diameter_in=drive_shaft_diameter,
        tail_shaft_diameter_in=tail_shaft_diameter,
        drive_shaft_sizing=drive_sizing,
        tail_shaft_sizing=tail_sizing,
        effective_frame_height_in=frame.effective_frame_height_in,
        requires_snub_rollers=frame.requires_snub_rollers,
        cost_flag_low_profile=frame.cost_flag_low_profile,
        cost_flag_custom_frame=frame.cost_flag_custom_frame,
        cost_flag_snub_rollers=frame.cost_flag_snub_rollers,
        cost_flag_design_review=frame.cost_flag_design_review,
        gravity_roller_quantity=rollers.gravity_roller_quantity,
        gravity_roller_spacing_in=rollers.gravity_roller_spacing_in,
        snub_roller_quantity=rollers.snub_roller_quantity,
        bed_type_used=r.bed_type,
        premium_flags=calculate_premium_flags(inputs),
        tracking_guidance=calculate_tracking_guidance(inputs, belt_speed),
    )


def calculate_sliderbed(
    inputs: ConveyorInputs,
    parameters: CalculationParameters = DEFAULT_PARAMETERS,
) -> ConveyorOutputs:
    """Slider bed calculation for callers of the original slider bed model."""
    return calculate(inputs.model_copy(update={"bed_type": BedType.SLIDER_BED}), parameters)


def _merge_parameters(parameters: Optional[CalculationParameters | dict]) -> CalculationParameters:
    """
    Overlay caller parameters on the defaults.

    The merged values are validated, so a wrong type or an unknown key
    raises a pydantic ValidationError.
    """
    if parameters is None:
        return DEFAULT_PARAMETERS
    if isinstance(parameters, CalculationParameters):
        return parameters
    return CalculationParameters.model_validate({**DEFAULT_PARAMETERS.model_dump(), **parameters})


def run_calculation(
    inputs: ConveyorInputs,
    parameters: Optional[CalculationParameters | dict] = None,
    model_key: Optional[str] = None,
    model_version_id: Optional[str] = None,
) -> CalculationResult:
    """
    Validate then calculate.

    Args:
        inputs: Conveyor configuration
        parameters: Full parameters, or a dict of overrides merged over the defaults
        model_key: Model key (legacy keys accepted)
        model_version_id: Version tag for audit; defaults to the configured one

    Returns:
        CalculationResult. success is False and outputs None when any
        validation error is present.

    Raises:
        ValueError: If model_key is unknown
    """
    key = resolve_model_key(model_key)
    params = _merge_parameters(parameters)

    metadata = CalculationMetadata(
        model_key=key,
        model_version_id=model_version_id or settings.MODEL_VERSION_ID,
        calculated_at=datetime.now(timezone.utc).isoformat(),
    )

    errors, warnings = validate(inputs, params)
    if errors:
        return CalculationResult(success=False, outputs=None, errors=errors, warnings=warnings, metadata=metadata)

    outputs = calculate(inputs, params)
    logger.info(
        "Calculation completed: total pull %.1f lb, torque %.1f in-lbf",
        outputs.total_belt_pull_lb,
        outputs.torque_drive_shaft_inlbf,
    )
    return CalculationResult(success=True, outputs=outputs, errors=[], warnings=warnings, metadata=metadata)
