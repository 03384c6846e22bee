"""
Input resolution ahead of the formula pipeline.

Every optional input is defaulted exactly once here. The formulas then
read a ResolvedInputs value and never fall back to defaults themselves.

Friction resolution order:
1. explicit friction_coeff override on the inputs
2. bed type preset (slider bed, roller bed)
3. global friction_coeff from the parameters
"""

from dataclasses import dataclass
from typing import Any, Optional

from conveyorcalc.models.inputs import (
    BedType,
    CalculationParameters,
    ConveyorInputs,
    SpeedMode,
    normalize_enum,
)
from conveyorcalc.physics.belt import BeltCoefficients, resolve_belt_coefficients


DEFAULT_MANUAL_SHAFT_DIAMETER_IN = 1.0


@dataclass(frozen=True)
class BedTypeFrictionTable:
    """
    Friction presets keyed by bed type.

    Built from the parameters and never mutated. OTHER beds have no
    preset and fall through to the global friction coefficient.
    """
    slider_bed: float
    roller_bed: float

    @classmethod
    def from_parameters(cls, parameters: CalculationParameters) -> "BedTypeFrictionTable":
        return cls(
            slider_bed=parameters.friction_coeff_slider_bed,
            roller_bed=parameters.friction_coeff_roller_bed,
        )

    def preset_for(self, bed_type: BedType) -> Optional[float]:
        if bed_type == BedType.ROLLER_BED:
            return self.roller_bed
        if bed_type == BedType.SLIDER_BED:
            return self.slider_bed
        return None


def resolve_bed_type(value: Any) -> BedType:
    """
    Canonical bed type for a raw value.

    None and unrecognized values resolve to slider bed, which is how
    configurations saved before bed types existed were calculated.
    """
    if value is None:
        return BedType.SLIDER_BED
    normalized = normalize_enum(BedType, value)
    return normalized if isinstance(normalized, BedType) else BedType.SLIDER_BED


def resolve_effective_friction(
    inputs: ConveyorInputs,
    parameters: CalculationParameters,
    table: Optional[BedTypeFrictionTable] = None,
) -> float:
    """Friction coefficient for the bed: override, then bed preset, then parameters."""
    if inputs.friction_coeff is not None:
        return inputs.friction_coeff

    table = table or BedTypeFrictionTable.from_parameters(parameters)
    preset = table.preset_for(resolve_bed_type(inputs.bed_type))
    if preset is not None:
        return preset

    return parameters.friction_coeff


@dataclass(frozen=True)
class ResolvedInputs:
    """Inputs with every optional value defaulted once."""
    bed_type: BedType
    friction_coeff: float
    coefficients: BeltCoefficients
    drive_pulley_diameter_in: float
    tail_pulley_diameter_in: float
    speed_mode: SpeedMode
    belt_speed_fpm: float
    drive_rpm: float
    part_weight_lbs: float
    safety_factor: float
    starting_belt_pull_lb: float
    motor_rpm: float
    required_throughput_pph: Optional[float]
    manual_drive_shaft_diameter_in: float
    manual_tail_shaft_diameter_in: float


def resolve_inputs(inputs: ConveyorInputs, parameters: CalculationParameters) -> ResolvedInputs:
    drive = inputs.drive_pulley_diameter_in
    tail = inputs.tail_pulley_diameter_in if inputs.tail_pulley_diameter_in is not None else drive

    coefficients = resolve_belt_coefficients(
        drive,
        parameters,
        piw_override=inputs.belt_piw_override,
        pil_override=inputs.belt_pil_override,
        catalog_piw=inputs.belt_piw,
        catalog_pil=inputs.belt_pil,
        advanced_piw=inputs.belt_coeff_piw,
        advanced_pil=inputs.belt_coeff_pil,
    )

    def _or(value, default):
        return value if value is not None else default

    return ResolvedInputs(
        bed_type=resolve_bed_type(inputs.bed_type),
        friction_coeff=resolve_effective_friction(inputs, parameters),
        coefficients=coefficients,
        drive_pulley_diameter_in=drive,
        tail_pulley_diameter_in=tail,
        speed_mode=_or(inputs.speed_mode, SpeedMode.BELT_SPEED),
        belt_speed_fpm=_or(inputs.belt_speed_fpm, 0.0),
        drive_rpm=_or(inputs.drive_rpm, 0.0),
        part_weight_lbs=_or(inputs.part_weight_lbs, 0.0),
        safety_factor=_or(inputs.safety_factor, parameters.safety_factor),
        starting_belt_pull_lb=_or(inputs.starting_belt_pull_lb, parameters.starting_belt_pull_lb),
        motor_rpm=_or(inputs.motor_rpm, parameters.motor_rpm),
        required_throughput_pph=inputs.required_throughput_pph,
        manual_drive_shaft_diameter_in=_or(inputs.drive_shaft_diameter_in, DEFAULT_MANUAL_SHAFT_DIAMETER_IN),
        manual_tail_shaft_diameter_in=_or(inputs.tail_shaft_diameter_in, DEFAULT_MANUAL_SHAFT_DIAMETER_IN),
    )
