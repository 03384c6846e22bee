"""
Frame, pulley face and return roller geometry.

Provides:
- Pulley face length from the tracking method
- Effective frame height per frame height mode
- Snub roller requirement and cost flags
- Gravity and snub return roller quantities
- Belt minimum pulley diameter checks

ASSUMPTIONS:
- Standard frames sit 2.5" above the drive pulley, which is also the snub
  clearance threshold, so a Standard frame never needs snub rollers
- Return rollers are spaced 60" apart starting at each end
- Snub rollers take the two end positions when present
"""

from dataclasses import dataclass
from typing import Optional

from conveyorcalc.models.inputs import CalculationParameters, FrameHeightMode


STANDARD_FRAME_OFFSET_IN = 2.5
LOW_PROFILE_FRAME_OFFSET_IN = 0.5
SNUB_CLEARANCE_IN = 2.5
DESIGN_REVIEW_THRESHOLD_IN = 4.0
GRAVITY_ROLLER_SPACING_IN = 60.0
SNUB_ROLLERS_PER_CONVEYOR = 2


@dataclass
class PulleyFace:
    """Pulley crown requirement and face length."""
    requires_crown: bool
    face_extra_in: float
    face_length_in: float


@dataclass
class FrameHeightResult:
    """Effective frame height with its snub roller requirement and cost flags."""
    effective_frame_height_in: float
    requires_snub_rollers: bool
    cost_flag_low_profile: bool
    cost_flag_custom_frame: bool
    cost_flag_snub_rollers: bool
    cost_flag_design_review: bool


@dataclass
class RollerLayout:
    gravity_roller_quantity: int
    gravity_roller_spacing_in: float
    snub_roller_quantity: int


@dataclass
class MinimumPulleyCheck:
    """Belt minimum pulley diameter for the tracking method (None without belt data)."""
    min_pulley_required_in: Optional[float]
    drive_meets_minimum: Optional[bool]
    tail_meets_minimum: Optional[bool]


def calculate_pulley_face(
    belt_width_in: float,
    is_v_guided: bool,
    parameters: CalculationParameters,
) -> PulleyFace:
    """
    Pulley face length = belt width + tracking allowance.

    V-guided belts run on flat pulleys with a small allowance; crowned
    pulleys need the wider allowance for the belt to wander.
    """
    if is_v_guided:
        extra = parameters.pulley_face_extra_v_guided_in
    else:
        extra = parameters.pulley_face_extra_crowned_in
    return PulleyFace(
        requires_crown=not is_v_guided,
        face_extra_in=extra,
        face_length_in=belt_width_in + extra,
    )


def calculate_effective_frame_height(
    frame_height_mode: FrameHeightMode,
    drive_pulley_diameter_in: float,
    custom_frame_height_in: Optional[float] = None,
) -> float:
    """
    Effective frame height (in).

    Standard:    drive pulley + 2.5"
    Low Profile: drive pulley + 0.5"
    Custom:      the custom height, falling back to Standard when unset
    """
    standard = drive_pulley_diameter_in + STANDARD_FRAME_OFFSET_IN
    if frame_height_mode == FrameHeightMode.CUSTOM:
        return custom_frame_height_in if custom_frame_height_in is not None else standard
    if frame_height_mode == FrameHeightMode.LOW_PROFILE:
        return drive_pulley_diameter_in + LOW_PROFILE_FRAME_OFFSET_IN
    return standard


def requires_snub_rollers(
    frame_height_in: float,
    drive_pulley_diameter_in: float,
    tail_pulley_diameter_in: float,
) -> bool:
    """Snubs are needed when the frame is lower than the largest pulley + 2.5"."""
    largest = max(drive_pulley_diameter_in, tail_pulley_diameter_in)
    return frame_height_in < largest + SNUB_CLEARANCE_IN


def calculate_frame_height(
    frame_height_mode: FrameHeightMode,
    drive_pulley_diameter_in: float,
    tail_pulley_diameter_in: float,
    custom_frame_height_in: Optional[float] = None,
) -> FrameHeightResult:
    height = calculate_effective_frame_height(
        frame_height_mode, drive_pulley_diameter_in, custom_frame_height_in
    )
    snubs = requires_snub_rollers(height, drive_pulley_diameter_in, tail_pulley_diameter_in)
    return FrameHeightResult(
        effective_frame_height_in=height,
        requires_snub_rollers=snubs,
        cost_flag_low_profile=frame_height_mode == FrameHeightMode.LOW_PROFILE,
        cost_flag_custom_frame=frame_height_mode == FrameHeightMode.CUSTOM,
        cost_flag_snub_rollers=snubs,
        cost_flag_design_review=height < DESIGN_REVIEW_THRESHOLD_IN,
    )


def calculate_gravity_roller_quantity(
    conveyor_length_cc_in: float,
    snub_rollers_present: bool,
    spacing_in: float = GRAVITY_ROLLER_SPACING_IN,
) -> int:
    """
    Gravity return rollers along the return run.

    positions = floor(length / spacing) + 1
    With snubs the two end positions belong to the snubs; without them at
    least two gravity rollers are fitted.
    """
    if conveyor_length_cc_in <= 0:
        return 0
    positions = int(conveyor_length_cc_in // spacing_in) + 1
    if snub_rollers_present:
        return max(positions - 2, 0)
    return max(positions, 2)


def calculate_roller_layout(conveyor_length_cc_in: float, snub_rollers_present: bool) -> RollerLayout:
    return RollerLayout(
        gravity_roller_quantity=calculate_gravity_roller_quantity(conveyor_length_cc_in, snub_rollers_present),
        gravity_roller_spacing_in=GRAVITY_ROLLER_SPACING_IN,
        snub_roller_quantity=SNUB_ROLLERS_PER_CONVEYOR if snub_rollers_present else 0,
    )


def check_minimum_pulley(
    is_v_guided: bool,
    drive_pulley_diameter_in: float,
    tail_pulley_diameter_in: float,
    min_dia_no_vguide_in: Optional[float] = None,
    min_dia_with_vguide_in: Optional[float] = None,
) -> MinimumPulleyCheck:
    """Compare both pulleys against the belt's minimum for the tracking method."""
    minimum = min_dia_with_vguide_in if is_v_guided else min_dia_no_vguide_in
    if minimum is None:
        return MinimumPulleyCheck(None, None, None)
    return MinimumPulleyCheck(
        min_pulley_required_in=minimum,
        drive_meets_minimum=drive_pulley_diameter_in >= minimum,
        tail_meets_minimum=tail_pulley_diameter_in >= minimum,
    )
