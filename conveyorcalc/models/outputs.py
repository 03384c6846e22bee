"""
Output models for belt conveyor calculations.

These models define the derived physical quantities, validation messages
and audit metadata returned by the engine. Outputs are either complete
or absent: a failed calculation carries an error list instead.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from conveyorcalc.models.inputs import BedType, BeltTrackingMethod, SpeedMode


class PremiumLevel(str, Enum):
    """Build cost classification driven by premium features."""
    STANDARD = "standard"
    PREMIUM = "premium"
    PREMIUM_PLUS = "premium_plus"


class PremiumFlags(BaseModel):
    """Premium feature classification for a configuration."""
    is_premium: bool = Field(..., description="True when any premium feature is present")
    premium_reasons: list[str] = Field(default_factory=list, description="Human-readable reasons")
    premium_level: PremiumLevel = Field(default=PremiumLevel.STANDARD)


class ValidationSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ValidationMessage(BaseModel):
    """A field-tagged validation error, warning or info notice."""
    field: str = Field(..., description="Input field the message refers to")
    message: str = Field(..., description="User-facing message")
    severity: ValidationSeverity = Field(..., description="error blocks calculation; warning/info do not")

    @property
    def is_error(self) -> bool:
        return self.severity == ValidationSeverity.ERROR


class ShaftSizingResult(BaseModel):
    """
    Shaft sizing for one pulley.

    Stress and deflection are evaluated at the rounded standard diameter,
    not at the raw calculated one.
    """
    required_diameter_in: float = Field(..., description="Standard diameter selected (in)")
    calculated_diameter_in: float = Field(..., description="Raw von Mises diameter, 3 decimals (in)")
    T1_lbf: float = Field(..., description="Tight side tension (lbf)")
    T2_lbf: float = Field(..., description="Slack side tension (lbf)")
    radial_load_lbf: float = Field(..., description="Resultant radial load on the shaft (lbf)")
    bending_moment_inlbf: float = Field(..., description="Center bending moment (in-lbf)")
    torque_inlbf: float = Field(..., description="Transmitted torque (in-lbf), 0 for idlers")
    von_mises_stress_psi: float = Field(..., description="Combined stress at the standard diameter (psi)")
    deflection_in: float = Field(..., description="Center deflection at the standard diameter (in)")
    deflection_ok: bool = Field(..., description="Deflection within 0.001 x span. Informational only.")
    bearing_span_in: float = Field(..., description="Bearing center distance used (in)")
    wrap_angle_deg: float = Field(..., description="Belt wrap angle used (deg)")


class TrackingRiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class TrackingRiskFactor(BaseModel):
    """One assessed belt tracking risk factor."""
    name: str
    risk: TrackingRiskLevel
    explanation: str


class TrackingGuidance(BaseModel):
    """Plain-English belt tracking recommendation (crowned vs V-guided)."""
    recommendation: BeltTrackingMethod
    risk_level: TrackingRiskLevel = Field(..., description="Overall risk if crowned tracking is used")
    summary: str
    factors: list[TrackingRiskFactor] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)


class ConveyorOutputs(BaseModel):
    """
    Complete set of derived quantities for one conveyor configuration.

    Units are explicit in the field names: lbf/lb for forces, inlbf for
    torques, fpm for belt speed, pph for parts per hour.
    """

    # Belt & load
    piw_used: float
    pil_used: float
    belt_piw_effective: float
    belt_pil_effective: float
    total_belt_length_in: float
    belt_weight_lbf: float
    parts_on_belt: float
    load_on_belt_lbf: float
    total_load_lbf: float
    avg_load_per_ft_lbf: float
    belt_pull_calc_lb: float = Field(..., description="Legacy average-load belt pull, kept for compatibility")

    # Pull components
    friction_coeff_used: float
    friction_pull_lb: float
    incline_pull_lb: float
    starting_belt_pull_lb: float
    total_belt_pull_lb: float

    # Speed & drive
    speed_mode_used: SpeedMode
    belt_speed_fpm: float
    drive_shaft_rpm: float
    torque_drive_shaft_inlbf: float
    safety_factor_used: float
    motor_rpm_used: float
    gear_ratio: float
    chain_ratio: float
    gearmotor_output_rpm: float
    total_drive_ratio: float

    # Throughput
    pitch_in: float
    capacity_pph: float
    target_pph: Optional[float] = None
    meets_throughput: Optional[bool] = None
    rpm_required_for_target: Optional[float] = None
    throughput_margin_achieved_pct: Optional[float] = None

    # Tracking & pulleys
    is_v_guided: bool
    pulley_requires_crown: bool
    pulley_face_extra_in: float
    pulley_face_length_in: float
    drive_pulley_diameter_in: float
    tail_pulley_diameter_in: float
    min_pulley_required_in: Optional[float] = None
    drive_pulley_meets_minimum: Optional[bool] = None
    tail_pulley_meets_minimum: Optional[bool] = None

    # Shafts
    drive_shaft_diameter_in: float
    tail_shaft_diameter_in: float
    drive_shaft_sizing: Optional[ShaftSizingResult] = Field(
        default=None, description="von Mises sizing detail (Calculated mode only)"
    )
    tail_shaft_sizing: Optional[ShaftSizingResult] = None

    # Frame & rollers
    effective_frame_height_in: float
    requires_snub_rollers: bool
    cost_flag_low_profile: bool
    cost_flag_custom_frame: bool
    cost_flag_snub_rollers: bool
    cost_flag_design_review: bool
    gravity_roller_quantity: int
    gravity_roller_spacing_in: float
    snub_roller_quantity: int

    # Classification
    bed_type_used: BedType
    premium_flags: PremiumFlags
    tracking_guidance: TrackingGuidance


class CalculationMetadata(BaseModel):
    """Audit information attached to every calculation result."""

    model_config = ConfigDict(protected_namespaces=())

    model_key: str = Field(..., description="Model identifier, e.g. belt_conveyor_v1")
    model_version_id: str = Field(..., description="Model version for audit/versioning")
    calculated_at: str = Field(..., description="ISO-8601 UTC timestamp")


class CalculationResult(BaseModel):
    """
    Result envelope of a calculation run.

    success=False means at least one validation error blocked the
    calculation; outputs is None in that case.
    """
    success: bool
    outputs: Optional[ConveyorOutputs] = None
    errors: list[ValidationMessage] = Field(default_factory=list)
    warnings: list[ValidationMessage] = Field(default_factory=list)
    metadata: CalculationMetadata
