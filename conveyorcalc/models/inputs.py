"""
Input models for belt conveyor sizing.

These models define the physical and application parameters a conveyor
calculation needs. All units are explicit in the field name suffix
(_in, _lbs, _fpm, _deg, _pph) and no hidden conversions take place.

ASSUMPTIONS:
- Enumerated fields accept their canonical value or a recognized legacy
  alias; aliases are normalized once here, so the engine only ever sees
  canonical enum members.
- Range checks on numeric fields belong to the validation rules, not to
  the model, so that bad values come back as field-tagged messages.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


DEFAULT_PULLEY_DIAMETER_IN = 4.0


class BedType(str, Enum):
    """Support method under the carrying side of the belt."""
    SLIDER_BED = "slider_bed"
    ROLLER_BED = "roller_bed"
    OTHER = "other"


class BeltTrackingMethod(str, Enum):
    """How the belt is kept centered on the pulleys."""
    CROWNED = "Crowned"
    V_GUIDED = "V-guided"


class GearmotorMountingStyle(str, Enum):
    """Gearmotor arrangement on the drive shaft."""
    SHAFT_MOUNTED = "shaft_mounted"
    BOTTOM_MOUNT = "bottom_mount"


class SpeedMode(str, Enum):
    """Which speed quantity the user specifies."""
    BELT_SPEED = "belt_speed"
    DRIVE_RPM = "drive_rpm"


class Orientation(str, Enum):
    """Part orientation relative to the direction of travel."""
    LENGTHWISE = "Lengthwise"
    CROSSWISE = "Crosswise"


class PartTemperatureClass(str, Enum):
    AMBIENT = "Ambient"
    HOT = "Hot"
    RED_HOT = "Red Hot"


class FluidType(str, Enum):
    NONE = "None"
    MINIMAL_RESIDUAL_OIL = "Minimal Residual Oil"
    CONSIDERABLE_OIL_LIQUID = "Considerable Oil / Liquid"


class EnvironmentFactors(str, Enum):
    INDOOR = "Indoor"
    OUTDOOR = "Outdoor"
    WASHDOWN = "Washdown"
    DUSTY = "Dusty"
    OTHER = "Other"


class MaterialType(str, Enum):
    STEEL = "Steel"
    ALUMINUM = "Aluminum"
    PLASTIC = "Plastic"
    WOOD = "Wood"
    OTHER = "Other"


class ProcessType(str, Enum):
    ASSEMBLY = "Assembly"
    PACKAGING = "Packaging"
    INSPECTION = "Inspection"
    MACHINING = "Machining"
    OTHER = "Other"


class ShaftDiameterMode(str, Enum):
    CALCULATED = "Calculated"
    MANUAL = "Manual"


class FrameHeightMode(str, Enum):
    STANDARD = "Standard"
    LOW_PROFILE = "Low Profile"
    CUSTOM = "Custom"


class SideLoadingDirection(str, Enum):
    NONE = "None"
    LEFT = "Left"
    RIGHT = "Right"
    BOTH = "Both"


class SideLoadingSeverity(str, Enum):
    LIGHT = "Light"
    MODERATE = "Moderate"
    HEAVY = "Heavy"


class DirectionMode(str, Enum):
    ONE_DIRECTION = "One direction"
    REVERSING = "Reversing"


class EndGuards(str, Enum):
    NONE = "None"
    HEAD_END = "Head end"
    TAIL_END = "Tail end"
    BOTH_ENDS = "Both ends"


class LacingStyle(str, Enum):
    ENDLESS = "Endless"
    CLIPPER_LACING = "Clipper lacing"
    ALLIGATOR_LACING = "Alligator lacing"


# Legacy spellings seen in saved configurations, keyed by lower-case text.
ENUM_ALIASES: dict[type[Enum], dict[str, Enum]] = {
    BedType: {
        "sliderbed": BedType.SLIDER_BED,
        "slider": BedType.SLIDER_BED,
        "rollerbed": BedType.ROLLER_BED,
        "roller": BedType.ROLLER_BED,
    },
    BeltTrackingMethod: {
        "vguided": BeltTrackingMethod.V_GUIDED,
        "v_guided": BeltTrackingMethod.V_GUIDED,
        "v guided": BeltTrackingMethod.V_GUIDED,
    },
    GearmotorMountingStyle: {
        "shaftmounted": GearmotorMountingStyle.SHAFT_MOUNTED,
        "shaft mounted": GearmotorMountingStyle.SHAFT_MOUNTED,
        "bottommount": GearmotorMountingStyle.BOTTOM_MOUNT,
        "bottom mount": GearmotorMountingStyle.BOTTOM_MOUNT,
        "chain": GearmotorMountingStyle.BOTTOM_MOUNT,
    },
    PartTemperatureClass: {
        "red_hot": PartTemperatureClass.RED_HOT,
        "redhot": PartTemperatureClass.RED_HOT,
    },
    FluidType: {
        "minimal": FluidType.MINIMAL_RESIDUAL_OIL,
        "considerable": FluidType.CONSIDERABLE_OIL_LIQUID,
    },
    FrameHeightMode: {
        "lowprofile": FrameHeightMode.LOW_PROFILE,
        "low_profile": FrameHeightMode.LOW_PROFILE,
    },
    SpeedMode: {
        "beltspeed": SpeedMode.BELT_SPEED,
        "driverpm": SpeedMode.DRIVE_RPM,
    },
}


def normalize_enum(enum_cls: type[Enum], value: Any) -> Any:
    """
    Map a canonical value or legacy alias onto an enum member.

    Matching is case-insensitive after trimming whitespace. Values that are
    not recognized are returned unchanged so pydantic can report them.

    Examples:
        normalize_enum(BeltTrackingMethod, "VGuided") -> BeltTrackingMethod.V_GUIDED
        normalize_enum(BedType, " Roller_Bed ") -> BedType.ROLLER_BED
    """
    if value is None or isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        return value

    key = value.strip().lower()
    for member in enum_cls:
        if member.value.lower() == key or member.name.lower() == key:
            return member

    return ENUM_ALIASES.get(enum_cls, {}).get(key, value)


class ConveyorInputs(BaseModel):
    """
    Conveyor configuration for one calculation request.

    Optional "power-user" overrides always take precedence over bed-type
    presets and parameter defaults. The model is frozen: the engine reads
    it, never mutates it.
    """

    model_config = ConfigDict(frozen=True)

    # Geometry & layout
    conveyor_length_cc_in: float = Field(..., description="Conveyor length, pulley center to center (in)")
    belt_width_in: float = Field(..., description="Belt width (in)")
    pulley_diameter_in: Optional[float] = Field(
        default=None,
        description="Legacy single pulley diameter (in). Synced to the drive pulley after migration."
    )
    drive_pulley_diameter_in: Optional[float] = Field(default=None, description="Drive pulley diameter (in)")
    tail_pulley_diameter_in: Optional[float] = Field(default=None, description="Tail pulley diameter (in)")
    conveyor_incline_deg: float = Field(default=0.0, description="Incline angle (deg)")

    # Speed
    speed_mode: Optional[SpeedMode] = Field(
        default=None,
        description="belt_speed: derive drive RPM from belt speed; drive_rpm: derive belt speed"
    )
    belt_speed_fpm: Optional[float] = Field(default=None, description="Belt speed (ft/min)")
    drive_rpm: Optional[float] = Field(default=None, description="Drive shaft speed (rev/min)")

    # Product / parts
    part_weight_lbs: Optional[float] = Field(default=None, description="Weight of one part (lb)")
    part_length_in: Optional[float] = Field(default=None, description="Part length (in)")
    part_width_in: Optional[float] = Field(default=None, description="Part width (in)")
    part_spacing_in: float = Field(default=0.0, description="Gap between parts along the belt (in)")
    orientation: Orientation = Field(default=Orientation.LENGTHWISE, description="Part orientation on the belt")
    drop_height_in: float = Field(default=0.0, description="Height parts drop onto the belt (in)")
    part_temperature_class: PartTemperatureClass = Field(default=PartTemperatureClass.AMBIENT)
    fluid_type: FluidType = Field(default=FluidType.NONE)
    environment_factors: EnvironmentFactors = Field(default=EnvironmentFactors.INDOOR)
    material_type: MaterialType = Field(default=MaterialType.STEEL)
    process_type: ProcessType = Field(default=ProcessType.ASSEMBLY)

    # Throughput
    required_throughput_pph: Optional[float] = Field(default=None, description="Required parts per hour")
    throughput_margin_pct: float = Field(default=0.0, description="Design margin over required throughput (%)")

    # Bed & tracking
    bed_type: Optional[BedType] = Field(
        default=None,
        description="Bed type. Unset behaves exactly like a slider bed (legacy configurations)."
    )
    belt_tracking_method: BeltTrackingMethod = Field(default=BeltTrackingMethod.CROWNED)
    v_guide_profile: Optional[str] = Field(default=None, description="V-guide profile, e.g. 'K10'")

    # Side loading & operation
    side_loading_direction: SideLoadingDirection = Field(default=SideLoadingDirection.NONE)
    side_loading_severity: SideLoadingSeverity = Field(default=SideLoadingSeverity.LIGHT)
    direction_mode: DirectionMode = Field(default=DirectionMode.ONE_DIRECTION)
    start_stop_application: bool = Field(default=False)
    cycle_time_seconds: Optional[float] = Field(default=None, description="Start/stop cycle time (s)")

    # Features & options
    finger_safe: bool = Field(default=False)
    end_guards: EndGuards = Field(default=EndGuards.NONE)
    bottom_covers: bool = Field(default=False)
    lacing_style: LacingStyle = Field(default=LacingStyle.ENDLESS)

    # Belt selection (values copied from the belt catalog by the caller)
    belt_catalog_key: Optional[str] = Field(default=None)
    belt_piw: Optional[float] = Field(default=None, description="Catalog belt PIW (lb/in)")
    belt_pil: Optional[float] = Field(default=None, description="Catalog belt PIL (lb/in)")
    belt_min_pulley_dia_no_vguide_in: Optional[float] = Field(default=None)
    belt_min_pulley_dia_with_vguide_in: Optional[float] = Field(default=None)

    # Power-user overrides
    friction_coeff: Optional[float] = Field(default=None, description="Explicit bed friction coefficient")
    belt_coeff_piw: Optional[float] = Field(default=None, description="Advanced PIW coefficient (lb/in)")
    belt_coeff_pil: Optional[float] = Field(default=None, description="Advanced PIL coefficient (lb/in)")
    belt_piw_override: Optional[float] = Field(default=None, description="User PIW override (lb/in)")
    belt_pil_override: Optional[float] = Field(default=None, description="User PIL override (lb/in)")
    safety_factor: Optional[float] = Field(default=None, description="Drive torque safety factor")
    starting_belt_pull_lb: Optional[float] = Field(default=None, description="Breakaway belt pull (lb)")
    motor_rpm: Optional[float] = Field(default=None, description="Motor base speed (rev/min)")

    # Drive arrangement
    gearmotor_mounting_style: GearmotorMountingStyle = Field(default=GearmotorMountingStyle.SHAFT_MOUNTED)
    drive_shaft_sprocket_teeth: int = Field(default=24, description="Driven sprocket teeth (bottom mount)")
    gm_sprocket_teeth: int = Field(default=18, description="Gearmotor sprocket teeth (bottom mount)")

    # Shafts
    shaft_diameter_mode: ShaftDiameterMode = Field(default=ShaftDiameterMode.CALCULATED)
    drive_shaft_diameter_in: Optional[float] = Field(default=None)
    tail_shaft_diameter_in: Optional[float] = Field(default=None)

    # Frame
    frame_height_mode: FrameHeightMode = Field(default=FrameHeightMode.STANDARD)
    custom_frame_height_in: Optional[float] = Field(default=None)

    @model_validator(mode="before")
    @classmethod
    def migrate_legacy_fields(cls, data: Any) -> Any:
        """
        Bring legacy saved configurations up to the current field set.

        - conveyor_width_in is the old name of belt_width_in
        - a single pulley_diameter_in becomes matching drive/tail diameters
        - a config that only carries drive_rpm runs in drive_rpm speed mode

        Idempotent: migrating an already-migrated dict changes nothing.
        """
        if not isinstance(data, dict):
            return data
        data = dict(data)

        if data.get("belt_width_in") is None and data.get("conveyor_width_in") is not None:
            data["belt_width_in"] = data["conveyor_width_in"]
        data.pop("conveyor_width_in", None)

        drive = data.get("drive_pulley_diameter_in")
        tail = data.get("tail_pulley_diameter_in")

        # Only missing values are filled; a supplied zero stays visible to validation
        if drive is None and tail is None:
            legacy = data.get("pulley_diameter_in")
            diameter = legacy if legacy is not None else DEFAULT_PULLEY_DIAMETER_IN
            data["drive_pulley_diameter_in"] = diameter
            data["tail_pulley_diameter_in"] = diameter
        elif tail is None:
            data["tail_pulley_diameter_in"] = drive
        elif drive is None:
            data["drive_pulley_diameter_in"] = tail

        data["pulley_diameter_in"] = data["drive_pulley_diameter_in"]

        if data.get("speed_mode") is None:
            if data.get("belt_speed_fpm") is None and data.get("drive_rpm") is not None:
                data["speed_mode"] = SpeedMode.DRIVE_RPM
            else:
                data["speed_mode"] = SpeedMode.BELT_SPEED

        return data

    @field_validator("bed_type", mode="before")
    @classmethod
    def normalize_bed_type(cls, v: Any) -> Any:
        """Unknown bed types fall back to slider bed, like legacy configs."""
        if v is None:
            return None
        normalized = normalize_enum(BedType, v)
        return normalized if isinstance(normalized, BedType) else BedType.SLIDER_BED

    @field_validator(
        "belt_tracking_method",
        "gearmotor_mounting_style",
        "part_temperature_class",
        "fluid_type",
        "frame_height_mode",
        "speed_mode",
        "orientation",
        "shaft_diameter_mode",
        "side_loading_direction",
        "side_loading_severity",
        "direction_mode",
        "environment_factors",
        "end_guards",
        "lacing_style",
        mode="before",
    )
    @classmethod
    def normalize_aliases(cls, v: Any, info) -> Any:
        """Resolve legacy string aliases to canonical enum members."""
        annotation = cls.model_fields[info.field_name].annotation
        enum_cls = getattr(annotation, "__args__", (annotation,))[0]
        return normalize_enum(enum_cls, v)

    @property
    def is_v_guided(self) -> bool:
        return self.belt_tracking_method == BeltTrackingMethod.V_GUIDED


class CalculationParameters(BaseModel):
    """
    Engine-wide tunable defaults.

    Distinct from per-request inputs: these are owned by the calling
    application and passed by value into the formula engine.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    friction_coeff: float = Field(default=0.25, description="Global legacy friction coefficient")
    friction_coeff_slider_bed: float = Field(default=0.25, description="Slider bed preset")
    friction_coeff_roller_bed: float = Field(default=0.03, description="Roller bed preset")
    safety_factor: float = Field(default=2.0)
    starting_belt_pull_lb: float = Field(default=75.0)
    motor_rpm: float = Field(default=1750.0)
    gravity_in_per_s2: float = Field(default=386.1)
    piw_2p5: float = Field(default=0.138, description="PIW for a 2.5 in drive pulley (lb/in)")
    piw_other: float = Field(default=0.109, description="PIW for any other drive pulley (lb/in)")
    pil_2p5: float = Field(default=0.138, description="PIL for a 2.5 in drive pulley (lb/in)")
    pil_other: float = Field(default=0.109, description="PIL for any other drive pulley (lb/in)")
    pulley_face_extra_crowned_in: float = Field(default=2.0)
    pulley_face_extra_v_guided_in: float = Field(default=0.5)


DEFAULT_PARAMETERS = CalculationParameters()


class ShaftSizingInputs(BaseModel):
    """
    Inputs for sizing one pulley shaft.

    Unset optional values take the defaults documented in
    conveyorcalc.physics.shaft (180 deg wrap, mu 0.3, span = width + 5 in,
    1045 steel yield, SF 3.0, service factor 1.2).
    """
    belt_width_in: float = Field(..., gt=0, description="Belt width (in)")
    pulley_diameter_in: float = Field(..., gt=0, description="Pulley diameter (in)")
    effective_tension_lbf: float = Field(..., description="Effective belt tension Te (lbf)")
    is_drive_pulley: bool = Field(..., description="Torque and keyway apply only to the drive pulley")
    wrap_angle_deg: Optional[float] = Field(default=None, gt=0, le=360)
    friction_coefficient: Optional[float] = Field(default=None, gt=0, description="Belt-to-lagging friction")
    bearing_span_in: Optional[float] = Field(default=None, gt=0)
    yield_strength_psi: Optional[float] = Field(default=None, gt=0)
    safety_factor: Optional[float] = Field(default=None, gt=0)
    service_factor: Optional[float] = Field(default=None, gt=0)


def example_inputs() -> ConveyorInputs:
    """A typical 10 ft slider bed conveyor moving 5 lb parts at 50 ft/min."""
    return ConveyorInputs(
        conveyor_length_cc_in=120.0,
        belt_width_in=18.0,
        drive_pulley_diameter_in=4.0,
        tail_pulley_diameter_in=4.0,
        conveyor_incline_deg=0.0,
        speed_mode=SpeedMode.BELT_SPEED,
        belt_speed_fpm=50.0,
        part_weight_lbs=5.0,
        part_length_in=12.0,
        part_width_in=8.0,
        part_spacing_in=6.0,
        orientation=Orientation.LENGTHWISE,
        required_throughput_pph=1500.0,
        throughput_margin_pct=10.0,
        bed_type=BedType.SLIDER_BED,
        belt_tracking_method=BeltTrackingMethod.CROWNED,
    )
