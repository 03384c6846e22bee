"""
Pydantic models for gearmotor catalog data, selection and BOM resolution.

Catalog rows (performance points, component records) are read-only.
Selection and BOM results are derived per request and never persisted.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from conveyorcalc.models.inputs import GearmotorMountingStyle, normalize_enum


class GearmotorSeries(str, Enum):
    FLEXBLOC = "FLEXBLOC"
    MINICASE = "MINICASE"


# Series policy: FLEXBLOC first, MINICASE as fallback
SERIES_ORDER = [GearmotorSeries.FLEXBLOC, GearmotorSeries.MINICASE]


class ComponentType(str, Enum):
    GEAR_UNIT = "gear_unit"
    MOTOR = "motor"
    ADAPTER = "adapter"
    OUTPUT_SHAFT_KIT = "output_shaft_kit"


class OutputShaftOption(str, Enum):
    INCH_KEYED = "inch_keyed"
    METRIC_KEYED = "metric_keyed"
    INCH_HOLLOW = "inch_hollow"
    METRIC_HOLLOW = "metric_hollow"


OUTPUT_SHAFT_OPTION_LABELS = {
    OutputShaftOption.INCH_KEYED: "Inch keyed bore",
    OutputShaftOption.METRIC_KEYED: "Metric keyed bore",
    OutputShaftOption.INCH_HOLLOW: "Inch hollow",
    OutputShaftOption.METRIC_HOLLOW: "Metric hollow",
}


class KitStatus(str, Enum):
    """Output shaft kit slot state."""
    NOT_REQUIRED = "not_required"   # found, no part needed
    MISSING = "missing"             # required, nothing selected or matched
    CONFIGURED = "configured"       # option selected, part number pending
    RESOLVED = "resolved"           # part number known


class PerformancePoint(BaseModel):
    """
    One vendor catalog performance row.

    A gearmotor model at one motor HP and reduction, with its catalog
    output speed, torque and service factor.
    """
    id: str = Field(..., description="Performance point identifier")
    vendor: str = Field(default="NORD")
    series: GearmotorSeries
    size_code: str = Field(..., description="Gear unit size code, e.g. '63'")
    model_type: str = Field(..., description="Full model string, e.g. 'SK 1SI63 - 56C - 71L/4'")
    motor_hp: float = Field(..., gt=0)
    output_rpm: float = Field(..., gt=0)
    output_torque_lb_in: float = Field(..., gt=0)
    service_factor_catalog: Optional[float] = Field(
        default=None, description="Catalog service factor; unset reads as 1.0"
    )
    worm_ratio: Optional[float] = Field(default=None, description="Worm stage ratio (gear unit PN key)")
    total_ratio: Optional[float] = Field(default=None, description="Worm x helical ratio (display only)")
    catalog_page: Optional[str] = Field(default=None, description="Catalog page reference")

    @property
    def catalog_sf(self) -> float:
        return self.service_factor_catalog or 1.0


class GearmotorSelectionInputs(BaseModel):
    """Drive requirements for gearmotor selection."""
    required_output_rpm: float = Field(..., description="Required gearmotor output speed (rev/min)")
    required_output_torque_lb_in: float = Field(..., description="Required output torque (lb-in)")
    chosen_service_factor: float = Field(..., description="Applied service factor")
    speed_tolerance_pct: float = Field(default=15.0, ge=0, description="Allowed speed deviation (%)")


class CandidateEvaluation(BaseModel):
    """
    Pass/fail and margin for one performance point.

    pass_all is the single predicate used both for filtering and for the
    per-row display.
    """
    pass_torque: bool
    pass_rpm: bool
    pass_sf: bool
    pass_all: bool
    margin_pct: float = Field(..., description="(catalog torque / required torque - 1) * 100")
    rpm_delta_pct: float = Field(..., description="(catalog rpm - required rpm) / required rpm * 100")
    required_torque_raw: float


class EvaluatedPoint(BaseModel):
    """A catalog row together with its evaluation, for display."""
    point: PerformancePoint
    evaluation: CandidateEvaluation


class GearmotorCandidate(BaseModel):
    """A passing performance point with its ranking metrics."""
    point: PerformancePoint
    evaluation: CandidateEvaluation
    oversize_ratio: float = Field(..., description="catalog torque / required torque")
    speed_delta: float = Field(..., description="|catalog rpm - required rpm|")
    speed_delta_pct: float


class GearmotorSelectionResult(BaseModel):
    """Ranked candidates (best first) with the series they came from."""
    candidates: list[GearmotorCandidate] = Field(default_factory=list)
    selected_series: Optional[GearmotorSeries] = None
    message: Optional[str] = Field(default=None, description="Why no candidates were returned")
    inputs: GearmotorSelectionInputs
    evaluations: list[EvaluatedPoint] = Field(
        default_factory=list, description="Every evaluated catalog row with pass/fail and margin"
    )

    @property
    def best(self) -> Optional[GearmotorCandidate]:
        return self.candidates[0] if self.candidates else None


class ParsedModelType(BaseModel):
    """Identifiers parsed out of a model string like 'SK 1SI63 - 56C - 71L/4'."""
    worm_stages: int
    gear_unit_size: str = Field(..., description="e.g. 'SI63'")
    size_code: str = Field(..., description="e.g. '63'")
    adapter_code: str = Field(..., description="e.g. '56C'")
    motor_frame: str = Field(..., description="e.g. '71L/4'")


class GearUnitRecord(BaseModel):
    size: str = Field(..., description="Gear unit size, e.g. 'SI63'")
    worm_ratio: float
    mounting_variant: str = Field(default="inch_hollow")
    part_number: str
    description: Optional[str] = None


class MotorRecord(BaseModel):
    adapter_code: str
    motor_frame: str
    motor_hp: float
    part_number: str
    description: Optional[str] = None


class AdapterRecord(BaseModel):
    adapter_code: str
    part_number: str
    description: Optional[str] = None


class ComponentMap(BaseModel):
    """Vendor part numbers for BOM resolution."""
    gear_units: list[GearUnitRecord] = Field(default_factory=list)
    motors: list[MotorRecord] = Field(default_factory=list)
    adapters: list[AdapterRecord] = Field(default_factory=list)


class BomComponent(BaseModel):
    """One BOM slot. found=False means the lookup failed."""
    component_type: ComponentType
    part_number: Optional[str] = None
    description: Optional[str] = None
    found: bool = False
    status: Optional[KitStatus] = Field(default=None, description="Output shaft kit state; None for other slots")


class BomResolution(BaseModel):
    model_type: str = ""
    parsed: Optional[ParsedModelType] = None
    components: list[BomComponent] = Field(default_factory=list)
    complete: bool = Field(default=False, description="Every slot found")
    had_multiple_matches: bool = False

    def component(self, component_type: ComponentType) -> Optional[BomComponent]:
        for component in self.components:
            if component.component_type == component_type:
                return component
        return None


class BomCopyContext(BaseModel):
    applied_sf: float
    catalog_sf: float
    catalog_page: Optional[str] = None
    motor_hp: Optional[float] = None
    had_multiple_matches: bool = False


class BomRequest(BaseModel):
    """BOM request for a selected catalog row."""
    point: PerformancePoint
    mounting_style: GearmotorMountingStyle = GearmotorMountingStyle.SHAFT_MOUNTED
    output_shaft_option: Optional[OutputShaftOption] = None
    mounting_variant: str = Field(default="inch_hollow")
    applied_sf: Optional[float] = Field(default=None, description="Applied SF for the copy text")

    @field_validator("mounting_style", mode="before")
    @classmethod
    def normalize_mounting_style(cls, v):
        return normalize_enum(GearmotorMountingStyle, v)


class GearmotorCatalog(BaseModel):
    """A vendor catalog: performance rows plus the component map."""
    performance_points: list[PerformancePoint] = Field(default_factory=list)
    components: ComponentMap = Field(default_factory=ComponentMap)

    def points_for_series(
        self,
        series: GearmotorSeries,
        min_rpm: Optional[float] = None,
        max_rpm: Optional[float] = None,
    ) -> list[PerformancePoint]:
        """Rows of one series, optionally limited to an rpm window."""
        return [
            point for point in self.performance_points
            if point.series == series
            and (min_rpm is None or point.output_rpm >= min_rpm)
            and (max_rpm is None or point.output_rpm <= max_rpm)
        ]
