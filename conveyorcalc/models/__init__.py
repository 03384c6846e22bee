"""
Pydantic models for conveyor calculation inputs and outputs.
"""

from conveyorcalc.models.inputs import (
    BedType,
    BeltTrackingMethod,
    GearmotorMountingStyle,
    SpeedMode,
    Orientation,
    ShaftDiameterMode,
    FrameHeightMode,
    SideLoadingDirection,
    SideLoadingSeverity,
    ConveyorInputs,
    CalculationParameters,
    DEFAULT_PARAMETERS,
    ShaftSizingInputs,
    normalize_enum,
    example_inputs,
)
from conveyorcalc.models.outputs import (
    PremiumLevel,
    PremiumFlags,
    ValidationSeverity,
    ValidationMessage,
    ShaftSizingResult,
    TrackingRiskLevel,
    TrackingRiskFactor,
    TrackingGuidance,
    ConveyorOutputs,
    CalculationMetadata,
    CalculationResult,
)

__all__ = [
    "BedType",
    "BeltTrackingMethod",
    "GearmotorMountingStyle",
    "SpeedMode",
    "Orientation",
    "ShaftDiameterMode",
    "FrameHeightMode",
    "SideLoadingDirection",
    "SideLoadingSeverity",
    "ConveyorInputs",
    "CalculationParameters",
    "DEFAULT_PARAMETERS",
    "ShaftSizingInputs",
    "normalize_enum",
    "example_inputs",
    "PremiumLevel",
    "PremiumFlags",
    "ValidationSeverity",
    "ValidationMessage",
    "ShaftSizingResult",
    "TrackingRiskLevel",
    "TrackingRiskFactor",
    "TrackingGuidance",
    "ConveyorOutputs",
    "CalculationMetadata",
    "CalculationResult",
]
