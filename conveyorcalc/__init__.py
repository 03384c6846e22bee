"""
Belt Conveyor Calculator (conveyorcalc)

A sizing engine for belt conveyors: belt pull, drive torque and speed,
von Mises shaft sizing, tracking guidance, premium classification and
NORD gearmotor selection with BOM resolution.

Usage:
    python -m conveyorcalc make-example
    python -m conveyorcalc calculate --input example_input.json
    python -m conveyorcalc select-gearmotor --rpm 47.7 --torque 372 --sf 1.5
    python -m conveyorcalc serve --port 8000
"""

__version__ = "0.1.0"
__author__ = "Conveyor Calculator Project"

from conveyorcalc.models.inputs import (
    BedType,
    BeltTrackingMethod,
    CalculationParameters,
    ConveyorInputs,
    DEFAULT_PARAMETERS,
    ShaftSizingInputs,
)
from conveyorcalc.models.outputs import (
    CalculationResult,
    ConveyorOutputs,
    ShaftSizingResult,
    ValidationMessage,
)
from conveyorcalc.engine.calculator import calculate, run_calculation
from conveyorcalc.physics.shaft import calculate_shaft_diameter

__all__ = [
    "BedType",
    "BeltTrackingMethod",
    "CalculationParameters",
    "ConveyorInputs",
    "DEFAULT_PARAMETERS",
    "ShaftSizingInputs",
    "CalculationResult",
    "ConveyorOutputs",
    "ShaftSizingResult",
    "ValidationMessage",
    "calculate",
    "run_calculation",
    "calculate_shaft_diameter",
]
