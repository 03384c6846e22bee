"""Calculation engine: input resolution and the belt conveyor pipeline."""

from conveyorcalc.engine.resolve import (
    BedTypeFrictionTable,
    ResolvedInputs,
    resolve_bed_type,
    resolve_effective_friction,
    resolve_inputs,
)
from conveyorcalc.engine.calculator import (
    MODEL_KEY,
    LEGACY_MODEL_KEYS,
    calculate,
    calculate_sliderbed,
    run_calculation,
    resolve_model_key,
    is_legacy_model_key,
)

__all__ = [
    "BedTypeFrictionTable",
    "ResolvedInputs",
    "resolve_bed_type",
    "resolve_effective_friction",
    "resolve_inputs",
    "MODEL_KEY",
    "LEGACY_MODEL_KEYS",
    "calculate",
    "calculate_sliderbed",
    "run_calculation",
    "resolve_model_key",
    "is_legacy_model_key",
]
