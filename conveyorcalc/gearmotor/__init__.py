"""
Gearmotor selection and BOM resolution for NORD FLEXBLOC drives.

Selection filters catalog performance rows on torque, speed and service
factor, then ranks the survivors. BOM resolution maps a selected model
string onto vendor part numbers.
"""

from conveyorcalc.gearmotor.models import (
    GearmotorSeries,
    ComponentType,
    OutputShaftOption,
    KitStatus,
    PerformancePoint,
    GearmotorSelectionInputs,
    CandidateEvaluation,
    GearmotorCandidate,
    GearmotorSelectionResult,
    ComponentMap,
    GearmotorCatalog,
    BomComponent,
    BomResolution,
    BomCopyContext,
    BomRequest,
)
from conveyorcalc.gearmotor.evaluate import evaluate_candidate, evaluate_point, format_margin_pct
from conveyorcalc.gearmotor.selector import filter_candidates, rank_candidates, select_gearmotor
from conveyorcalc.gearmotor.bom import (
    build_bom_copy_text,
    get_missing_hint,
    is_real_part_number,
    needs_output_shaft_kit,
    parse_model_type,
    resolve_bom,
)
from conveyorcalc.gearmotor.loader import load_catalog, catalog_exists
from conveyorcalc.gearmotor.source import (
    CatalogSource,
    JsonCatalogSource,
    select_gearmotor_from_source,
    resolve_bom_from_source,
)

__all__ = [
    "GearmotorSeries",
    "ComponentType",
    "OutputShaftOption",
    "KitStatus",
    "PerformancePoint",
    "GearmotorSelectionInputs",
    "CandidateEvaluation",
    "GearmotorCandidate",
    "GearmotorSelectionResult",
    "ComponentMap",
    "GearmotorCatalog",
    "BomComponent",
    "BomResolution",
    "BomCopyContext",
    "BomRequest",
    "evaluate_candidate",
    "evaluate_point",
    "format_margin_pct",
    "filter_candidates",
    "rank_candidates",
    "select_gearmotor",
    "build_bom_copy_text",
    "get_missing_hint",
    "is_real_part_number",
    "needs_output_shaft_kit",
    "parse_model_type",
    "resolve_bom",
    "load_catalog",
    "catalog_exists",
    "CatalogSource",
    "JsonCatalogSource",
    "select_gearmotor_from_source",
    "resolve_bom_from_source",
]
