"""
BOM (bill of materials) resolver for NORD FLEXBLOC gearmotors.

Parses model strings and resolves component part numbers from a
component map.

Model string format: "SK [stages]SI[size][/suffix] - [adapter] - [motor frame]"
Examples:
  - "SK 1SI31 - 56C - 63S/4"
  - "SK 2SI50 - 140TC - 182T/4"
  - "SK 1SI63/H10 - 56C - 63L/4" (second stage suffix is dropped)

The gear unit is keyed by size, WORM ratio and mounting variant. The
total ratio (worm x helical) never keys a gear unit.
"""

import logging
import re
from typing import Optional

from conveyorcalc.gearmotor.models import (
    BomComponent,
    BomCopyContext,
    BomResolution,
    ComponentMap,
    ComponentType,
    KitStatus,
    OUTPUT_SHAFT_OPTION_LABELS,
    OutputShaftOption,
    ParsedModelType,
    PerformancePoint,
)
from conveyorcalc.models.inputs import GearmotorMountingStyle, normalize_enum

logger = logging.getLogger(__name__)


DEFAULT_MOUNTING_VARIANT = "inch_hollow"

VALID_WORM_RATIOS = [5, 7.5, 10, 12.5, 15, 20, 25, 30, 40, 50, 60, 80, 100]

MODEL_TYPE_PATTERN = re.compile(r"SK\s*(\d)?SI(\d+)(?:/\w+)?\s*-\s*(\w+)\s*-\s*(\S+)", re.IGNORECASE)
REAL_PART_NUMBER_PATTERN = re.compile(r"^[36]\d{7}$")

PLACEHOLDER = "—"

COMPONENT_LABELS = [
    (ComponentType.GEAR_UNIT, "Gear Unit"),
    (ComponentType.MOTOR, "Motor (STD or BRK)"),
    (ComponentType.ADAPTER, "Adapter"),
    (ComponentType.OUTPUT_SHAFT_KIT, "Output Shaft Kit"),
]

KIT_NOT_REQUIRED_DESCRIPTION = "Not required for shaft mount"
KIT_MISSING_DESCRIPTION = "Required for chain drive configuration"

KIT_COPY_TEXT = {
    KitStatus.NOT_REQUIRED: f"{PLACEHOLDER} (not required)",
    KitStatus.MISSING: f"{PLACEHOLDER} (select in Drive Arrangement)",
    KitStatus.CONFIGURED: f"{PLACEHOLDER} (PN pending, not included in order)",
}


def is_real_part_number(part_number: Optional[str]) -> bool:
    """
    True for an orderable NORD part number.

    Real part numbers are 8 digits starting with 3 or 6 (e.g. 60692130).
    Internal keys like "SI63-0.25HP" are not orderable.
    """
    if not part_number:
        return False
    return bool(REAL_PART_NUMBER_PATTERN.match(part_number))


def parse_model_type(model_type: Optional[str]) -> Optional[ParsedModelType]:
    """
    Parse a model string into its component identifiers.

    Returns:
        ParsedModelType, or None if the string is empty or incomplete
    """
    if not model_type:
        return None

    normalized = " ".join(model_type.split())
    match = MODEL_TYPE_PATTERN.search(normalized)
    if not match:
        return None

    stages, size, adapter, frame = match.groups()
    return ParsedModelType(
        worm_stages=int(stages or "1"),
        gear_unit_size=f"SI{size}",
        size_code=size,
        adapter_code=adapter,
        motor_frame=frame,
    )


def normalize_worm_ratio(ratio: float) -> float:
    """Worm ratio rounded to one decimal for keying (12.50 -> 12.5)."""
    return round(float(ratio), 1)


def is_valid_worm_ratio(ratio: float) -> bool:
    return normalize_worm_ratio(ratio) in VALID_WORM_RATIOS


def needs_output_shaft_kit(mounting_style) -> bool:
    """Only a bottom mount (chain coupled) drive needs an output shaft kit."""
    return normalize_enum(GearmotorMountingStyle, mounting_style) == GearmotorMountingStyle.BOTTOM_MOUNT


def get_missing_hint(component_type: ComponentType, kit_required: bool = True) -> str:
    """User-facing hint for an unresolved BOM slot."""
    if component_type == ComponentType.OUTPUT_SHAFT_KIT:
        if kit_required:
            return "Select an output shaft option to resolve this."
        return "Not required for shaft mount configuration."
    if component_type == ComponentType.GEAR_UNIT:
        return "Gear unit PN mapping not keyed for this model yet."
    return "No matching component found in component map."


def _format_hp(hp: float) -> str:
    return f"{hp:g}"


def _resolve_gear_unit(
    parsed: ParsedModelType,
    worm_ratio: Optional[float],
    motor_hp: float,
    component_map: ComponentMap,
    mounting_variant: str,
) -> tuple[BomComponent, bool]:
    """Gear unit slot, plus whether more than one record matched."""
    default_description = f"NORD FLEXBLOC {parsed.gear_unit_size} {_format_hp(motor_hp)}HP"
    if worm_ratio is None:
        return BomComponent(
            component_type=ComponentType.GEAR_UNIT, description=default_description, found=False
        ), False

    key_ratio = normalize_worm_ratio(worm_ratio)
    matches = [
        record for record in component_map.gear_units
        if record.size.upper() == parsed.gear_unit_size.upper()
        and normalize_worm_ratio(record.worm_ratio) == key_ratio
        and record.mounting_variant == mounting_variant
        and is_real_part_number(record.part_number)
    ]
    if not matches:
        return BomComponent(
            component_type=ComponentType.GEAR_UNIT, description=default_description, found=False
        ), False

    record = matches[0]
    return BomComponent(
        component_type=ComponentType.GEAR_UNIT,
        part_number=record.part_number,
        description=record.description or default_description,
        found=True,
    ), len(matches) > 1


def _resolve_motor(parsed: ParsedModelType, motor_hp: float, component_map: ComponentMap) -> BomComponent:
    default_description = f"{parsed.motor_frame} Motor {_format_hp(motor_hp)}HP"
    for record in component_map.motors:
        if (
            record.adapter_code == parsed.adapter_code
            and record.motor_frame == parsed.motor_frame
            and abs(record.motor_hp - motor_hp) < 0.01
        ):
            return BomComponent(
                component_type=ComponentType.MOTOR,
                part_number=record.part_number,
                description=record.description or default_description,
                found=True,
            )
    return BomComponent(component_type=ComponentType.MOTOR, description=default_description, found=False)


def _resolve_adapter(parsed: ParsedModelType, component_map: ComponentMap) -> BomComponent:
    default_description = f"NEMA {parsed.adapter_code} Adapter"
    for record in component_map.adapters:
        if record.adapter_code == parsed.adapter_code:
            return BomComponent(
                component_type=ComponentType.ADAPTER,
                part_number=record.part_number,
                description=record.description or default_description,
                found=True,
            )
    return BomComponent(component_type=ComponentType.ADAPTER, description=default_description, found=False)


def resolve_output_shaft_kit(
    mounting_style,
    output_shaft_option: Optional[OutputShaftOption] = None,
) -> BomComponent:
    """
    Output shaft kit slot.

    Shaft mounted drives never need a kit (found, no part). Bottom mount
    drives are missing until an option is chosen; a chosen option is
    configured with its part number still pending.
    """
    if not needs_output_shaft_kit(mounting_style):
        return BomComponent(
            component_type=ComponentType.OUTPUT_SHAFT_KIT,
            description=KIT_NOT_REQUIRED_DESCRIPTION,
            found=True,
            status=KitStatus.NOT_REQUIRED,
        )
    if output_shaft_option is None:
        return BomComponent(
            component_type=ComponentType.OUTPUT_SHAFT_KIT,
            description=KIT_MISSING_DESCRIPTION,
            found=False,
            status=KitStatus.MISSING,
        )
    label = OUTPUT_SHAFT_OPTION_LABELS[OutputShaftOption(output_shaft_option)]
    return BomComponent(
        component_type=ComponentType.OUTPUT_SHAFT_KIT,
        description=f"Configured: {label}",
        found=True,
        status=KitStatus.CONFIGURED,
    )


def resolve_bom(
    point: PerformancePoint,
    component_map: ComponentMap,
    mounting_style=GearmotorMountingStyle.SHAFT_MOUNTED,
    output_shaft_option: Optional[OutputShaftOption] = None,
    mounting_variant: str = DEFAULT_MOUNTING_VARIANT,
) -> BomResolution:
    """
    Resolve the four BOM slots for a selected catalog row.

    Args:
        point: Selected performance point (model string, HP, worm ratio)
        component_map: Vendor part numbers
        mounting_style: Drive arrangement; decides whether a kit is needed
        output_shaft_option: Kit option chosen for bottom mount drives
        mounting_variant: Gear unit hollow shaft variant

    Returns:
        BomResolution. Unmatched slots carry found=False.
    """
    parsed = parse_model_type(point.model_type)
    kit = resolve_output_shaft_kit(mounting_style, output_shaft_option)

    if parsed is None:
        logger.warning("Unable to parse model type %r", point.model_type)
        components = [
            BomComponent(component_type=ComponentType.GEAR_UNIT, description="Unable to parse model", found=False),
            BomComponent(component_type=ComponentType.MOTOR, found=False),
            BomComponent(component_type=ComponentType.ADAPTER, found=False),
            kit,
        ]
        return BomResolution(model_type=point.model_type or "", parsed=None, components=components)

    gear_unit, multiple = _resolve_gear_unit(
        parsed, point.worm_ratio, point.motor_hp, component_map, mounting_variant
    )
    components = [
        gear_unit,
        _resolve_motor(parsed, point.motor_hp, component_map),
        _resolve_adapter(parsed, component_map),
        kit,
    ]

    for component in components:
        if not component.found:
            logger.warning("BOM slot %s not resolved for %s", component.component_type.value, point.model_type)

    return BomResolution(
        model_type=point.model_type,
        parsed=parsed,
        components=components,
        complete=all(c.found for c in components),
        had_multiple_matches=multiple,
    )


def _kit_status(component: Optional[BomComponent]) -> KitStatus:
    """Kit state for a slot, inferring it for hand-built resolutions."""
    if component is None:
        return KitStatus.MISSING
    if component.status is not None:
        return component.status
    if component.part_number and component.found:
        return KitStatus.RESOLVED
    if not component.found:
        return KitStatus.MISSING
    if (component.description or "").startswith("Configured"):
        return KitStatus.CONFIGURED
    return KitStatus.NOT_REQUIRED


def build_bom_copy_text(bom: BomResolution, context: BomCopyContext) -> str:
    """
    Order-friendly BOM text for clipboard copy.

    Format:
        NORD FLEXBLOC Gearmotor BOM
        Selected Model: <model or —>
        Catalog Page: <page, when known>

        1) Gear Unit: <PN or —>  | <description>
        2) Motor (STD or BRK): ...
        3) Adapter: ...
        4) Output Shaft Kit: ...

        Notes:
        - Applied SF / Catalog SF
        - one MISSING line per unresolved slot
    """
    lines = [
        "NORD FLEXBLOC Gearmotor BOM",
        f"Selected Model: {bom.model_type or PLACEHOLDER}",
    ]
    if context.catalog_page:
        lines.append(f"Catalog Page: {context.catalog_page}")
    lines.append("")

    missing: list[tuple[str, str]] = []
    for index, (component_type, label) in enumerate(COMPONENT_LABELS, start=1):
        component = bom.component(component_type)
        description = (component.description if component else None) or PLACEHOLDER

        if component_type == ComponentType.OUTPUT_SHAFT_KIT:
            status = _kit_status(component)
            if status == KitStatus.RESOLVED:
                part = component.part_number
            else:
                part = KIT_COPY_TEXT[status]
            if status in (KitStatus.MISSING, KitStatus.CONFIGURED):
                missing.append((label, get_missing_hint(component_type, kit_required=True)))
        else:
            part = (component.part_number if component else None) or PLACEHOLDER
            if component is None or not component.part_number or not component.found:
                missing.append((label, get_missing_hint(component_type)))

        lines.append(f"{index}) {label}: {part}  | {description}")

    lines.append("")
    lines.append("Notes:")
    lines.append(f"- Applied SF: {context.applied_sf:g}")
    lines.append(f"- Catalog SF: {context.catalog_sf:g}")
    if context.had_multiple_matches or bom.had_multiple_matches:
        lines.append("- NOTE: Multiple matches existed; selected first deterministic match.")
    for label, reason in missing:
        lines.append(f"- MISSING: {label} PN ({reason})")

    return "\n".join(lines)
