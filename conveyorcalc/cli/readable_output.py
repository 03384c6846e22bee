"""
Helpers to turn calculation results into a compact, human-readable
console summary, with metric equivalents for the headline numbers.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TextIO

from conveyorcalc.physics.units import to_metric


def _fmt_float(value: Any, unit: str = "", zero_default: str = "n/a") -> str:
    """Safely format a float with optional unit suffix."""
    try:
        fval = float(value)
    except (TypeError, ValueError):
        return zero_default
    suffix = f" {unit}" if unit else ""
    if abs(fval) >= 100:
        return f"{fval:,.0f}{suffix}"
    return f"{fval:.2f}{suffix}"


def _with_metric(value: Any, unit: str, label: str, metric_unit: str, metric_label: str) -> str:
    """'12.50 in (317.50 mm)' style value, or n/a."""
    if value is None:
        return "n/a"
    metric = to_metric(float(value), unit, metric_unit)
    return f"{_fmt_float(value, label)} ({_fmt_float(metric, metric_label)})"


def summary_lines(data: dict[str, Any]) -> list[str]:
    """
    Summary of a CalculationResult dict.

    Args:
        data: CalculationResult as produced by model_dump(mode="json")

    Returns:
        Lines ready to print
    """
    lines = []
    metadata = data.get("metadata") or {}
    lines.append(
        f"Model: {metadata.get('model_key', '?')} ({metadata.get('model_version_id', '?')})"
    )

    errors = data.get("errors") or []
    warnings = data.get("warnings") or []
    outputs = data.get("outputs")

    if not data.get("success") or outputs is None:
        lines.append(f"Calculation blocked by {len(errors)} error(s):")
        for e in errors:
            lines.append(f"  x {e.get('field')}: {e.get('message')}")
        return lines

    lines.append(
        f"Belt: {_with_metric(outputs.get('total_belt_length_in'), 'inch', 'in', 'm', 'm')} long, "
        f"{_with_metric(outputs.get('belt_weight_lbf'), 'lbf', 'lbf', 'N', 'N')}"
    )
    lines.append(
        f"Load: {_fmt_float(outputs.get('parts_on_belt'))} parts, "
        f"total {_with_metric(outputs.get('total_load_lbf'), 'lbf', 'lbf', 'N', 'N')}"
    )
    lines.append(
        f"Pull: friction {_fmt_float(outputs.get('friction_pull_lb'), 'lb')}, "
        f"incline {_fmt_float(outputs.get('incline_pull_lb'), 'lb')}, "
        f"total {_with_metric(outputs.get('total_belt_pull_lb'), 'lbf', 'lb', 'N', 'N')}"
    )
    lines.append(
        f"Drive: {_fmt_float(outputs.get('belt_speed_fpm'), 'fpm')} at "
        f"{_fmt_float(outputs.get('drive_shaft_rpm'), 'rpm')}, "
        f"torque {_with_metric(outputs.get('torque_drive_shaft_inlbf'), 'lbf * inch', 'in-lbf', 'N * m', 'N-m')}, "
        f"gear ratio {_fmt_float(outputs.get('gear_ratio'))}"
    )
    lines.append(
        f"Shafts: drive {_with_metric(outputs.get('drive_shaft_diameter_in'), 'inch', 'in', 'mm', 'mm')}, "
        f"tail {_with_metric(outputs.get('tail_shaft_diameter_in'), 'inch', 'in', 'mm', 'mm')}"
    )

    capacity = outputs.get("capacity_pph")
    target = outputs.get("target_pph")
    if target is not None:
        status = "OK" if outputs.get("meets_throughput") else "SHORT"
        lines.append(
            f"Throughput: {_fmt_float(capacity, 'pph')} vs target {_fmt_float(target, 'pph')} [{status}]"
        )
    else:
        lines.append(f"Throughput: {_fmt_float(capacity, 'pph')}")

    premium = outputs.get("premium_flags") or {}
    lines.append(f"Premium level: {premium.get('premium_level', 'standard')}")

    tracking = outputs.get("tracking_guidance") or {}
    if tracking:
        lines.append(
            f"Tracking: {tracking.get('recommendation')} recommended "
            f"(crowned risk {tracking.get('risk_level')})"
        )

    if warnings:
        lines.append("Warnings:")
        for w in warnings:
            lines.append(f"  - [{w.get('severity')}] {w.get('message')}")

    return lines


def print_readable_output(json_path: Path, stream: TextIO | None = None) -> None:
    """
    Print a human-friendly summary of a calculation result JSON file.

    Args:
        json_path: Path to the JSON output file.
        stream: Where to print (stdout by default).
    """
    data = json.loads(Path(json_path).read_text())
    for line in summary_lines(data):
        print(line, file=stream)
