"""
Command-line interface for the belt conveyor calculator.

Usage:
    python -m conveyorcalc make-example [--output example_input.json]
    python -m conveyorcalc calculate --input example.json [--output results.json] [--parameters params.json]
    python -m conveyorcalc shaft --belt-width 18 --pulley-diameter 4 --tension 120 [--idler]
    python -m conveyorcalc select-gearmotor --rpm 47.7 --torque 372 --sf 1.5 [--tolerance 15]
    python -m conveyorcalc bom --point-id fb-si63-050-r40 [--mounting-style bottom_mount]
    python -m conveyorcalc serve [--port 8000]
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from conveyorcalc import __version__
from conveyorcalc.cli.readable_output import summary_lines
from conveyorcalc.config import configure_logging, settings
from conveyorcalc.engine.calculator import run_calculation
from conveyorcalc.errors import CatalogError
from conveyorcalc.gearmotor.bom import build_bom_copy_text
from conveyorcalc.gearmotor.evaluate import format_margin_pct
from conveyorcalc.gearmotor.models import (
    BomCopyContext,
    GearmotorSelectionInputs,
    OutputShaftOption,
)
from conveyorcalc.gearmotor.source import (
    JsonCatalogSource,
    resolve_bom_from_source,
    select_gearmotor_from_source,
)
from conveyorcalc.models.inputs import (
    ConveyorInputs,
    GearmotorMountingStyle,
    ShaftSizingInputs,
    example_inputs,
)
from conveyorcalc.physics.shaft import calculate_shaft_diameter


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="conveyorcalc",
        description="Belt Conveyor Calculator - belt pull, drive torque, shaft sizing "
                    "and gearmotor selection for belt conveyors.",
    )
    parser.add_argument("--version", action="version", version=f"conveyorcalc {__version__}")
    parser.add_argument("--log-level", default=None, help="Logging level (default: from settings)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # make-example command
    example_parser = subparsers.add_parser(
        "make-example",
        help="Generate an example input JSON file",
    )
    example_parser.add_argument(
        "--output", "-o",
        type=Path,
        default=Path("example_input.json"),
        help="Output path for example file (default: example_input.json)",
    )

    # calculate command
    calc_parser = subparsers.add_parser(
        "calculate",
        help="Validate and calculate a conveyor configuration",
    )
    calc_parser.add_argument(
        "--input", "-i",
        type=Path,
        required=True,
        help="Path to JSON input file with conveyor inputs",
    )
    calc_parser.add_argument(
        "--parameters",
        type=Path,
        default=None,
        help="Path to JSON file with parameter overrides",
    )
    calc_parser.add_argument(
        "--model-key",
        default=None,
        help="Model key (legacy keys are accepted)",
    )
    calc_parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Path to save JSON output (prints to stdout if not specified)",
    )

    # shaft command
    shaft_parser = subparsers.add_parser(
        "shaft",
        help="Size a single pulley shaft",
    )
    shaft_parser.add_argument("--belt-width", type=float, required=True, help="Belt width (in)")
    shaft_parser.add_argument("--pulley-diameter", type=float, required=True, help="Pulley diameter (in)")
    shaft_parser.add_argument("--tension", type=float, required=True, help="Effective belt tension Te (lbf)")
    shaft_parser.add_argument("--idler", action="store_true", help="Size an idler (tail) shaft: no torque, no keyway")
    shaft_parser.add_argument("--wrap-angle", type=float, default=None, help="Belt wrap angle (deg, default 180)")
    shaft_parser.add_argument("--bearing-span", type=float, default=None, help="Bearing span (in, default width + 5)")
    shaft_parser.add_argument("--service-factor", type=float, default=None, help="Service factor (default 1.2)")

    # select-gearmotor command
    select_parser = subparsers.add_parser(
        "select-gearmotor",
        help="Select gearmotors from the catalog",
    )
    select_parser.add_argument("--rpm", type=float, required=True, help="Required output speed (rev/min)")
    select_parser.add_argument("--torque", type=float, required=True, help="Required output torque (lb-in)")
    select_parser.add_argument("--sf", type=float, required=True, help="Applied service factor")
    select_parser.add_argument(
        "--tolerance",
        type=float,
        default=None,
        help="Speed tolerance %% (default: from settings)",
    )
    select_parser.add_argument("--catalog", type=Path, default=None, help="Catalog JSON (default: packaged)")
    select_parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Path to save JSON output (prints to stdout if not specified)",
    )

    # bom command
    bom_parser = subparsers.add_parser(
        "bom",
        help="Resolve the BOM for a catalog performance point",
    )
    bom_parser.add_argument("--point-id", required=True, help="Performance point id from the catalog")
    bom_parser.add_argument(
        "--mounting-style",
        default=GearmotorMountingStyle.SHAFT_MOUNTED.value,
        help="shaft_mounted or bottom_mount (default: shaft_mounted)",
    )
    bom_parser.add_argument(
        "--output-shaft-option",
        choices=[o.value for o in OutputShaftOption],
        default=None,
        help="Output shaft kit option (bottom mount only)",
    )
    bom_parser.add_argument("--sf", type=float, default=None, help="Applied service factor for the copy text")
    bom_parser.add_argument("--catalog", type=Path, default=None, help="Catalog JSON (default: packaged)")

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start the FastAPI web server",
    )
    serve_parser.add_argument(
        "--host",
        default=settings.API_HOST,
        help=f"Host to bind to (default: {settings.API_HOST})",
    )
    serve_parser.add_argument(
        "--port", "-p",
        type=int,
        default=settings.API_PORT,
        help=f"Port to listen on (default: {settings.API_PORT})",
    )
    serve_parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )

    return parser


def _write_or_print(output_json: str, output: Path | None, label: str) -> None:
    if output:
        with open(output, "w") as f:
            f.write(output_json)
        print(f"\n{label} saved to {output}", file=sys.stderr)
    else:
        print(output_json)


def _catalog_source(path: Path | None) -> JsonCatalogSource:
    return JsonCatalogSource(str(path) if path else settings.CATALOG_PATH)


def cmd_make_example(args: argparse.Namespace) -> int:
    """Generate an example input JSON file."""
    output_json = example_inputs().model_dump_json(indent=2, exclude_none=True)

    with open(args.output, "w") as f:
        f.write(output_json)

    print(f"Created example input file: {args.output}")
    print("\nRun the calculation with:")
    print(f"  python -m conveyorcalc calculate --input {args.output}")

    return 0


def cmd_calculate(args: argparse.Namespace) -> int:
    """Validate and calculate a conveyor configuration."""
    try:
        with open(args.input) as f:
            input_data = json.load(f)

        parameters = None
        if args.parameters:
            with open(args.parameters) as f:
                parameters = json.load(f)

        inputs = ConveyorInputs(**input_data)

        print("\nBelt Conveyor Calculator", file=sys.stderr)
        print(
            f"Conveyor: {inputs.conveyor_length_cc_in:g} in C-C x {inputs.belt_width_in:g} in belt",
            file=sys.stderr,
        )

        result = run_calculation(inputs, parameters=parameters, model_key=args.model_key)

        _write_or_print(result.model_dump_json(indent=2), args.output, "Results")

        print("", file=sys.stderr)
        for line in summary_lines(result.model_dump(mode="json")):
            print(line, file=sys.stderr)

        return 0 if result.success else 1

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        # pydantic ValidationError is a ValueError
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_shaft(args: argparse.Namespace) -> int:
    """Size a single pulley shaft."""
    try:
        inputs = ShaftSizingInputs(
            belt_width_in=args.belt_width,
            pulley_diameter_in=args.pulley_diameter,
            effective_tension_lbf=args.tension,
            is_drive_pulley=not args.idler,
            wrap_angle_deg=args.wrap_angle,
            bearing_span_in=args.bearing_span,
            service_factor=args.service_factor,
        )
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = calculate_shaft_diameter(inputs)
    print(result.model_dump_json(indent=2))

    kind = "idler" if args.idler else "drive"
    print(
        f"\n{kind.capitalize()} shaft: {result.required_diameter_in:g} in "
        f"(calculated {result.calculated_diameter_in:g} in, "
        f"von Mises {result.von_mises_stress_psi:,.0f} psi, "
        f"deflection {'OK' if result.deflection_ok else 'HIGH'})",
        file=sys.stderr,
    )
    return 0


def cmd_select_gearmotor(args: argparse.Namespace) -> int:
    """Select gearmotors from the catalog."""
    try:
        inputs = GearmotorSelectionInputs(
            required_output_rpm=args.rpm,
            required_output_torque_lb_in=args.torque,
            chosen_service_factor=args.sf,
            speed_tolerance_pct=(
                args.tolerance if args.tolerance is not None else settings.DEFAULT_SPEED_TOLERANCE_PCT
            ),
        )
        result = asyncio.run(select_gearmotor_from_source(_catalog_source(args.catalog), inputs))
    except (ValidationError, CatalogError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    _write_or_print(result.model_dump_json(indent=2), args.output, "Selection")

    if not result.candidates:
        print(f"\n{result.message}", file=sys.stderr)
        return 1

    print(f"\n{len(result.candidates)} {result.selected_series.value} candidate(s):", file=sys.stderr)
    for c in result.candidates:
        print(
            f"  {c.point.id}: {c.point.model_type} {c.point.motor_hp:g}HP, "
            f"{c.point.output_rpm:g} rpm, {c.point.output_torque_lb_in:g} lb-in, "
            f"SF {c.point.catalog_sf:g}, margin {format_margin_pct(c.evaluation.margin_pct)}%",
            file=sys.stderr,
        )
    return 0


def cmd_bom(args: argparse.Namespace) -> int:
    """Resolve the BOM for a catalog performance point and print the copy text."""
    source = _catalog_source(args.catalog)
    try:
        points = [p for p in source.catalog.performance_points if p.id == args.point_id]
    except CatalogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not points:
        print(f"Error: No performance point with id {args.point_id!r}", file=sys.stderr)
        return 1
    point = points[0]

    resolution = asyncio.run(
        resolve_bom_from_source(
            source,
            point,
            mounting_style=args.mounting_style,
            output_shaft_option=OutputShaftOption(args.output_shaft_option) if args.output_shaft_option else None,
        )
    )
    context = BomCopyContext(
        applied_sf=args.sf if args.sf is not None else point.catalog_sf,
        catalog_sf=point.catalog_sf,
        catalog_page=point.catalog_page,
        motor_hp=point.motor_hp,
        had_multiple_matches=resolution.had_multiple_matches,
    )
    print(build_bom_copy_text(resolution, context))
    return 0 if resolution.complete else 1


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the FastAPI web server."""
    import uvicorn

    print("\nStarting Belt Conveyor Calculator API", file=sys.stderr)
    print(f"API: http://{args.host}:{args.port}/", file=sys.stderr)
    print(f"Docs: http://{args.host}:{args.port}/docs", file=sys.stderr)
    print("\nPress Ctrl+C to stop\n", file=sys.stderr)

    uvicorn.run(
        "conveyorcalc.api.server:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
    return 0


def cli(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "make-example": cmd_make_example,
        "calculate": cmd_calculate,
        "shaft": cmd_shaft,
        "select-gearmotor": cmd_select_gearmotor,
        "bom": cmd_bom,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


def main():
    """Console script entrypoint wrapper."""
    return cli()


if __name__ == "__main__":
    sys.exit(cli())
