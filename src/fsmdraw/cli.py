"""
Command-line interface for fsmdraw.

Inspects the edge geometry of saved diagram files: drawable shapes,
hit-testing at a point, and a default configuration file.
"""

import argparse
import json
import sys

from fsmdraw.config import load_config, save_default_config
from fsmdraw.tracer import configure_from, get_tracer


def _add_common(parser):
    parser.add_argument(
        "--diagram", "-d",
        required=True,
        help="Path to diagram JSON file",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable runtime tracing",
    )
    parser.add_argument(
        "--trace-level",
        default="INFO",
        choices=["ERROR", "WARN", "INFO", "DEBUG"],
        help="Trace log level",
    )
    parser.add_argument(
        "--trace-file",
        default=None,
        help="Path to write trace logs",
    )


def build_parser():
    parser = argparse.ArgumentParser(
        prog="fsmdraw",
        description="fsmdraw: curved-edge geometry for FSM and graph diagrams",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    shapes_parser = subparsers.add_parser("shapes", help="Print drawable edge shapes as JSON")
    _add_common(shapes_parser)
    shapes_parser.add_argument(
        "--edge", "-e",
        type=int,
        default=None,
        help="Only this edge index",
    )

    hit_parser = subparsers.add_parser("hit", help="List edges under a point")
    _add_common(hit_parser)
    hit_parser.add_argument("x", type=float, help="Point x coordinate")
    hit_parser.add_argument("y", type=float, help="Point y coordinate")
    hit_parser.add_argument(
        "--tolerance", "-t",
        type=float,
        default=None,
        help="Hit tolerance (overrides config)",
    )

    init_parser = subparsers.add_parser("init-config", help="Create default config file")
    init_parser.add_argument(
        "--out", "-o",
        default="fsmdraw_config.yaml",
        help="Output path for config file",
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "shapes":
        return handle_shapes(args)
    elif args.command == "hit":
        return handle_hit(args)
    elif args.command == "init-config":
        return handle_init_config(args)

    return 0


def _setup(args):
    """Load config and configure tracing; CLI flags win over the file."""
    config = load_config(args.config)
    if args.trace:
        config.tracing.enabled = True
        config.tracing.level = args.trace_level
        config.tracing.file_path = args.trace_file
    configure_from(config.tracing)
    return config


def handle_shapes(args):
    """Handle the shapes command."""
    config = _setup(args)
    tracer = get_tracer()

    try:
        from fsmdraw.io.diagram_json import load_diagram
        from fsmdraw.shapes import build_diagram_shapes

        with tracer.span("cli_shapes", module="cli"):
            document = load_diagram(args.diagram)
            shapes = build_diagram_shapes(document, config)

        output = []
        for i, shape in enumerate(shapes):
            if args.edge is not None and i != args.edge:
                continue
            entry = {"edge": i, "shape": None}
            if shape is not None:
                entry["shape"] = shape.model_dump(mode="json")
                entry["shape"]["arc"]["screen_start_deg"] = shape.arc.screen_start_deg
                entry["shape"]["arc"]["screen_extent_deg"] = shape.arc.screen_extent_deg
            output.append(entry)

        if args.edge is not None and not output:
            raise IndexError(f"No edge with index {args.edge}")

        print(json.dumps(output, indent=2))
        return 0

    except Exception as e:
        tracer.event(f"Shapes failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1


def handle_hit(args):
    """Handle the hit command."""
    config = _setup(args)
    tracer = get_tracer()

    if args.tolerance is not None:
        config.hit_test.radius_tolerance = args.tolerance

    try:
        from fsmdraw.io.diagram_json import load_diagram
        from fsmdraw.shapes import edges_at, topmost

        with tracer.span("cli_hit", module="cli"):
            document = load_diagram(args.diagram)
            hits = edges_at(document, [args.x, args.y], config)

        print(json.dumps({"point": [args.x, args.y], "edges": hits,
                          "picked": topmost(hits)}))
        return 0

    except Exception as e:
        tracer.event(f"Hit test failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1


def handle_init_config(args):
    """Handle the init-config command."""
    save_default_config(args.out)
    print(f"Default configuration saved to: {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
