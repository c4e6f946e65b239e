#!/usr/bin/env python3
"""
Command-line front end for sisplot.

Usage:
    python -m sisplot [options] [FILE]

Reads a program from FILE (or stdin when FILE is omitted or "-") and writes
its vertices, or an SVG preview, to stdout or the --output file.

Examples:
    # Vertex listing
    python -m sisplot spiral.sp

    # Vertex listing scaled to the unit circle
    python -m sisplot --normalize spiral.sp -o spiral.thr

    # HTML/SVG preview with the unit circle drawn
    python -m sisplot --svg --svg-unit-circle spiral.sp -o spiral.html

    # Show the parsed program
    python -m sisplot --dump-ast json spiral.sp
"""

import argparse
import logging
import sys

from .ast import ast_to_json, ast_to_yaml
from .config import DEFAULT_SVG_SIZE, RenderConfig, build_render_target
from .errors import SisplotError, format_error
from .program import execute, parse, validate

logger = logging.getLogger("sisplot")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sisplot",
        description="Render a sisplot polar plotting program.",
    )
    parser.add_argument("file", nargs="?", default="-",
                        help="program file to run (default: stdin)")
    parser.add_argument("-o", "--output", default="-",
                        help="output file (default: stdout)")
    parser.add_argument("--normalize", action="store_true",
                        help="scale radii to the unit circle ([-1, 1])")
    parser.add_argument("--svg", action="store_true",
                        help="write an HTML-wrapped SVG preview (implies --normalize)")
    parser.add_argument("--svg-size", type=int, default=DEFAULT_SVG_SIZE,
                        help=f"width and height of the SVG (default: {DEFAULT_SVG_SIZE})")
    parser.add_argument("--svg-unit-circle", action="store_true",
                        help="draw the unit circle on the SVG")
    parser.add_argument("--dump-ast", choices=["json", "yaml"],
                        help="print the parsed program instead of running it")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="enable debug logging")
    return parser


def read_source(path: str) -> tuple[str, str]:
    """Return (source text, origin) for a path, "-" meaning stdin."""
    if path == "-":
        return sys.stdin.read(), "<stdin>"
    with open(path, "r", encoding="utf-8") as f:
        return f.read(), path


def run_program(args) -> None:
    source, origin = read_source(args.file)
    logger.debug("read %d characters from %s", len(source), origin)
    statements = parse(source, origin=origin)

    if args.dump_ast:
        dump = ast_to_json if args.dump_ast == "json" else ast_to_yaml
        sys.stdout.write(dump(statements))
        sys.stdout.write("\n")
        return

    validate(statements)
    config = RenderConfig.from_args(args)

    if args.output == "-":
        execute(statements, build_render_target(config, sys.stdout))
    else:
        with open(args.output, "w", encoding="utf-8") as out:
            execute(statements, build_render_target(config, out))


def main(argv=None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.svg_size <= 0:
        parser.error("--svg-size must be positive")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )

    try:
        run_program(args)
    except SisplotError as e:
        print(format_error(e), file=sys.stderr)
        return 1
    except OSError as e:
        print(f"sisplot: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
