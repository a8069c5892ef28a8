"""
Command-line interface tools for dcdc-tools.

Provides CLI commands via the `dcdc-tools` command:

    dcdc-tools buck <design.yaml>      - Size and assemble a buck converter

Examples:
    dcdc-tools buck rail_5v.yaml
    dcdc-tools buck rail_5v.yaml --inductance 22uH --series E24
    dcdc-tools buck rail_5v.yaml --format json
"""

import argparse
import sys
from typing import List, Optional

from dcdc_tools import __version__

__all__ = ["main"]


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for dcdc-tools CLI."""
    parser = argparse.ArgumentParser(
        prog="dcdc-tools",
        description="DC-DC converter design toolkit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"dcdc-tools {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Buck subcommand
    buck_parser = subparsers.add_parser("buck", help="Size and assemble a buck converter")
    buck_parser.add_argument("design", help="Path to YAML design file")
    buck_parser.add_argument(
        "--inductance", "-L", help="Chosen inductance (e.g. 22uH); overrides the design file"
    )
    buck_parser.add_argument(
        "--series", choices=["E6", "E12", "E24"], help="Preferred value series for rounding"
    )
    buck_parser.add_argument("--format", "-f", choices=["text", "json"], default="text")
    buck_parser.add_argument("-v", "--verbose", action="store_true", help="Log each design step")

    if argv is None:
        argv = sys.argv[1:]

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "buck":
        from .buck_cmd import run_buck

        return run_buck(args)

    return 0


if __name__ == "__main__":
    sys.exit(main())
