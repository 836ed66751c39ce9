"""
Command line interface for number formatting.

Usage:
    python -m numfmt ",.2f" 1234.5 -0.004
    python -m numfmt "#x" 255 --strict
"""

import argparse
import logging
import sys
from decimal import Decimal, InvalidOperation

from .conf import configure
from .render import format_number
from .spec import SpecParseError, parse_spec


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point, returns the process exit status."""
    parser = argparse.ArgumentParser(
        description="Render numbers with a format specifier", prog="python -m numfmt"
    )
    parser.add_argument("pattern", help='Format specifier, e.g. "+08,.2f", ".1%%", "#x" or "^10.3s"')
    parser.add_argument("values", nargs="+", help="Numbers to render, one output line each")
    parser.add_argument(
        "--strict", action="store_true", help="Fail on radix overflow instead of saturating"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if args.strict:
        configure(radix_overflow="raise")

    try:
        spec = parse_spec(args.pattern)
    except SpecParseError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    for text in args.values:
        try:
            value = Decimal(text)
        except InvalidOperation:
            print(f"error: not a number: {text!r}", file=sys.stderr)
            return 2
        try:
            print(format_number(spec, value))
        except (OverflowError, TypeError) as e:
            print(f"error: {e}", file=sys.stderr)
            return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
