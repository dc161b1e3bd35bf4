"""Main CLI entry point for recordcodec."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .. import __version__
from ..cli.analyze import analyze_file, decode_file
from ..exceptions import RecordCodecError


def main() -> int:
    """Main entry point for the recordcodec CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="recordcodec: Fixed-Layout Binary Record Codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  recordcodec --analyze records.py                                Show record layouts
  recordcodec --analyze records.py --decode Header --input h.bin  Decode a binary file
  recordcodec --version                                           Show version
        """,
    )

    parser.add_argument(
        "--analyze",
        metavar="FILE",
        type=str,
        help="Python file with BaseRecord definitions; shows field layouts",
    )

    parser.add_argument(
        "--decode",
        metavar="RECORD",
        type=str,
        help="Name of a record in --analyze FILE to decode --input with",
    )

    parser.add_argument(
        "--input",
        metavar="BIN",
        type=str,
        help="Binary file to decode",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"recordcodec {__version__}",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.decode and not (args.analyze and args.input):
        print("Error: --decode requires --analyze FILE and --input BIN", file=sys.stderr)
        return 2

    if args.analyze:
        file_path = Path(args.analyze)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        if args.decode:
            input_path = Path(args.input)
            if not input_path.exists():
                print(f"Error: File not found: {input_path}", file=sys.stderr)
                return 1
            try:
                print(decode_file(file_path, args.decode, input_path))
                return 0
            except (RecordCodecError, ValueError) as e:
                print(f"Error decoding {input_path}: {e}", file=sys.stderr)
                return 1

        try:
            analyze_file(file_path)
            return 0
        except Exception as e:
            print(f"Error analyzing file: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
