"""zhchain CLI - Chinese script conversion.

Usage:
    python -m zhchain.main 开源的编程语言
    python -m zhchain.main --profile t2s --input novel.txt --output novel_s.txt
    echo 开源 | python -m zhchain.main --data-dir /usr/share/opencc
    python -m zhchain.main --list
"""

import argparse
import logging
import sys
from pathlib import Path

from . import config as cfg
from .converter import new_converter
from .errors import LoadError


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="zhchain - Chinese script conversion"
    )
    parser.add_argument(
        "text",
        nargs="*",
        help="Text to convert (default: read --input or stdin)",
    )
    parser.add_argument(
        "--profile",
        "-p",
        type=str,
        default=cfg.default_profile(),
        help=f"Conversion profile name (default: {cfg.default_profile()})",
    )
    parser.add_argument(
        "--data-dir",
        "-d",
        type=Path,
        default=None,
        help=f"Data directory with config/ and dictionary/ (default: ${cfg.DATA_DIR_ENV} or bundled data)",
    )
    parser.add_argument(
        "--input",
        "-i",
        type=Path,
        help="Input file",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available profiles and exit",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log dictionary loading details",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only log errors",
    )

    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    data_root = args.data_dir or cfg.default_data_dir()

    if args.list:
        for name in cfg.available_profiles(data_root):
            print(name)
        return 0

    try:
        converter = new_converter(args.profile, data_root)
    except LoadError as e:
        print(f"ERROR - {e}", file=sys.stderr)
        return 1

    if args.text:
        lines = [" ".join(args.text)]
    elif args.input:
        with open(args.input, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    else:
        lines = sys.stdin.read().splitlines()

    converted = "\n".join(converter.convert_many(lines))

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(converted + "\n")
    else:
        print(converted)

    return 0


if __name__ == "__main__":
    sys.exit(main())
