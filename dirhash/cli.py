"""Command-line entry point: ``dirhash PATH1 PATH2``."""

from __future__ import annotations

import argparse
import logging
import sys

from dirhash import __version__
from dirhash.compare import compare_paths
from dirhash.config import load_config
from dirhash.errors import ComparisonError, FingerprintError
from dirhash.hashing.builder import FingerprintBuilder
from dirhash.report import Palette, render, to_json

logger = logging.getLogger(__name__)

EXIT_IDENTICAL = 0
EXIT_DIFFERENT = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dirhash",
        description="Compare the contents of two files or two directories (SHA-256).",
        epilog=(
            "examples:\n"
            "  dirhash 01.txt 02.txt\n"
            "  dirhash ./dir1 ./dir2\n\n"
            "exit status: 0 identical, 1 different, 2 error"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("first", help="first file or directory")
    parser.add_argument("second", help="second file or directory")
    parser.add_argument(
        "-w", "--workers", type=int, default=None,
        help="hash worker threads (default: CPU count)",
    )
    parser.add_argument("--json", action="store_true", help="print a JSON report")
    parser.add_argument("--no-color", action="store_true", help="disable colored output")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _tolerate_undecodable_names() -> None:
    # Non-UTF-8 file names arrive as lone surrogates (PEP 383)
    for stream in (sys.stdout, sys.stderr):
        reconfigure = getattr(stream, "reconfigure", None)
        if reconfigure is not None:
            reconfigure(errors="backslashreplace")


def main(argv: list[str] | None = None) -> int:
    _tolerate_undecodable_names()
    parser = build_parser()
    args = parser.parse_args(argv)
    config = load_config()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.workers is not None and args.workers < 1:
        parser.error("--workers must be at least 1")

    builder = FingerprintBuilder(
        workers=args.workers or config.resolved_workers(),
        queue_factor=config.queue_factor,
    )

    try:
        result = compare_paths(args.first, args.second, builder=builder)
    except (FingerprintError, ComparisonError) as exc:
        logger.debug("Comparison failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    if args.json:
        print(to_json(result))
    else:
        color = config.color and not args.no_color and sys.stdout.isatty()
        palette = Palette() if color else Palette.plain()
        print(render(result, palette))

    return EXIT_IDENTICAL if result.identical else EXIT_DIFFERENT


if __name__ == "__main__":
    sys.exit(main())
