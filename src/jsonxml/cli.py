"""
Command line entry point: translate a JSON file into an XML file.

Exit status is 0 on success, 1 when the input cannot be translated or a file
cannot be read or written, and 2 on invalid usage.
"""

import argparse
import logging
import sys

from jsonxml import DEFAULT_MAX_DEPTH
from jsonxml import SourceMap
from jsonxml import Translation
from jsonxml import _profile
from jsonxml import translate_lines

logger = logging.getLogger(__name__)


def _get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsonxml",
        description="Translate a JSON file into an XML file.",
    )
    parser.add_argument("input", help="the JSON file to translate")
    parser.add_argument("output", help="the XML file to write")
    parser.add_argument(
        "-e",
        "--escape-text",
        action="store_true",
        help="escape <, > and & inside string values",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help=f"maximum object/array nesting (default {DEFAULT_MAX_DEPTH})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="log diagnostics (repeat for debug output)",
    )
    return parser


def _configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _report_errors(translation: Translation, source_map: SourceMap) -> None:
    print("Errors found during translation:", file=sys.stderr)
    for error in translation.errors:
        print(error, file=sys.stderr)
        lineno, colno = source_map.locate(error.pos)
        logger.info(
            "Position %d is line %d, column %d of the input file",
            error.pos,
            lineno,
            colno,
        )


def _log_profile() -> None:
    for stats in _profile.get_hot_path_stats().values():
        logger.info(
            "%s: %d calls, %d ns, %d chars consumed",
            stats.production,
            stats.call_count,
            stats.total_time_ns,
            stats.chars_consumed,
        )


def main(argv: list[str] | None = None) -> int:
    parser = _get_parser()
    args = parser.parse_args(argv)
    if args.max_depth < 0:
        parser.error("--max-depth must be non-negative")
    _configure_logging(args.verbose)

    try:
        with open(args.input, encoding="utf-8") as source:
            lines = source.readlines()
        logger.debug("Read %d lines from %s", len(lines), args.input)

        translation = translate_lines(
            lines, escape_text=args.escape_text, max_depth=args.max_depth
        )
        if _profile.PROFILE_HOT_PATHS:
            _log_profile()

        if translation.has_errors:
            _report_errors(translation, SourceMap.from_lines(lines))
            return 1

        with open(args.output, "w", encoding="utf-8") as dest:
            dest.write(translation.xml)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error handling files: {e}", file=sys.stderr)
        return 1

    print(f"Translation succeeded. Output written to: {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
