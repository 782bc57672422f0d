#!/usr/bin/env python3
"""
Detect the column layout of a web-server access log and parse it.

Detects the format from the first non-blank line using the configured
candidate patterns, then parses every line with the bound extractor.

Usage:
    # Detect with the built-in nginx/Apache patterns
    python scripts/detect_log_format.py --input /var/log/nginx/access.log

    # Use custom patterns from a YAML settings file
    python scripts/detect_log_format.py --input access.log --config weblog-parser.yaml

    # Print the first 5 parsed lines as JSON
    python scripts/detect_log_format.py --input access.log --show 5 --json

    # List the built-in patterns
    python scripts/detect_log_format.py --list-patterns
"""

import argparse
import gzip
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from weblog_parser import (
    ConfigurationError,
    LogSession,
    NoMatchError,
    ParserSettings,
    describe_patterns,
    get_settings,
)
from weblog_parser.utils import setup_logging

logger = logging.getLogger(__name__)


def open_log(path: Path):
    """Open a plain or gzip-compressed log file for reading text."""
    if path.suffix.lower() == ".gz":
        return gzip.open(path, "rt", encoding="utf-8", errors="replace")
    return open(path, encoding="utf-8", errors="replace")


def run(input_path: Path, settings: ParserSettings, show: int, as_json: bool) -> int:
    """Detect and parse one log file. Returns process exit code."""
    session = LogSession.from_settings(settings)
    samples = []

    with open_log(input_path) as f:
        try:
            for fields in session.parse_lines(f):
                if len(samples) < show:
                    samples.append(fields)
        except NoMatchError as e:
            print(f"❌ No pattern matches {input_path}: {e}", file=sys.stderr)
            return 1

    if not session.is_bound:
        print(f"❌ {input_path} has no lines to detect from", file=sys.stderr)
        return 1

    if as_json:
        print(
            json.dumps(
                {
                    "input": str(input_path),
                    "pattern": session.info,
                    "stats": session.stats.to_dict(),
                    "samples": samples,
                },
                indent=2,
            )
        )
        return 0

    print()
    print("🔍 Access Log Format Detection")
    print("=" * 50)
    print(f"  Input:        {input_path}")
    print(f"  Pattern:      {session.info}")
    print(f"  Lines parsed: {session.stats.lines_parsed:,}")
    print(f"  Lines failed: {session.stats.lines_failed:,}")
    for number, fields in enumerate(samples, start=1):
        print(f"  #{number}: {fields}")
    print()
    return 0


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Detect the format of an access log and parse it",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Detect with built-in patterns
  python scripts/detect_log_format.py --input access.log

  # Custom patterns from YAML
  python scripts/detect_log_format.py --input access.log --config weblog-parser.yaml

  # JSON output with 3 sample lines
  python scripts/detect_log_format.py --input access.log --show 3 --json
        """,
    )

    parser.add_argument("--input", "-i", type=Path, help="Access log file (.log or .gz)")
    parser.add_argument("--config", "-c", type=str, help="YAML settings file")
    parser.add_argument(
        "--show",
        type=int,
        default=0,
        help="Number of parsed lines to print (default: 0)",
    )
    parser.add_argument(
        "--validate-lines",
        action="store_true",
        help="Validate every line, not only the detection sample",
    )
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List the built-in candidate patterns and exit",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    if args.list_patterns:
        for info in describe_patterns():
            print(info)
        return 0

    if args.input is None:
        parser.error("--input is required")

    try:
        settings = get_settings(args.config)
    except ConfigurationError as e:
        print(f"❌ Invalid configuration: {e}", file=sys.stderr)
        return 2

    setup_logging(level=logging.DEBUG if args.verbose else settings.log_level)
    logger.debug(f"Parser settings: {settings.to_dict()}")

    if args.validate_lines:
        settings = replace(settings, validate_lines=True)

    errors = settings.validate()
    if errors:
        for error in errors:
            print(f"❌ {error}", file=sys.stderr)
        return 2

    if not args.input.is_file():
        print(f"❌ Input file not found: {args.input}", file=sys.stderr)
        return 1

    try:
        return run(args.input, settings, args.show, args.json)
    except ConfigurationError as e:
        print(f"❌ Invalid pattern: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
