"""
Command line entry point.

Diffs two deck list files and prints the changelog:

    deckdelta old_deck.txt new_deck.txt --format reddit
"""

import argparse
import logging
import sys
from pathlib import Path

from deckdelta.config import settings
from deckdelta.parsers import parse
from deckdelta.services.changelog import FORMATTERS, render
from deckdelta.services.differ import compute_diff

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Diff two deck lists")
    parser.add_argument("before", type=Path, help="Path to the earlier deck list")
    parser.add_argument("after", type=Path, help="Path to the later deck list")
    parser.add_argument(
        "--format",
        choices=sorted(FORMATTERS),
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level (default: %(default)s)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit status."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        before_text = args.before.read_text(encoding="utf-8")
        after_text = args.after.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Could not read deck list: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 2

    diff = compute_diff(parse(before_text), parse(after_text))
    print(render(diff, args.format))
    return 0


if __name__ == "__main__":
    sys.exit(main())
