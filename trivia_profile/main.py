"""
TriviaProfile - trivia dataset profiler

A command-line tool that:
- Loads trivia questions from game data or raw JSON files
- Normalizes free-text categories onto a canonical taxonomy
- Stores questions in SQLite, deduplicated by a content fingerprint
- Reports category, source, difficulty, hint, length and answer statistics

Run with: trivia-profile <command> [options]
"""

import argparse
import sys
from typing import List, Optional

from .commands import (
    categories_command, export_command, import_command,
    report_command, stats_command,
)
from .exceptions import ProfileError

COMMANDS = [
    report_command,
    import_command,
    export_command,
    categories_command,
    stats_command,
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='trivia-profile',
        description='Profile and report on trivia question data files',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s report questions.json --section categories
  %(prog)s import data/*.json --dry-run
  %(prog)s export --format gamedata --category History out.json

Environment Variables:
  TRIVIA_DB  - Default SQLite database path (default: ~/trivia.db)
        """
    )
    subparsers = parser.add_subparsers(dest='command', metavar='<command>')
    subparsers.required = True

    for command in COMMANDS:
        command.add_parser(subparsers)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI interface."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        return args.handler(args)
    except ProfileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
