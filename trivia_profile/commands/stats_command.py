"""
`stats` subcommand: quick summary statistics from the store.
"""

import os

from ..services.report_service import format_file_size
from .common import add_db_argument, open_existing_store, rule


def add_parser(subparsers) -> None:
    parser = subparsers.add_parser(
        'stats',
        help='Quick summary statistics from the database',
        description='Quick summary statistics from the database',
    )
    add_db_argument(parser)
    parser.set_defaults(handler=run)


def run(args) -> int:
    store = open_existing_store(args.db)
    if store is None:
        return 1

    try:
        s = store.stats()
    finally:
        store.close()

    print(rule())
    print("  Trivia Database Stats")
    print(rule())
    print(f"  Questions  : {s.total_questions}")
    print(f"  Categories : {s.total_categories}")
    print(f"  Sources    : {s.total_sources}")
    print(
        f"  Difficulty : easy={s.easy_count} medium={s.medium_count} "
        f"hard={s.hard_count} none={s.no_difficulty_count}"
    )
    print(f"  DB size    : {format_file_size(os.path.getsize(store.path))}")
    return 0
