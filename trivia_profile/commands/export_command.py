"""
`export` subcommand: write stored questions back out as JSON.
"""

import os

from ..schemas import ExportFormatEnum
from ..services.export_service import build_export, dumps_export
from .common import add_db_argument, open_existing_store


def add_parser(subparsers) -> None:
    parser = subparsers.add_parser(
        'export',
        help='Export questions from SQLite database to JSON',
        description='Export questions from SQLite database to JSON',
    )
    parser.add_argument('output', nargs='?', default=None, help='Output file path (default: stdout)')
    add_db_argument(parser)
    parser.add_argument(
        '--format',
        choices=[f.value for f in ExportFormatEnum],
        default=ExportFormatEnum.RAW.value,
        help='Output format: raw or gamedata',
    )
    parser.add_argument('--category', help='Filter by category name')
    parser.add_argument('--difficulty', help='Filter by difficulty: easy, medium, hard')
    parser.add_argument('--source', help='Filter by source label')
    parser.add_argument('--limit', type=int, help='Maximum number of questions to export')
    parser.set_defaults(handler=run)


def run(args) -> int:
    store = open_existing_store(args.db)
    if store is None:
        return 1

    try:
        questions = store.all_questions(
            category=args.category,
            difficulty=args.difficulty,
            source=args.source,
            limit=args.limit,
        )
        payload = build_export(questions, ExportFormatEnum(args.format), normalizer=store.normalizer)
    finally:
        store.close()

    if not questions:
        print("No questions match the specified filters.")
        return 0

    content = dumps_export(payload)

    if args.output:
        path = os.path.expanduser(args.output)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
            f.write("\n")
        print(f"Exported {len(questions)} questions to {path}")
    else:
        print(content)
    return 0
