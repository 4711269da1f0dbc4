"""
`import` subcommand: load JSON trivia files into the SQLite store.
"""

from ..database import expand_db_path
from ..services.import_service import dry_run_files, import_files
from ..services.store_service import TriviaStore
from .common import add_db_argument


def add_parser(subparsers) -> None:
    parser = subparsers.add_parser(
        'import',
        help='Import JSON trivia files into SQLite database',
        description='Import JSON trivia files into SQLite database',
    )
    parser.add_argument('files', nargs='+', help='Path(s) to JSON trivia data file(s)')
    add_db_argument(parser)
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Show what would be imported without writing',
    )
    parser.set_defaults(handler=run)


def _warn_skipped(result) -> None:
    print(f"  WARNING: {result.error}, skipping")


def run(args) -> int:
    db_path = expand_db_path(args.db)

    if args.dry_run:
        summary = dry_run_files(args.files)
        for f in summary.files:
            if f.skipped:
                _warn_skipped(f)
                continue
            print(f"  {f.name}: {f.question_count} questions ({f.format_label}), {f.duplicates} cross-file dupes")

        print("\nDry run summary:")
        print(f"  Total questions: {summary.total_questions}")
        print(f"  Unique (by hash): {summary.unique_fingerprints}")
        print(f"  Duplicates: {summary.total_duplicates}")
        print(f"  Categories: {len(summary.categories)}")
        if summary.skipped_files:
            print(f"  Skipped files: {len(summary.skipped_files)}")
        print(f"  Would write to: {db_path}")
        return 0

    store = TriviaStore.open(db_path)
    try:
        summary = import_files(store, args.files)
    finally:
        store.close()

    for f in summary.files:
        if f.skipped:
            _warn_skipped(f)
            continue
        print(f"  {f.name}: {f.imported} imported, {f.duplicates} duplicates skipped")

    print(
        f"\nTotal: {summary.total_imported} imported, "
        f"{summary.total_duplicates} duplicates skipped, "
        f"{len(summary.categories)} categories"
    )
    if summary.skipped_files:
        print(f"Skipped {len(summary.skipped_files)} file(s)")
    return 0
