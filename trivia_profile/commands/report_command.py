"""
`report` subcommand: profile trivia data from JSON files or from the store.
"""

import os
from typing import List, Optional, Tuple

from ..schemas import FileDetail, ReportData, ReportSection
from ..services.loader_service import load_file
from ..services.render_service import render_json, render_text
from ..services.report_service import format_file_size, generate_report
from .common import add_db_argument, open_existing_store


def add_parser(subparsers) -> None:
    parser = subparsers.add_parser(
        'report',
        help='Profile and report on trivia question data',
        description='Profile and report on trivia question data. '
                    'If no files are given, reads from the database.',
    )
    parser.add_argument('files', nargs='*', help='Path(s) to JSON trivia data file(s)')
    add_db_argument(parser)
    parser.add_argument('--json', action='store_true', help='Output as JSON')
    parser.add_argument(
        '--section',
        choices=[s.value for s in ReportSection],
        default=None,
        help='Show only a specific section',
    )
    parser.set_defaults(handler=run)


def report_from_files(paths: List[str]) -> ReportData:
    """Load every file and aggregate them into one report. Missing or malformed files abort."""
    questions = []
    file_details = []
    total_size = 0
    latest_generated = None

    for raw_path in paths:
        path = os.path.expanduser(raw_path)
        loaded = load_file(path)

        size = os.path.getsize(path)
        total_size += size
        questions.extend(loaded.questions)
        file_details.append(FileDetail(
            name=os.path.basename(path),
            question_count=len(loaded.questions),
            file_size=format_file_size(size),
            format=loaded.format_label,
        ))

        if loaded.generated and (latest_generated is None or loaded.generated > latest_generated):
            latest_generated = loaded.generated

    return generate_report(questions, file_details, total_size, latest_generated)


def report_from_store(db_arg: Optional[str]) -> Tuple[int, Optional[ReportData]]:
    """
    Aggregate everything in the store.

    Returns (exit_code, report); report is None when the store is missing
    (exit 1) or empty (exit 0).
    """
    store = open_existing_store(db_arg)
    if store is None:
        return 1, None

    try:
        questions = store.all_questions()
        db_path = store.path
    finally:
        store.close()

    if not questions:
        print("Database is empty. Run 'trivia-profile import' to load data.")
        return 0, None

    size = os.path.getsize(db_path)
    details = [FileDetail(
        name=os.path.basename(db_path),
        question_count=len(questions),
        file_size=format_file_size(size),
        format="SQLite",
    )]
    return 0, generate_report(questions, details, size)


def run(args) -> int:
    if args.files:
        report = report_from_files(args.files)
    else:
        exit_code, report = report_from_store(args.db)
        if report is None:
            return exit_code

    if args.json:
        print(render_json(report, args.section))
    else:
        print(render_text(report, args.section))
    return 0
