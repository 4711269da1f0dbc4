"""
Helpers shared by the CLI subcommands.
"""

import os
from typing import Optional

from ..database import DEFAULT_DB_PATH, expand_db_path
from ..services.store_service import TriviaStore

RULE = "─"


def add_db_argument(parser) -> None:
    parser.add_argument(
        '--db',
        default=None,
        help=f'Path to SQLite database (default: {DEFAULT_DB_PATH}, or $TRIVIA_DB)',
    )


def open_existing_store(db_arg: Optional[str]) -> Optional[TriviaStore]:
    """Open the store for a read-only command, or print guidance and return None."""
    db_path = expand_db_path(db_arg)
    if not os.path.exists(db_path):
        print(f"Database not found at {db_path}. Run 'trivia-profile import' first.")
        return None
    return TriviaStore.open(db_path)


def rule(width: int = 50) -> str:
    return RULE * width
