"""
Database configuration and session management.
The trivia store is a single SQLite file, opened once per command run.
"""

import os

from dotenv import load_dotenv
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

# Load environment variables from .env file
load_dotenv()

# Store path - defaults to ~/trivia.db if TRIVIA_DB not set
DEFAULT_DB_PATH = os.getenv("TRIVIA_DB", "~/trivia.db")

Base = declarative_base()


def expand_db_path(path: str = None) -> str:
    """Expand ~ in a store path, falling back to the configured default."""
    return os.path.expanduser(path or DEFAULT_DB_PATH)


def database_url(path: str) -> str:
    """Build the SQLAlchemy URL for a SQLite store file."""
    return f"sqlite:///{path}"


def _enable_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE rules unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(url: str) -> Engine:
    """Create a SQLite engine with foreign key enforcement on every connection."""
    engine = create_engine(url)
    event.listen(engine, "connect", _enable_foreign_keys)
    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Initialize database tables."""
    from . import models  # noqa: F401  Import models to register them

    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))

    Base.metadata.create_all(bind=engine)
