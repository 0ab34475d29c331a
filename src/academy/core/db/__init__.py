"""Database utilities - engine, session, migrations."""

from src.academy.core.db.engine import dispose_engine, get_engine
from src.academy.core.db.migrations import run_migrations_sync
from src.academy.core.db.session import create_session_factory, get_session

__all__ = [
    # Engine
    "dispose_engine",
    "get_engine",
    # Session
    "create_session_factory",
    "get_session",
    # Migrations
    "run_migrations_sync",
]
