"""Reusable migration runner."""

from alembic.config import Config

from alembic import command


def run_migrations_sync(revision: str = "head") -> None:
    """Run Alembic migrations synchronously up to ``revision``."""
    alembic_cfg = Config("alembic.ini")
    command.upgrade(alembic_cfg, revision)
