"""Alembic environment. Migrations run on a sync driver against DATABASE_URL."""

import os
from logging.config import fileConfig

from sqlalchemy import Connection, create_engine, pool
from sqlmodel import SQLModel

from alembic import context
from src.academy.core.config import get_settings
from src.academy.models import Invitation, Profile, Tenant  # noqa: F401  (registers tables)

config = context.config

if config.config_file_name is not None and os.path.exists(config.config_file_name):
    # Keep the application's structlog handlers when run in-process
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = SQLModel.metadata

_SYNC_DRIVERS = {"+asyncpg": "+psycopg2", "+aiosqlite": ""}


def sync_database_url() -> str:
    url = get_settings().database_url
    for async_driver, sync_driver in _SYNC_DRIVERS.items():
        url = url.replace(async_driver, sync_driver)
    return url


def _configure(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        # SQLite cannot ALTER most constraints in place
        render_as_batch=connection.dialect.name == "sqlite",
    )


def run_offline() -> None:
    """Emit SQL to stdout instead of executing it (``alembic upgrade --sql``)."""
    context.configure(
        url=sync_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    engine = create_engine(sync_database_url(), poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            _configure(connection)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
