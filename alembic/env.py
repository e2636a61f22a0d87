"""
Alembic Migration Environment
===============================

The target database always comes from notenexus.config (DATABASE_URL), so
migrations and the running service can never point at different databases.
SQLite needs batch mode for ALTER TABLE; it is switched on for that dialect
in both online and offline runs.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

import notenexus.models  # noqa: F401  (users, classes, saved_classes, payments)
from notenexus.config import settings
from notenexus.database import Base

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=Base.metadata,
        compare_type=True,
        render_as_batch=settings.is_sqlite,
        **kwargs,
    )


def run_offline() -> None:
    """Render the migration SQL for DATABASE_URL without connecting."""
    _configure(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_online() -> None:
    # One short-lived connection; the service's pool settings do not apply here
    engine = create_async_engine(settings.database_url, poolclass=NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    asyncio.run(run_online())
