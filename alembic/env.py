"""Alembic environment for DayFlow HRMS.

The database URL comes from ``DAYFLOW_DB_URL`` (via DayflowSettings) unless
overridden with ``alembic -x db_url=...``. Migrations run over the same async
driver the application uses.
"""

import asyncio
import sys
from logging.config import fileConfig
from pathlib import Path

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

# Ensure src/ is on sys.path when running from a checkout
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from dayflow_hrms.common.config import DayflowSettings
from dayflow_hrms.common.models import Base

import dayflow_hrms.tenants.models  # noqa: F401
import dayflow_hrms.counters.models  # noqa: F401
import dayflow_hrms.accounts.models  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _db_url() -> str:
    override = context.get_x_argument(as_dictionary=True).get("db_url")
    return override or DayflowSettings().db_url


def _configure(**kwargs) -> None:
    url = kwargs.get("url") or str(kwargs["connection"].engine.url)
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        # SQLite cannot ALTER constraints in place.
        render_as_batch=url.startswith("sqlite"),
        **kwargs,
    )


def run_migrations_offline() -> None:
    _configure(url=_db_url(), literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()


def _run_sync(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = create_async_engine(_db_url(), poolclass=pool.NullPool)
    async with engine.connect() as connection:
        await connection.run_sync(_run_sync)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
