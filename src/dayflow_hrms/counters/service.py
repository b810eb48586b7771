"""Serial counter store — durable, atomic per-(tenant, year) counters."""

import asyncio
import logging

from sqlalchemy import and_, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from dayflow_hrms.common.config import DayflowSettings
from dayflow_hrms.common.exceptions import TransientStoreError
from dayflow_hrms.common.models import generate_uuid
from dayflow_hrms.counters.models import SerialCounterModel

logger = logging.getLogger(__name__)

# Dialects with a native INSERT ... ON CONFLICT DO UPDATE ... RETURNING.
_UPSERT_INSERTS = {
    "sqlite": sqlite_insert,
    "postgresql": pg_insert,
}


class SerialCounterStore:
    """Per-tenant, per-year monotonic counters.

    ``increment`` is a single upsert statement executed by the database, so
    concurrent callers for the same key always receive distinct, gapless
    values. Dialects without an atomic upsert are rejected.
    """

    def __init__(self, settings: DayflowSettings):
        self.settings = settings

    async def increment(
        self, session: AsyncSession, tenant_id: str, year: int
    ) -> int:
        """Atomically increment and return the counter for ``(tenant_id, year)``.

        A missing row is created at zero before the increment, so the first
        value returned is 1. The session is committed before returning:
        a drawn serial is final even if the caller's later work fails.
        """
        dialect = session.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise RuntimeError(f"No atomic counter increment for dialect {dialect!r}")

        table = SerialCounterModel.__table__
        stmt = (
            insert(table)
            .values(id=generate_uuid(), tenant_id=tenant_id, year=year, current_serial=1)
            .on_conflict_do_update(
                index_elements=[table.c.tenant_id, table.c.year],
                set_={"current_serial": table.c.current_serial + 1},
            )
            .returning(table.c.current_serial)
        )

        try:
            result = await asyncio.wait_for(
                session.execute(stmt), timeout=self.settings.store_timeout
            )
            value = result.scalar_one()
            await asyncio.wait_for(session.commit(), timeout=self.settings.store_timeout)
        except asyncio.TimeoutError as exc:
            logger.warning(
                "Serial counter increment timed out for tenant %s year %s",
                tenant_id, year,
            )
            raise TransientStoreError("Serial counter store timed out") from exc
        return value

    async def current(
        self, session: AsyncSession, tenant_id: str, year: int
    ) -> int:
        """Return the last value handed out for the key, 0 if none."""
        result = await session.execute(
            select(SerialCounterModel.current_serial).where(
                and_(
                    SerialCounterModel.tenant_id == tenant_id,
                    SerialCounterModel.year == year,
                )
            )
        )
        return result.scalar_one_or_none() or 0
