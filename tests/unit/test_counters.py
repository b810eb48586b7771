"""Tests for the serial counter store — atomic per-(tenant, year) increments."""

import asyncio

import pytest

from dayflow_hrms.common.config import DayflowSettings
from dayflow_hrms.common.database import DatabaseManager
from dayflow_hrms.counters.service import SerialCounterStore
from dayflow_hrms.tenants.service import TenantService


def make_settings(**overrides) -> DayflowSettings:
    defaults = {"db_url": "sqlite+aiosqlite://"}
    defaults.update(overrides)
    return DayflowSettings(**defaults)


@pytest.fixture
async def db():
    manager = DatabaseManager(make_settings())
    await manager.init()
    await manager.create_all()
    yield manager
    await manager.close()


@pytest.fixture
def store():
    return SerialCounterStore(make_settings())


async def _make_tenant(db, name="Acme Corp"):
    async with db.get_session() as session:
        tenant = await TenantService(make_settings()).create_tenant(session, name)
    return tenant.id


class TestIncrement:
    async def test_first_value_is_one(self, db, store):
        tenant_id = await _make_tenant(db)
        async with db.get_session() as session:
            assert await store.increment(session, tenant_id, 2024) == 1

    async def test_sequential_values(self, db, store):
        tenant_id = await _make_tenant(db)
        values = []
        for _ in range(5):
            async with db.get_session() as session:
                values.append(await store.increment(session, tenant_id, 2024))
        assert values == [1, 2, 3, 4, 5]

    async def test_years_are_independent(self, db, store):
        tenant_id = await _make_tenant(db)
        async with db.get_session() as session:
            await store.increment(session, tenant_id, 2024)
            await store.increment(session, tenant_id, 2024)
            assert await store.increment(session, tenant_id, 2025) == 1

    async def test_tenants_are_independent(self, db, store):
        acme = await _make_tenant(db, "Acme Corp")
        globex = await _make_tenant(db, "Globex")
        async with db.get_session() as session:
            await store.increment(session, acme, 2024)
            await store.increment(session, acme, 2024)
            assert await store.increment(session, globex, 2024) == 1

    async def test_increment_survives_caller_failure(self, db, store):
        tenant_id = await _make_tenant(db)
        with pytest.raises(RuntimeError):
            async with db.get_session() as session:
                await store.increment(session, tenant_id, 2024)
                raise RuntimeError("account insert failed")
        async with db.get_session() as session:
            assert await store.current(session, tenant_id, 2024) == 1
            assert await store.increment(session, tenant_id, 2024) == 2


class TestCurrent:
    async def test_missing_key_is_zero(self, db, store):
        async with db.get_session() as session:
            assert await store.current(session, "no-tenant", 2024) == 0

    async def test_reads_last_value(self, db, store):
        tenant_id = await _make_tenant(db)
        async with db.get_session() as session:
            await store.increment(session, tenant_id, 2024)
            await store.increment(session, tenant_id, 2024)
        async with db.get_session() as session:
            assert await store.current(session, tenant_id, 2024) == 2


class TestConcurrency:
    async def test_concurrent_increments_are_unique_and_gapless(self, tmp_path):
        settings = make_settings(db_url=f"sqlite+aiosqlite:///{tmp_path / 'counters.db'}")
        manager = DatabaseManager(settings)
        await manager.init()
        await manager.create_all()
        store = SerialCounterStore(settings)
        try:
            async with manager.get_session() as session:
                tenant = await TenantService(settings).create_tenant(session, "Acme Corp")

            async def draw():
                async with manager.get_session() as session:
                    return await store.increment(session, tenant.id, 2024)

            n = 25
            values = await asyncio.gather(*(draw() for _ in range(n)))
            assert sorted(values) == list(range(1, n + 1))
        finally:
            await manager.close()
