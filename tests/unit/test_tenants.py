"""Tests for tenant service — code derivation, uniqueness and code override."""

import pytest

from dayflow_hrms.common.config import DayflowSettings
from dayflow_hrms.common.database import DatabaseManager
from dayflow_hrms.common.exceptions import ConflictError, InvalidTenantCodeError
from dayflow_hrms.tenants.models import TenantModel
from dayflow_hrms.tenants.service import (
    TenantService,
    derive_tenant_code,
    normalize_tenant_code,
)


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
def svc():
    return TenantService(make_settings())


class TestDeriveTenantCode:
    def test_first_two_letters(self):
        assert derive_tenant_code("Odoo India") == "OD"

    def test_uppercased(self):
        assert derive_tenant_code("acme") == "AC"

    def test_whitespace_ignored(self):
        assert derive_tenant_code("  O dyssey") == "OD"

    def test_too_short(self):
        with pytest.raises(InvalidTenantCodeError):
            derive_tenant_code("A")

    def test_blank(self):
        with pytest.raises(InvalidTenantCodeError):
            derive_tenant_code("   ")

    def test_custom_length(self):
        assert derive_tenant_code("Globex", length=3) == "GLO"


class TestNormalizeTenantCode:
    def test_valid(self):
        assert normalize_tenant_code(" oi ") == "OI"

    def test_wrong_length(self):
        with pytest.raises(InvalidTenantCodeError):
            normalize_tenant_code("OIX")

    def test_non_letters(self):
        with pytest.raises(InvalidTenantCodeError):
            normalize_tenant_code("O1")


class TestTenantCreate:
    async def test_create_tenant(self, db, svc):
        async with db.get_session() as session:
            tenant = await svc.create_tenant(session, "Acme Corp")
            assert tenant.name == "Acme Corp"
            assert tenant.code == "AC"
            assert tenant.id is not None

    async def test_name_is_trimmed(self, db, svc):
        async with db.get_session() as session:
            tenant = await svc.create_tenant(session, "  Globex  ")
            assert tenant.name == "Globex"

    async def test_colliding_code_is_conflict(self, db, svc):
        async with db.get_session() as session:
            await svc.create_tenant(session, "Acme Corp")
        with pytest.raises(ConflictError, match="similar name"):
            async with db.get_session() as session:
                await svc.create_tenant(session, "Acme Industries")

    async def test_conflict_leaves_no_partial_tenant(self, db, svc):
        async with db.get_session() as session:
            await svc.create_tenant(session, "Acme Corp")
        with pytest.raises(ConflictError):
            async with db.get_session() as session:
                await svc.create_tenant(session, "ACME again")
        async with db.get_session() as session:
            assert len(await svc.list_tenants(session)) == 1

    async def test_unique_constraint_translated(self, db):
        async with db.get_session() as session:
            session.add(TenantModel(name="Acme Corp", code="AC"))
        with pytest.raises(ConflictError, match="similar name"):
            async with db.get_session() as session:
                session.add(TenantModel(name="Acme Other", code="AC"))


class TestTenantLookup:
    async def test_get_by_id(self, db, svc):
        async with db.get_session() as session:
            tenant = await svc.create_tenant(session, "Acme Corp")
            found = await svc.get_by_id(session, tenant.id)
            assert found.id == tenant.id

    async def test_get_by_id_missing(self, db, svc):
        async with db.get_session() as session:
            assert await svc.get_by_id(session, "nonexistent") is None

    async def test_get_by_code_case_insensitive(self, db, svc):
        async with db.get_session() as session:
            tenant = await svc.create_tenant(session, "Acme Corp")
            found = await svc.get_by_code(session, "ac")
            assert found.id == tenant.id

    async def test_list_tenants(self, db, svc):
        async with db.get_session() as session:
            await svc.create_tenant(session, "Acme Corp")
            await svc.create_tenant(session, "Globex")
            tenants = await svc.list_tenants(session)
            assert {t.code for t in tenants} == {"AC", "GL"}


class TestOverrideCode:
    async def test_override(self, db, svc):
        async with db.get_session() as session:
            tenant = await svc.create_tenant(session, "Odoo India")
        async with db.get_session() as session:
            updated = await svc.override_code(session, tenant.id, "oi")
            assert updated.code == "OI"

    async def test_override_to_same_code(self, db, svc):
        async with db.get_session() as session:
            tenant = await svc.create_tenant(session, "Acme Corp")
            updated = await svc.override_code(session, tenant.id, "AC")
            assert updated.code == "AC"

    async def test_override_missing_tenant(self, db, svc):
        async with db.get_session() as session:
            assert await svc.override_code(session, "nonexistent", "ZZ") is None

    async def test_override_to_taken_code(self, db, svc):
        async with db.get_session() as session:
            await svc.create_tenant(session, "Acme Corp")
            globex = await svc.create_tenant(session, "Globex")
        with pytest.raises(ConflictError):
            async with db.get_session() as session:
                await svc.override_code(session, globex.id, "AC")

    async def test_override_invalid_code(self, db, svc):
        async with db.get_session() as session:
            tenant = await svc.create_tenant(session, "Acme Corp")
            with pytest.raises(InvalidTenantCodeError):
                await svc.override_code(session, tenant.id, "A1")
