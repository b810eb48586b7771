"""Tenant service — code derivation, creation, lookup and code override."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dayflow_hrms.common.config import DayflowSettings
from dayflow_hrms.common.exceptions import ConflictError, InvalidTenantCodeError
from dayflow_hrms.tenants.models import TenantModel

logger = logging.getLogger(__name__)


def derive_tenant_code(display_name: str, length: int = 2) -> str:
    """First ``length`` non-blank characters of the display name, uppercased."""
    code = "".join(display_name.split()).upper()[:length]
    if len(code) != length:
        raise InvalidTenantCodeError(
            f"Company name must contain at least {length} non-blank characters"
        )
    return code


def normalize_tenant_code(code: str, length: int = 2) -> str:
    """Validate an explicitly supplied tenant code."""
    normalized = code.strip().upper()
    if len(normalized) != length or not normalized.isalpha():
        raise InvalidTenantCodeError(
            f"Company code must be exactly {length} letters, got {code!r}"
        )
    return normalized


class TenantService:
    """Tenant management operations."""

    def __init__(self, settings: DayflowSettings):
        self.settings = settings

    async def create_tenant(self, session: AsyncSession, name: str) -> TenantModel:
        """Create a tenant whose code is derived from its display name.

        Tenant codes are globally unique; a second company whose name starts
        with the same letters is rejected with :class:`ConflictError`.
        """
        code = derive_tenant_code(name, self.settings.tenant_code_length)
        if await self.get_by_code(session, code) is not None:
            raise ConflictError(
                "Company with similar name already exists. "
                "Please use a more unique company name."
            )
        tenant = TenantModel(name=name.strip(), code=code)
        session.add(tenant)
        await session.flush()
        logger.info("Tenant created: %s (%s)", tenant.id, tenant.code)
        return tenant

    async def get_by_id(
        self, session: AsyncSession, tenant_id: str
    ) -> TenantModel | None:
        return await session.get(TenantModel, tenant_id)

    async def get_by_code(
        self, session: AsyncSession, code: str
    ) -> TenantModel | None:
        result = await session.execute(
            select(TenantModel).where(TenantModel.code == code.upper())
        )
        return result.scalar_one_or_none()

    async def list_tenants(self, session: AsyncSession) -> list[TenantModel]:
        result = await session.execute(select(TenantModel).order_by(TenantModel.created_at))
        return list(result.scalars().all())

    async def override_code(
        self, session: AsyncSession, tenant_id: str, new_code: str
    ) -> TenantModel | None:
        """Administrative override of a tenant's code.

        Login ids already issued keep the previous prefix; only identifiers
        generated afterwards pick up the new code.
        """
        code = normalize_tenant_code(new_code, self.settings.tenant_code_length)
        tenant = await self.get_by_id(session, tenant_id)
        if tenant is None:
            return None
        if tenant.code == code:
            return tenant
        holder = await self.get_by_code(session, code)
        if holder is not None:
            raise ConflictError(f"Company code {code} is already in use")
        old_code = tenant.code
        tenant.code = code
        await session.flush()
        logger.info("Tenant %s code changed %s -> %s", tenant.id, old_code, code)
        return tenant
