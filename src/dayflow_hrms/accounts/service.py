"""Account service — signup, employee provisioning, login and password changes."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from dayflow_hrms.accounts.models import AccountModel
from dayflow_hrms.accounts.state import AccountState, Role
from dayflow_hrms.common.config import DayflowSettings
from dayflow_hrms.common.exceptions import (
    AccountDeactivatedError,
    AccountNotFoundError,
    ConflictError,
    InvalidCredentialsError,
    LoginIdCollisionError,
    TenantNotFoundError,
)
from dayflow_hrms.credentials.passwords import CredentialIssuer
from dayflow_hrms.loginid.generator import LoginIdGenerator
from dayflow_hrms.tenants.models import TenantModel
from dayflow_hrms.tenants.service import TenantService
from dayflow_hrms.tokens.service import TokenClaims, TokenPair, TokenService

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    account: AccountModel
    tenant: TenantModel
    tokens: TokenPair


@dataclass
class EmployeeCredentials:
    """A newly created employee and the temporary password, shown only once."""

    account: AccountModel
    temporary_password: str


def _normalize_email(email: str | None) -> str | None:
    if email is None:
        return None
    email = email.strip().lower()
    return email or None


class AccountService:
    """Account lifecycle operations."""

    def __init__(
        self,
        settings: DayflowSettings,
        tenants: TenantService,
        login_ids: LoginIdGenerator,
        credentials: CredentialIssuer,
        tokens: TokenService,
    ):
        self.settings = settings
        self.tenants = tenants
        self.login_ids = login_ids
        self.credentials = credentials
        self.tokens = tokens
        self._dummy_hash: str | None = None

    # ── Lookup ──

    async def get_by_id(
        self, session: AsyncSession, account_id: str
    ) -> AccountModel | None:
        return await session.get(AccountModel, account_id)

    async def get_by_login_id(
        self, session: AsyncSession, login_id: str
    ) -> AccountModel | None:
        result = await session.execute(
            select(AccountModel).where(AccountModel.login_id == login_id.strip().upper())
        )
        return result.scalar_one_or_none()

    async def get_by_email(
        self, session: AsyncSession, email: str
    ) -> AccountModel | None:
        result = await session.execute(
            select(AccountModel).where(AccountModel.email == _normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def find_by_identifier(
        self, session: AsyncSession, identifier: str
    ) -> AccountModel | None:
        """Resolve a login id (case-insensitive) or an email address."""
        if "@" in identifier:
            return await self.get_by_email(session, identifier)
        return await self.get_by_login_id(session, identifier)

    async def list_employees(
        self, session: AsyncSession, tenant_id: str
    ) -> list[AccountModel]:
        result = await session.execute(
            select(AccountModel)
            .where(
                and_(
                    AccountModel.tenant_id == tenant_id,
                    AccountModel.role == Role.EMPLOYEE.value,
                )
            )
            .order_by(AccountModel.created_at.desc())
        )
        return list(result.scalars().all())

    # ── Provisioning ──

    async def signup_admin(
        self,
        session: AsyncSession,
        company_name: str,
        email: str,
        password: str,
        phone: str | None = None,
    ) -> LoginResult:
        """Create a tenant and its first admin, then sign the admin in."""
        email = _normalize_email(email)
        if await self.get_by_email(session, email) is not None:
            raise ConflictError("Email already registered")

        tenant = await self.tenants.create_tenant(session, company_name)
        admin = AccountModel(
            tenant_id=tenant.id,
            role=Role.ADMIN.value,
            email=email,
            phone=phone,
            first_name="Admin",
            last_name="User",
            year_of_joining=datetime.now(timezone.utc).year,
            password_hash=self.credentials.hash_password(password),
        )
        admin.state = AccountState.initial(Role.ADMIN)
        session.add(admin)
        await session.flush()
        logger.info("Admin account %s created for tenant %s", admin.id, tenant.id)

        return LoginResult(account=admin, tenant=tenant, tokens=self._issue_tokens(admin))

    async def create_employee(
        self,
        session: AsyncSession,
        tenant_id: str,
        first_name: str,
        last_name: str,
        email: str | None = None,
        phone: str | None = None,
        year_of_joining: int | None = None,
    ) -> EmployeeCredentials:
        """Provision an employee with a generated login id and temporary password.

        The login id serial is drawn (and committed) before the account is
        inserted. A login id that is already taken surfaces as
        :class:`LoginIdCollisionError`; calling again draws a fresh serial.
        """
        tenant = await self.tenants.get_by_id(session, tenant_id)
        if tenant is None:
            raise TenantNotFoundError()

        email = _normalize_email(email)
        if email is not None and await self.get_by_email(session, email) is not None:
            raise ConflictError("Email already registered")

        temporary_password = self.credentials.issue_temporary_password()
        password_hash = self.credentials.hash_password(temporary_password)
        year = year_of_joining or datetime.now(timezone.utc).year

        login_id = await self.login_ids.generate(
            session, tenant.code, first_name, last_name, year, tenant.id
        )
        if await self.get_by_login_id(session, login_id) is not None:
            logger.error("Login id collision for tenant %s: %s", tenant.id, login_id)
            raise LoginIdCollisionError()

        employee = AccountModel(
            tenant_id=tenant.id,
            role=Role.EMPLOYEE.value,
            login_id=login_id,
            email=email,
            phone=phone,
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            year_of_joining=year,
            password_hash=password_hash,
        )
        employee.state = AccountState.initial(Role.EMPLOYEE)
        session.add(employee)
        await session.flush()
        logger.info("Employee %s created with login id %s", employee.id, login_id)

        return EmployeeCredentials(account=employee, temporary_password=temporary_password)

    # ── Authentication ──

    async def login(
        self, session: AsyncSession, identifier: str, password: str
    ) -> LoginResult:
        """
        Authenticate by login id or email and issue a token pair.

        Accounts in the forced-reset state still receive tokens; callers gate
        normal access on ``account.state``.

        Raises:
            InvalidCredentialsError: unknown account or wrong password
            AccountDeactivatedError: account is deactivated
        """
        account = await self.find_by_identifier(session, identifier)
        if account is None:
            # Spend the same hashing work as a real check.
            self.credentials.verify_password(self._get_dummy_hash(), password)
            logger.info("Login failed: invalid credentials")
            raise InvalidCredentialsError()

        try:
            account.state.ensure_active()
        except AccountDeactivatedError:
            logger.info("Login refused for deactivated account %s", account.id)
            raise

        if not self.credentials.verify_password(account.password_hash, password):
            logger.info("Login failed: invalid credentials")
            raise InvalidCredentialsError()

        if self.credentials.needs_rehash(account.password_hash):
            account.password_hash = self.credentials.hash_password(password)
            await session.flush()

        tenant = await self.tenants.get_by_id(session, account.tenant_id)
        if tenant is None:
            raise TenantNotFoundError()

        logger.info(
            "Login succeeded for account %s (must_reset_password=%s)",
            account.id, account.must_reset_password,
        )
        return LoginResult(account=account, tenant=tenant, tokens=self._issue_tokens(account))

    async def change_password(
        self,
        session: AsyncSession,
        account_id: str,
        current_password: str,
        new_password: str,
    ) -> AccountModel:
        """Replace the password and leave the forced-reset state.

        This is the only operation that clears ``must_reset_password``.
        """
        account = await self.get_by_id(session, account_id)
        if account is None:
            raise AccountNotFoundError()
        account.state.ensure_active()

        if not self.credentials.verify_password(account.password_hash, current_password):
            raise InvalidCredentialsError("Current password is incorrect")

        account.password_hash = self.credentials.hash_password(new_password)
        account.state = account.state.password_changed()
        await session.flush()
        logger.info("Password changed for account %s", account.id)
        return account

    def refresh(self, refresh_token: str) -> str:
        """Issue a new access token from a refresh token; no store access."""
        return self.tokens.refresh(refresh_token)

    async def require_cleared(
        self, session: AsyncSession, account_id: str
    ) -> AccountModel:
        """Load an account and require it to be active and past any forced reset."""
        account = await self.get_by_id(session, account_id)
        if account is None:
            raise AccountNotFoundError()
        account.state.ensure_cleared()
        return account

    # ── Administration ──

    async def set_active(
        self,
        session: AsyncSession,
        tenant_id: str,
        account_id: str,
        active: bool,
    ) -> AccountModel:
        """Activate or deactivate an employee of the given tenant."""
        account = await self.get_by_id(session, account_id)
        if (
            account is None
            or account.tenant_id != tenant_id
            or account.role != Role.EMPLOYEE.value
        ):
            raise AccountNotFoundError()

        state = account.state
        account.state = state.activated() if active else state.deactivated()
        await session.flush()
        logger.info(
            "Account %s %s", account.id, "activated" if active else "deactivated"
        )
        return account

    def _issue_tokens(self, account: AccountModel) -> TokenPair:
        return self.tokens.issue(
            TokenClaims(
                account_id=account.id,
                tenant_id=account.tenant_id,
                role=account.role,
            )
        )

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self.credentials.hash_password(
                self.credentials.issue_temporary_password()
            )
        return self._dummy_hash
