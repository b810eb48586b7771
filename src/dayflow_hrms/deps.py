"""Dependency injection singletons for DayFlow HRMS."""

from dayflow_hrms.accounts.service import AccountService
from dayflow_hrms.common.config import get_settings
from dayflow_hrms.common.database import DatabaseManager
from dayflow_hrms.counters.service import SerialCounterStore
from dayflow_hrms.credentials.passwords import CredentialIssuer
from dayflow_hrms.loginid.generator import LoginIdGenerator
from dayflow_hrms.tenants.service import TenantService
from dayflow_hrms.tokens.service import TokenService

_db: DatabaseManager | None = None
_tenants: TenantService | None = None
_counters: SerialCounterStore | None = None
_login_ids: LoginIdGenerator | None = None
_credentials: CredentialIssuer | None = None
_tokens: TokenService | None = None
_accounts: AccountService | None = None


def get_db() -> DatabaseManager:
    global _db
    if _db is None:
        _db = DatabaseManager(get_settings())
    return _db


def get_tenant_service() -> TenantService:
    global _tenants
    if _tenants is None:
        _tenants = TenantService(get_settings())
    return _tenants


def get_counter_store() -> SerialCounterStore:
    global _counters
    if _counters is None:
        _counters = SerialCounterStore(get_settings())
    return _counters


def get_login_id_generator() -> LoginIdGenerator:
    global _login_ids
    if _login_ids is None:
        _login_ids = LoginIdGenerator(get_settings(), get_counter_store())
    return _login_ids


def get_credential_issuer() -> CredentialIssuer:
    global _credentials
    if _credentials is None:
        _credentials = CredentialIssuer(get_settings())
    return _credentials


def get_token_service() -> TokenService:
    global _tokens
    if _tokens is None:
        _tokens = TokenService(get_settings())
    return _tokens


def get_account_service() -> AccountService:
    global _accounts
    if _accounts is None:
        _accounts = AccountService(
            get_settings(),
            tenants=get_tenant_service(),
            login_ids=get_login_id_generator(),
            credentials=get_credential_issuer(),
            tokens=get_token_service(),
        )
    return _accounts


def reset_singletons() -> None:
    """Reset all singletons (for testing)."""
    global _db, _tenants, _counters, _login_ids, _credentials, _tokens, _accounts
    _db = None
    _tenants = None
    _counters = None
    _login_ids = None
    _credentials = None
    _tokens = None
    _accounts = None
