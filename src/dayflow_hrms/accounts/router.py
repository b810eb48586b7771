"""Auth API router — signup, login, refresh, password change."""

from fastapi import APIRouter, Depends

from dayflow_hrms.accounts.schemas import (
    AccessTokenResponse,
    AccountResponse,
    AdminSignupRequest,
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    MessageResponse,
    RefreshRequest,
    TokenPairResponse,
)
from dayflow_hrms.accounts.service import LoginResult
from dayflow_hrms.common.exceptions import AccountNotFoundError
from dayflow_hrms.common.security import require_access_claims
from dayflow_hrms.tenants.schemas import TenantSummary
from dayflow_hrms.tokens.service import TokenClaims

router = APIRouter(prefix="/auth", tags=["auth"])


def _get_service():
    from dayflow_hrms.deps import get_account_service
    return get_account_service()


def _get_db():
    from dayflow_hrms.deps import get_db
    return get_db()


def _auth_response(result: LoginResult) -> AuthResponse:
    return AuthResponse(
        account=AccountResponse.model_validate(result.account),
        tenant=TenantSummary.model_validate(result.tenant),
        tokens=TokenPairResponse(
            access_token=result.tokens.access_token,
            refresh_token=result.tokens.refresh_token,
        ),
    )


@router.post("/admin/signup", response_model=AuthResponse, status_code=201)
async def admin_signup(body: AdminSignupRequest):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        result = await svc.signup_admin(
            session,
            company_name=body.company_name,
            email=body.email,
            password=body.password,
            phone=body.phone,
        )
        return _auth_response(result)


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        result = await svc.login(session, body.login_id_or_email, body.password)
        return _auth_response(result)


@router.post("/refresh", response_model=AccessTokenResponse)
async def refresh(body: RefreshRequest):
    svc = _get_service()
    return AccessTokenResponse(access_token=svc.refresh(body.refresh_token))


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    body: ChangePasswordRequest,
    claims: TokenClaims = Depends(require_access_claims),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        await svc.change_password(
            session,
            claims.account_id,
            current_password=body.current_password,
            new_password=body.new_password,
        )
    return MessageResponse(message="Password changed successfully")


@router.get("/me", response_model=AccountResponse)
async def me(claims: TokenClaims = Depends(require_access_claims)):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        account = await svc.get_by_id(session, claims.account_id)
        if account is None:
            raise AccountNotFoundError()
        return AccountResponse.model_validate(account)
