"""Admin API router — employee provisioning and activation."""

from fastapi import APIRouter, Depends

from dayflow_hrms.accounts.schemas import (
    AccountResponse,
    EmployeeCreate,
    EmployeeCreateResponse,
)
from dayflow_hrms.accounts.state import Role
from dayflow_hrms.common.security import require_cleared_account
from dayflow_hrms.tokens.service import TokenClaims

router = APIRouter(prefix="/admin", tags=["admin"])

require_admin = require_cleared_account(Role.ADMIN)


def _get_service():
    from dayflow_hrms.deps import get_account_service
    return get_account_service()


def _get_db():
    from dayflow_hrms.deps import get_db
    return get_db()


@router.post("/employees", response_model=EmployeeCreateResponse, status_code=201)
async def create_employee(
    body: EmployeeCreate, claims: TokenClaims = Depends(require_admin)
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        created = await svc.create_employee(
            session,
            claims.tenant_id,
            first_name=body.first_name,
            last_name=body.last_name,
            email=body.email,
            phone=body.phone,
            year_of_joining=body.year_of_joining,
        )
        return EmployeeCreateResponse(
            employee=AccountResponse.model_validate(created.account),
            login_id=created.account.login_id,
            temporary_password=created.temporary_password,
        )


@router.get("/employees", response_model=list[AccountResponse])
async def list_employees(claims: TokenClaims = Depends(require_admin)):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        employees = await svc.list_employees(session, claims.tenant_id)
        return [AccountResponse.model_validate(e) for e in employees]


@router.post("/employees/{account_id}/deactivate", response_model=AccountResponse)
async def deactivate_employee(
    account_id: str, claims: TokenClaims = Depends(require_admin)
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        account = await svc.set_active(session, claims.tenant_id, account_id, False)
        return AccountResponse.model_validate(account)


@router.post("/employees/{account_id}/activate", response_model=AccountResponse)
async def activate_employee(
    account_id: str, claims: TokenClaims = Depends(require_admin)
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        account = await svc.set_active(session, claims.tenant_id, account_id, True)
        return AccountResponse.model_validate(account)
