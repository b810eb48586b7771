"""Pydantic schemas for auth and admin endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from dayflow_hrms.tenants.schemas import TenantSummary


class AdminSignupRequest(BaseModel):
    company_name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    phone: Optional[str] = Field(default=None, max_length=50)


class LoginRequest(BaseModel):
    login_id_or_email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(..., min_length=8, max_length=128)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class EmployeeCreate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    year_of_joining: Optional[int] = Field(default=None, ge=1000, le=9999)


class TokenPairResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class AccessTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AccountResponse(BaseModel):
    id: str
    tenant_id: str
    role: str
    login_id: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    first_name: str
    last_name: str
    year_of_joining: int
    must_reset_password: bool
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    account: AccountResponse
    tenant: TenantSummary
    tokens: TokenPairResponse


class EmployeeCreateResponse(BaseModel):
    """Includes the temporary password — only returned once at creation time."""
    employee: AccountResponse
    login_id: str
    temporary_password: str
    message: str = (
        "Share these credentials with the employee. "
        "They must change password on first login."
    )


class MessageResponse(BaseModel):
    success: bool = True
    message: str
