"""Pydantic schemas for tenant payloads."""

from pydantic import BaseModel


class TenantSummary(BaseModel):
    id: str
    name: str
    code: str

    model_config = {"from_attributes": True}
