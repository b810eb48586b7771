"""Shared Pydantic schemas for DayFlow HRMS."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    service: str = "dayflow-hrms"


class ErrorResponse(BaseModel):
    error: str
    code: str
    detail: str = ""
