"""SQLAlchemy model for per-tenant, per-year serial counters."""

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from dayflow_hrms.common.models import Base, generate_uuid


class SerialCounterModel(Base):
    __tablename__ = "serial_counters"
    __table_args__ = (
        UniqueConstraint("tenant_id", "year", name="uq_serial_counter_tenant_year"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    tenant_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("tenants.id"), nullable=False, index=True
    )
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    current_serial: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
