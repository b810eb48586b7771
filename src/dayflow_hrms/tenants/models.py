"""SQLAlchemy model for tenants (companies)."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from dayflow_hrms.common.models import Base, TimestampMixin, generate_uuid


class TenantModel(Base, TimestampMixin):
    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    code: Mapped[str] = mapped_column(String(16), unique=True, nullable=False, index=True)
