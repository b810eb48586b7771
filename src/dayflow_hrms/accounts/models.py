"""SQLAlchemy model for admin and employee accounts."""

from sqlalchemy import Boolean, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from dayflow_hrms.accounts.state import AccountState, PasswordState, Role
from dayflow_hrms.common.models import Base, TimestampMixin, generate_uuid


class AccountModel(Base, TimestampMixin):
    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    tenant_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("tenants.id"), nullable=False, index=True
    )
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    # Admins have no login id; employees always do. Stored uppercase.
    login_id: Mapped[str | None] = mapped_column(
        String(32), unique=True, nullable=True, index=True
    )
    # Stored lowercase.
    email: Mapped[str | None] = mapped_column(
        String(255), unique=True, nullable=True, index=True
    )
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    year_of_joining: Mapped[int] = mapped_column(Integer, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    must_reset_password: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    @property
    def state(self) -> AccountState:
        return AccountState(
            password_state=(
                PasswordState.MUST_RESET_PASSWORD
                if self.must_reset_password
                else PasswordState.NORMAL
            ),
            active=self.is_active,
        )

    @state.setter
    def state(self, value: AccountState) -> None:
        self.must_reset_password = value.must_reset_password
        self.is_active = value.active

    @property
    def role_enum(self) -> Role:
        return Role(self.role)
