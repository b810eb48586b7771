"""Account roles and the password/activation state machine.

Two orthogonal dimensions:

- password state: ``NORMAL`` or ``MUST_RESET_PASSWORD``. Employees created
  by an admin start in ``MUST_RESET_PASSWORD``; self-service admins start in
  ``NORMAL``. The only transition out of ``MUST_RESET_PASSWORD`` is a
  successful password change.
- activation: active or deactivated. A deactivated account cannot
  authenticate, whatever its password state.
"""

from dataclasses import dataclass, replace
from enum import Enum

from dayflow_hrms.common.exceptions import (
    AccountDeactivatedError,
    PasswordResetRequiredError,
)


class Role(str, Enum):
    ADMIN = "admin"
    EMPLOYEE = "employee"


class PasswordState(str, Enum):
    NORMAL = "normal"
    MUST_RESET_PASSWORD = "must_reset_password"


@dataclass(frozen=True)
class AccountState:
    password_state: PasswordState
    active: bool = True

    @classmethod
    def initial(cls, role: Role) -> "AccountState":
        if role is Role.EMPLOYEE:
            return cls(PasswordState.MUST_RESET_PASSWORD)
        return cls(PasswordState.NORMAL)

    @property
    def must_reset_password(self) -> bool:
        return self.password_state is PasswordState.MUST_RESET_PASSWORD

    def ensure_active(self) -> None:
        if not self.active:
            raise AccountDeactivatedError()

    def ensure_cleared(self) -> None:
        """Gate for normal application access."""
        self.ensure_active()
        if self.must_reset_password:
            raise PasswordResetRequiredError()

    def password_changed(self) -> "AccountState":
        return replace(self, password_state=PasswordState.NORMAL)

    def deactivated(self) -> "AccountState":
        return replace(self, active=False)

    def activated(self) -> "AccountState":
        return replace(self, active=True)
