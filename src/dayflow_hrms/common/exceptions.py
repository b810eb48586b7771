"""DayFlow HRMS exception hierarchy."""


class DayflowError(Exception):
    """Base exception for all DayFlow errors."""

    def __init__(self, message: str = "", code: str = "DAYFLOW_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ConflictError(DayflowError):
    """Raised when a unique constraint (tenant code, login id, email) is violated."""

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message, code="CONFLICT")


class TransientStoreError(DayflowError):
    """Raised when the store times out or is unreachable. Callers may retry."""

    def __init__(self, message: str = "Store temporarily unavailable"):
        super().__init__(message, code="STORE_UNAVAILABLE")


class InvalidCredentialsError(DayflowError):
    """Raised for unknown accounts and wrong passwords alike."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class AccountDeactivatedError(DayflowError):
    """Raised when a deactivated account attempts to authenticate."""

    def __init__(
        self,
        message: str = "Account is disabled. Please contact your administrator.",
    ):
        super().__init__(message, code="ACCOUNT_DEACTIVATED")


class TokenInvalidError(DayflowError):
    """Raised for malformed, forged or expired tokens."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, code="TOKEN_INVALID")


class PasswordResetRequiredError(DayflowError):
    """Raised when an account must change its password before normal access."""

    def __init__(self, message: str = "Password change required before continuing"):
        super().__init__(message, code="PASSWORD_RESET_REQUIRED")


class LoginIdCollisionError(DayflowError):
    """Raised when a freshly generated login id is already taken."""

    def __init__(self, message: str = "Login ID collision detected. Please try again."):
        super().__init__(message, code="LOGIN_ID_COLLISION")


class SerialOverflowError(DayflowError):
    """Raised when a tenant's yearly serial no longer fits the login id format."""

    def __init__(self, message: str = "Serial number exceeds login id width"):
        super().__init__(message, code="SERIAL_OVERFLOW")


class InvalidTenantCodeError(DayflowError):
    """Raised when a tenant code cannot be derived or has the wrong shape."""

    def __init__(self, message: str = "Invalid tenant code"):
        super().__init__(message, code="INVALID_TENANT_CODE")


class TenantNotFoundError(DayflowError):
    def __init__(self, message: str = "Company not found"):
        super().__init__(message, code="NOT_FOUND")


class AccountNotFoundError(DayflowError):
    def __init__(self, message: str = "Account not found"):
        super().__init__(message, code="NOT_FOUND")
