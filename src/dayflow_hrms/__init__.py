"""DayFlow HRMS: tenant-scoped login ids, credentials and session tokens."""

from dayflow_hrms.credentials.passwords import generate_temporary_password
from dayflow_hrms.loginid.generator import format_login_id
from dayflow_hrms.loginid.validator import parse_login_id, validate_format
from dayflow_hrms.tokens.service import TokenClaims, TokenKind, TokenPair, TokenService

__all__ = [
    "generate_temporary_password",
    "format_login_id",
    "parse_login_id",
    "validate_format",
    "TokenClaims",
    "TokenKind",
    "TokenPair",
    "TokenService",
]
__version__ = "0.1.0"
