"""
Offline login id format validation.

Checks structure only; whether the id belongs to an account is a store
lookup.
"""

import re
from dataclasses import dataclass

from dayflow_hrms.loginid.generator import (
    CODE_LEN,
    LOGIN_ID_LEN,
    NAME_FRAGMENT_LEN,
    SERIAL_LEN,
    YEAR_LEN,
)

LOGIN_ID_PATTERN = re.compile(
    rf"^(?P<code>[A-Z]{{{CODE_LEN}}})"
    rf"(?P<first>\S{{{NAME_FRAGMENT_LEN}}})"
    rf"(?P<last>\S{{{NAME_FRAGMENT_LEN}}})"
    rf"(?P<year>\d{{{YEAR_LEN}}})"
    rf"(?P<serial>\d{{{SERIAL_LEN}}})$"
)


@dataclass(frozen=True)
class LoginIdParts:
    tenant_code: str
    first_fragment: str
    last_fragment: str
    year: int
    serial: int


class ValidationResult:
    """Result of offline login id validation."""

    __slots__ = ("valid", "code", "message", "parts")

    def __init__(
        self,
        valid: bool,
        code: str = "",
        message: str = "",
        parts: LoginIdParts | None = None,
    ):
        self.valid = valid
        self.code = code
        self.message = message
        self.parts = parts


def parse_login_id(login_id: str) -> LoginIdParts | None:
    """Split a login id into its parts, or None if it is malformed."""
    if not login_id or not isinstance(login_id, str):
        return None
    match = LOGIN_ID_PATTERN.match(login_id.strip().upper())
    if match is None:
        return None
    serial = int(match["serial"])
    if serial == 0:
        return None
    return LoginIdParts(
        tenant_code=match["code"],
        first_fragment=match["first"],
        last_fragment=match["last"],
        year=int(match["year"]),
        serial=serial,
    )


def validate_format(login_id: str) -> ValidationResult:
    """
    Validate the structural format of a login id.

    Checks:
    - Exact length (14)
    - 2-letter tenant code
    - 4-digit year and non-zero 4-digit serial

    Returns:
        ValidationResult with the parsed parts on success
    """
    if not login_id or not isinstance(login_id, str):
        return ValidationResult(False, "INVALID_FORMAT", "Login id is empty or not a string")

    candidate = login_id.strip()
    if len(candidate) != LOGIN_ID_LEN:
        return ValidationResult(
            False,
            "INVALID_LENGTH",
            f"Expected {LOGIN_ID_LEN} characters, got {len(candidate)}",
        )

    parts = parse_login_id(candidate)
    if parts is None:
        return ValidationResult(
            False,
            "INVALID_FORMAT",
            "Login id must be CODE(2) + NAME(4) + YEAR(4) + SERIAL(4)",
        )

    return ValidationResult(True, "VALID", "Login id format is valid", parts)
