"""Temporary password generation and salted password hashing."""

import secrets
import string

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from dayflow_hrms.common.config import DayflowSettings

UPPERCASE = string.ascii_uppercase
LOWERCASE = string.ascii_lowercase
DIGITS = string.digits
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
ALPHABET = UPPERCASE + LOWERCASE + DIGITS + SYMBOLS
REQUIRED_CLASSES = (UPPERCASE, LOWERCASE, DIGITS, SYMBOLS)
TEMP_PASSWORD_LENGTH = 10

_rng = secrets.SystemRandom()


def generate_temporary_password(length: int = TEMP_PASSWORD_LENGTH) -> str:
    """
    Generate a one-time password with at least one character of each class.

    One character is drawn from each of uppercase, lowercase, digits and
    symbols; the rest come uniformly from the full alphabet, then the whole
    sequence is shuffled so the guaranteed characters have no fixed position.
    """
    if length < len(REQUIRED_CLASSES):
        raise ValueError(
            f"Temporary password length must be at least {len(REQUIRED_CLASSES)}"
        )
    chars = [secrets.choice(charset) for charset in REQUIRED_CLASSES]
    chars.extend(secrets.choice(ALPHABET) for _ in range(length - len(chars)))
    _rng.shuffle(chars)
    return "".join(chars)


class CredentialIssuer:
    """Issues temporary passwords and hashes/verifies stored credentials."""

    def __init__(self, settings: DayflowSettings):
        self.settings = settings
        self._hasher = PasswordHasher(
            time_cost=settings.password_hash_time_cost,
            memory_cost=settings.password_hash_memory_cost,
        )

    def issue_temporary_password(self) -> str:
        return generate_temporary_password(self.settings.temp_password_length)

    def hash_password(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify_password(self, password_hash: str, password: str) -> bool:
        try:
            return self._hasher.verify(password_hash, password)
        except (InvalidHashError, VerificationError):
            return False

    def needs_rehash(self, password_hash: str) -> bool:
        """True when the hash was produced with older cost parameters."""
        return self._hasher.check_needs_rehash(password_hash)
