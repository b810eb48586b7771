"""
Human-readable login id generator.

Format: {CC}{FF}{LL}{YYYY}{SSSS}  e.g. OIJADO20240001
- 2-char tenant code
- first two letters of the first name, uppercased
- first two letters of the last name, uppercased
- 4-digit year of joining
- 4-digit serial drawn from the tenant's counter for that year

Name fragments shorter than two characters are right-padded with 'X'.
Serials above 9999 are rejected rather than widening the field, so every
login id has the same fixed length.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from dayflow_hrms.common.config import DayflowSettings
from dayflow_hrms.common.exceptions import InvalidTenantCodeError, SerialOverflowError
from dayflow_hrms.counters.service import SerialCounterStore

logger = logging.getLogger(__name__)

CODE_LEN = 2
NAME_FRAGMENT_LEN = 2
YEAR_LEN = 4
SERIAL_LEN = 4
MAX_SERIAL = 10**SERIAL_LEN - 1
PAD_CHAR = "X"
LOGIN_ID_LEN = CODE_LEN + 2 * NAME_FRAGMENT_LEN + YEAR_LEN + SERIAL_LEN


def _name_fragment(name: str) -> str:
    """First two characters of a name, uppercased and padded."""
    return name.strip().upper()[:NAME_FRAGMENT_LEN].ljust(NAME_FRAGMENT_LEN, PAD_CHAR)


def format_login_id(
    tenant_code: str,
    first_name: str,
    last_name: str,
    year: int,
    serial: int,
) -> str:
    """
    Build a login id from its parts. Pure and deterministic.

    Args:
        tenant_code: 2-letter tenant code (case-insensitive)
        first_name: employee first name
        last_name: employee last name
        year: 4-digit year of joining
        serial: counter value (1-9999)

    Returns:
        Formatted login id string
    """
    prefix = tenant_code.strip().upper()
    if len(prefix) != CODE_LEN:
        raise InvalidTenantCodeError(
            f"Tenant code must be {CODE_LEN} characters, got {tenant_code!r}"
        )
    if not 1000 <= year <= 9999:
        raise ValueError(f"Year must have {YEAR_LEN} digits, got {year}")
    if serial < 1:
        raise ValueError(f"Serial must be positive, got {serial}")
    if serial > MAX_SERIAL:
        raise SerialOverflowError(
            f"Serial {serial} exceeds the {SERIAL_LEN}-digit login id field"
        )

    return (
        f"{prefix}"
        f"{_name_fragment(first_name)}"
        f"{_name_fragment(last_name)}"
        f"{year:04d}"
        f"{serial:0{SERIAL_LEN}d}"
    )


class LoginIdGenerator:
    """Draws a serial from the counter store and formats the login id."""

    def __init__(self, settings: DayflowSettings, counters: SerialCounterStore):
        self.settings = settings
        self.counters = counters

    def resolve_prefix(self, tenant_code: str) -> str:
        """The pinned installation prefix if configured, else the tenant's own code."""
        return self.settings.login_id_prefix or tenant_code

    async def generate(
        self,
        session: AsyncSession,
        tenant_code: str,
        first_name: str,
        last_name: str,
        year: int,
        tenant_id: str,
    ) -> str:
        """Generate the next login id for a tenant and year.

        The serial draw is committed by the counter store before formatting,
        so a failure here or later leaves an unused serial behind.
        """
        serial = await self.counters.increment(session, tenant_id, year)
        if serial > MAX_SERIAL:
            logger.error(
                "Serial overflow for tenant %s year %s (serial %s)",
                tenant_id, year, serial,
            )
        return format_login_id(
            self.resolve_prefix(tenant_code), first_name, last_name, year, serial
        )
