"""Signed session tokens: short-lived access and long-lived refresh JWTs.

Tokens are stateless. Nothing is stored server-side, so a token stays valid
until it expires; there is no revocation list. Refreshing re-signs the claims
carried by the refresh token without consulting the account store, so role
or tenant changes only show up after the next full login.
"""

import time
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Callable

import jwt

from dayflow_hrms.common.config import DayflowSettings
from dayflow_hrms.common.exceptions import TokenInvalidError

_REQUIRED_CLAIMS = ["sub", "tenant_id", "role", "typ", "iat", "exp"]
# iat/exp are NumericDate values with microsecond precision.
_MIN_REISSUE_STEP = 0.001  # seconds


class TokenKind(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True)
class TokenClaims:
    """Identity and role asserted by a token."""

    account_id: str
    tenant_id: str
    role: str


@dataclass(frozen=True)
class VerifiedToken:
    claims: TokenClaims
    kind: TokenKind
    issued_at: float
    expires_at: float


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


class TokenService:
    """Issues, verifies and refreshes access/refresh token pairs."""

    def __init__(
        self,
        settings: DayflowSettings,
        clock: Callable[[], float] | None = None,
    ):
        self.settings = settings
        self._clock = clock or time.time
        self._secrets = {
            TokenKind.ACCESS: settings.jwt_access_secret,
            TokenKind.REFRESH: settings.jwt_refresh_secret,
        }
        self._ttls = {
            TokenKind.ACCESS: settings.access_token_seconds,
            TokenKind.REFRESH: settings.refresh_token_seconds,
        }

    def _now(self) -> float:
        return round(self._clock(), 6)

    def _encode(self, claims: TokenClaims, kind: TokenKind, now: float) -> str:
        payload = {
            "sub": claims.account_id,
            "tenant_id": claims.tenant_id,
            "role": claims.role,
            "typ": kind.value,
            "iat": now,
            "exp": now + self._ttls[kind],
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(
            payload, self._secrets[kind], algorithm=self.settings.jwt_algorithm
        )

    def issue(self, claims: TokenClaims) -> TokenPair:
        """Sign an access and a refresh token carrying the same claims."""
        now = self._now()
        return TokenPair(
            access_token=self._encode(claims, TokenKind.ACCESS, now),
            refresh_token=self._encode(claims, TokenKind.REFRESH, now),
        )

    def verify(self, token: str, kind: TokenKind) -> VerifiedToken:
        """
        Check signature, token kind and expiry.

        Raises:
            TokenInvalidError: for malformed, forged, wrong-kind or expired
                tokens alike.
        """
        try:
            # Expiry is checked below against the service clock.
            payload = jwt.decode(
                token,
                self._secrets[kind],
                algorithms=[self.settings.jwt_algorithm],
                options={
                    "require": _REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidTokenError as exc:
            raise TokenInvalidError() from exc

        if payload.get("typ") != kind.value:
            raise TokenInvalidError()

        try:
            verified = VerifiedToken(
                claims=TokenClaims(
                    account_id=str(payload["sub"]),
                    tenant_id=str(payload["tenant_id"]),
                    role=str(payload["role"]),
                ),
                kind=kind,
                issued_at=float(payload["iat"]),
                expires_at=float(payload["exp"]),
            )
        except (TypeError, ValueError) as exc:
            raise TokenInvalidError() from exc

        if self._clock() >= verified.expires_at:
            raise TokenInvalidError()
        return verified

    def refresh(self, refresh_token: str) -> str:
        """Exchange a valid refresh token for a new access token with the same claims.

        The new token is issued strictly after the refresh token was, so its
        expiry is later than that of the access token issued alongside it,
        even when the clock has not moved.
        """
        verified = self.verify(refresh_token, TokenKind.REFRESH)
        now = max(self._now(), verified.issued_at + _MIN_REISSUE_STEP)
        return self._encode(verified.claims, TokenKind.ACCESS, now)
