"""Bearer token authentication dependencies."""

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from dayflow_hrms.accounts.state import Role
from dayflow_hrms.common.exceptions import TokenInvalidError
from dayflow_hrms.tokens.service import TokenClaims, TokenKind

bearer_scheme = HTTPBearer(auto_error=False)


async def require_access_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> TokenClaims:
    """FastAPI dependency that verifies the bearer access token."""
    if credentials is None:
        raise TokenInvalidError("No token provided")

    from dayflow_hrms.deps import get_token_service

    verified = get_token_service().verify(credentials.credentials, TokenKind.ACCESS)
    return verified.claims


def require_role(*roles: Role):
    """Dependency factory restricting an endpoint to the given roles."""
    allowed = {role.value for role in roles}

    async def _checker(
        claims: TokenClaims = Depends(require_access_claims),
    ) -> TokenClaims:
        if claims.role not in allowed:
            raise HTTPException(
                status_code=403, detail="Forbidden: Insufficient permissions"
            )
        return claims

    return _checker


def require_cleared_account(*roles: Role):
    """Like :func:`require_role`, and also enforces the forced-reset gate.

    Token issuance does not look at the password state, so the gate reads
    the live account: deactivated accounts and accounts that still have to
    change their password are refused here.
    """
    role_checker = require_role(*roles)

    async def _checker(claims: TokenClaims = Depends(role_checker)) -> TokenClaims:
        from dayflow_hrms.deps import get_account_service, get_db

        async with get_db().get_session() as session:
            await get_account_service().require_cleared(session, claims.account_id)
        return claims

    return _checker
