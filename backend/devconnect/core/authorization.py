"""Authorization Gate — turns a credential header value into a caller identity.

Invariants:
    - Missing/empty header → AuthError(MISSING)
    - Header present but verify() fails → AuthError(INVALID), with the
      verifier's reason kept on .cause
    - Success returns the identity id from the payload; the Identity row is
      NOT re-fetched
    - This is the only place tokens are verified

Design Decisions:
    - Pure class over a FastAPI dependency: the dependency in api/dependencies.py
      wraps it, so the rules are testable without a request
"""

from devconnect.core.domain_types import AuthFailure, IdentityId
from devconnect.core.errors import AuthError, ErrorContext
from devconnect.core.token_service import TokenService

AUTH_HEADER = "x-auth-token"


class AuthorizationGate:
    """Resolves the x-auth-token header to a caller id or rejects."""

    def __init__(self, tokens: TokenService):
        self.tokens = tokens

    def resolve(self, header_value: str | None) -> IdentityId:
        if not header_value:
            raise AuthError(AuthFailure.MISSING)
        result = self.tokens.verify(header_value)
        if not result.ok:
            cause = result.error.reason
            raise AuthError(
                AuthFailure.INVALID,
                cause=cause,
                context=ErrorContext(debug_info={"cause": cause.value}),
            )
        return result.identity_id
