"""Token Service — issues and verifies signed identity tokens (JWT, HS256 by default).

Invariants:
    - Payload shape is {"user": {"id": <identity id>}, "iat", "exp"}
    - exp = iat + configured duration; signing key and duration are injected
    - verify() never raises for a bad token: it returns a TokenVerification
      carrying either the identity id or an AuthError value
    - Stateless: no store lookup, no revocation list. A token outlives the
      deletion of its identity until it expires

Design Decisions:
    - PyJWT over a hand-rolled HMAC codec: standard claims validation (exp/iat)
    - Signature is checked before expiry, so a forged expired token reports
      InvalidSignature rather than Expired
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from devconnect.core.domain_types import AuthFailure, IdentityId
from devconnect.core.errors import AuthError


@dataclass(frozen=True)
class TokenVerification:
    """Outcome of verify(): identity_id on success, error otherwise."""
    identity_id: IdentityId | None = None
    error: AuthError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _failed(reason: AuthFailure) -> TokenVerification:
    return TokenVerification(error=AuthError(reason))


class TokenService:
    """Signs and checks bearer tokens for identities."""

    def __init__(
        self, secret: str, expires_in: timedelta, algorithm: str = "HS256",
    ):
        if not secret:
            raise ValueError("token signing secret must not be empty")
        self._secret = secret
        self.expires_in = expires_in
        self.algorithm = algorithm

    def issue(
        self, identity_id: IdentityId, now: datetime | None = None,
    ) -> str:
        """Produce a signed token for identity_id."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "user": {"id": str(identity_id)},
            "iat": issued_at,
            "exp": issued_at + self.expires_in,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenVerification:
        """Check signature and expiry, then extract the identity id."""
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            return _failed(AuthFailure.EXPIRED)
        except jwt.InvalidSignatureError:
            return _failed(AuthFailure.INVALID_SIGNATURE)
        except jwt.InvalidTokenError:
            return _failed(AuthFailure.MALFORMED)

        identity_id = _extract_identity_id(payload)
        if identity_id is None:
            return _failed(AuthFailure.MALFORMED)
        return TokenVerification(identity_id=identity_id)


def _extract_identity_id(payload: dict) -> IdentityId | None:
    user = payload.get("user")
    if not isinstance(user, dict) or not isinstance(user.get("id"), str):
        return None
    try:
        return IdentityId(UUID(user["id"]))
    except ValueError:
        return None
