"""Users — public registration.

Invariants:
    - POST /api/users validates first_name/last_name/email/password/confirm_password
      before touching the store
    - Success answers {"token"} for the new identity
"""

from fastapi import APIRouter, Depends

from devconnect.api.dependencies import get_identity_store, get_token_service
from devconnect.core.token_service import TokenService
from devconnect.core.validation import REGISTER_RULES, ensure_valid
from devconnect.schemas.identity import RegisterRequest, TokenResponse
from devconnect.services.identity_store import IdentityStore

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=TokenResponse)
async def register(
    body: RegisterRequest,
    identities: IdentityStore = Depends(get_identity_store),
    tokens: TokenService = Depends(get_token_service),
):
    """Register a new identity and return its token."""
    ensure_valid(body.model_dump(), REGISTER_RULES)
    identity = await identities.create(
        body.first_name, body.last_name, body.email, body.password,
    )
    return TokenResponse(token=tokens.issue(identity.id))
