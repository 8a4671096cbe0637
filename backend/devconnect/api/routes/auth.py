"""Auth — login and "who am I".

Invariants:
    - POST /api/auth/login is public; bad email or password → 400 "Invalid credentials."
    - GET /api/auth returns the caller's identity without the password hash
"""

from fastapi import APIRouter, Depends

from devconnect.api.dependencies import (
    get_caller_id, get_identity_store, get_token_service,
)
from devconnect.core.domain_types import IdentityId
from devconnect.core.token_service import TokenService
from devconnect.core.validation import LOGIN_RULES, ensure_valid
from devconnect.schemas.identity import IdentityResponse, LoginRequest, TokenResponse
from devconnect.services.identity_store import IdentityStore

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("", response_model=IdentityResponse)
async def current_identity(
    caller_id: IdentityId = Depends(get_caller_id),
    identities: IdentityStore = Depends(get_identity_store),
):
    identity = await identities.get(caller_id)
    return IdentityResponse.from_identity(identity)


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    identities: IdentityStore = Depends(get_identity_store),
    tokens: TokenService = Depends(get_token_service),
):
    """Exchange email/password for a token."""
    ensure_valid(body.model_dump(), LOGIN_RULES)
    identity = await identities.authenticate(body.email, body.password)
    return TokenResponse(token=tokens.issue(identity.id))
