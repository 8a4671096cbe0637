"""Request Dependencies — caller resolution and per-request store wiring.

Invariants:
    - get_caller_id is the single enforcement point for private routes: it
      runs AuthorizationGate and stores the id on request.state.caller_id
    - Stores are built per request around the request's AsyncSession; FastAPI
      caches get_db per request, so all stores in one request share a session
    - TokenService and PasswordHasher are built once from settings (lru_cache)
"""

import logging
from datetime import timedelta
from functools import lru_cache

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from devconnect.config import get_settings
from devconnect.core.authorization import AUTH_HEADER, AuthorizationGate
from devconnect.core.domain_types import IdentityId
from devconnect.core.errors import AuthError
from devconnect.core.token_service import TokenService
from devconnect.infrastructure.database import get_db
from devconnect.infrastructure.observability import bind_caller
from devconnect.infrastructure.passwords import PasswordHasher
from devconnect.services.content_store import ContentStore
from devconnect.services.identity_store import IdentityStore
from devconnect.services.profile_store import ProfileStore

logger = logging.getLogger(__name__)


@lru_cache
def get_token_service() -> TokenService:
    settings = get_settings()
    return TokenService(
        settings.jwt_secret,
        timedelta(seconds=settings.auth_token_expire_seconds),
        settings.jwt_algorithm,
    )


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(get_settings().bcrypt_rounds)


def get_authorization_gate(
    tokens: TokenService = Depends(get_token_service),
) -> AuthorizationGate:
    return AuthorizationGate(tokens)


async def get_caller_id(
    request: Request,
    x_auth_token: str | None = Header(None, alias=AUTH_HEADER),
    gate: AuthorizationGate = Depends(get_authorization_gate),
) -> IdentityId:
    """Resolve x-auth-token to the caller's identity id, or 401."""
    try:
        caller_id = gate.resolve(x_auth_token)
    except AuthError as e:
        logger.warning(
            "Authorization rejected",
            extra={
                "path": request.url.path,
                "error_code": e.code,
                "cause": e.cause.value if e.cause else None,
            },
        )
        raise
    request.state.caller_id = caller_id
    bind_caller(caller_id)
    return caller_id


def get_identity_store(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> IdentityStore:
    return IdentityStore(db, hasher)


def get_content_store(
    db: AsyncSession = Depends(get_db),
    identities: IdentityStore = Depends(get_identity_store),
) -> ContentStore:
    return ContentStore(db, identities)


def get_profile_store(
    db: AsyncSession = Depends(get_db),
    identities: IdentityStore = Depends(get_identity_store),
    content: ContentStore = Depends(get_content_store),
) -> ProfileStore:
    return ProfileStore(db, identities, content)
