"""Identity Store — user records: registration, credential check, lookup, delete.

Invariants:
    - Email is normalized (trimmed, lowercased) before every lookup and insert
    - Registration of a taken email fails ValidationError("User already exists.")
    - Unknown email and wrong password fail with the same message, so a login
      attempt does not reveal which emails are registered
    - list_public() returns identities in the order of the ids passed in

Design Decisions:
    - bcrypt runs in a worker thread (asyncio.to_thread): hashing is CPU-bound
      and would otherwise stall the event loop
"""

import asyncio
import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from devconnect.core.avatar import gravatar_url
from devconnect.core.domain_types import IdentityId, parse_id
from devconnect.core.errors import (
    FieldFailure, IdentityNotFoundError, ValidationError,
)
from devconnect.infrastructure.passwords import PasswordHasher
from devconnect.models.identity import Identity

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials."
USER_EXISTS = "User already exists."


def normalize_email(email: str) -> str:
    return email.strip().lower()


class IdentityStore:
    """Persistence for Identity rows."""

    def __init__(self, db: AsyncSession, hasher: PasswordHasher):
        self.db = db
        self.hasher = hasher

    async def find_by_email(self, email: str) -> Identity | None:
        result = await self.db.execute(
            select(Identity).where(Identity.email == normalize_email(email)),
        )
        return result.scalar_one_or_none()

    async def create(
        self, first_name: str, last_name: str, email: str, password: str,
    ) -> Identity:
        email = normalize_email(email)
        if await self.find_by_email(email):
            raise ValidationError([FieldFailure(param="email", msg=USER_EXISTS)])
        password_hash = await asyncio.to_thread(self.hasher.hash, password)
        identity = Identity(
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            email=email,
            password_hash=password_hash,
            avatar=gravatar_url(email),
            date=datetime.now(timezone.utc),
        )
        self.db.add(identity)
        try:
            await self.db.commit()
        except IntegrityError:
            # lost a registration race on the unique email index
            await self.db.rollback()
            raise ValidationError([FieldFailure(param="email", msg=USER_EXISTS)])
        logger.info("Identity registered", extra={"identity_id": str(identity.id)})
        return identity

    async def authenticate(self, email: str, password: str) -> Identity:
        identity = await self.find_by_email(email)
        if identity is None:
            raise ValidationError([FieldFailure(param="email", msg=INVALID_CREDENTIALS)])
        matches = await asyncio.to_thread(
            self.hasher.check, password, identity.password_hash,
        )
        if not matches:
            raise ValidationError([FieldFailure(param="password", msg=INVALID_CREDENTIALS)])
        return identity

    async def get(self, identity_id: IdentityId | str) -> Identity:
        parsed = parse_id(identity_id)
        identity = await self.db.get(Identity, parsed) if parsed else None
        if identity is None:
            raise IdentityNotFoundError()
        return identity

    async def list_public(self, identity_ids: list[str]) -> list[Identity]:
        """Identities for ids (malformed or unknown ids are skipped)."""
        parsed = [p for p in (parse_id(i) for i in identity_ids) if p]
        if not parsed:
            return []
        result = await self.db.execute(
            select(Identity).where(Identity.id.in_(parsed)),
        )
        by_id: dict[UUID, Identity] = {i.id: i for i in result.scalars().all()}
        return [by_id[p] for p in parsed if p in by_id]

    async def delete(self, identity_id: IdentityId) -> None:
        await self.db.execute(delete(Identity).where(Identity.id == identity_id))
        await self.db.commit()
