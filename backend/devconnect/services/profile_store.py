"""Profile Store — profiles with embedded experience/education, and account cascade delete.

Invariants:
    - At most one profile per owner; upsert merges only provided (truthy) fields
    - skills is split on "," and trimmed; social links merge key by key
    - Experience/education entries get a stable id on insert and are prepended;
      remove/update with an unknown id are silent no-ops
    - Sub-list operations on an owner without a profile fail ProfileNotFoundError
    - Creating a profile for a deleted identity fails IdentityNotFoundError
    - delete_cascade removes posts, then profile, then identity; each step is
      committed on its own

Design Decisions:
    - Cascade is best-effort sequential, not a transaction: a failure at step N
      raises CascadeDeleteError (500) and steps 1..N-1 stay deleted
    - Every call is scoped to the caller's own profile (owner_id comes from the
      token), so there is no cross-owner check to make
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from devconnect.core import embedded_lists
from devconnect.core.domain_types import (
    EDUCATION_FIELDS, EXPERIENCE_FIELDS, PROFILE_FIELDS, SOCIAL_FIELDS,
    HistoryList, IdentityId, parse_id,
)
from devconnect.core.errors import CascadeDeleteError, ErrorContext, ProfileNotFoundError
from devconnect.core.repository_protocols import AuthoredContent, IdentityDirectory
from devconnect.models.profile import Profile

logger = logging.getLogger(__name__)

_ENTRY_FIELDS = {
    HistoryList.EXPERIENCE: EXPERIENCE_FIELDS,
    HistoryList.EDUCATION: EDUCATION_FIELDS,
}


class ProfileStore:
    """Profiles and the owner-level cascade."""

    def __init__(
        self,
        db: AsyncSession,
        identities: IdentityDirectory,
        content: AuthoredContent,
    ):
        self.db = db
        self.identities = identities
        self.content = content

    async def _find(self, owner_id: UUID, include_owner: bool = False) -> Profile | None:
        query = select(Profile).where(Profile.user_id == owner_id)
        if include_owner:
            query = query.options(selectinload(Profile.owner))
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_by_owner(
        self, owner_id: IdentityId | str, include_owner: bool = False,
    ) -> Profile:
        parsed = parse_id(owner_id)
        profile = await self._find(parsed, include_owner) if parsed else None
        if profile is None:
            raise ProfileNotFoundError()
        return profile

    async def list_all(self) -> list[Profile]:
        result = await self.db.execute(
            select(Profile).options(selectinload(Profile.owner)),
        )
        return list(result.scalars().all())

    async def upsert(self, owner_id: IdentityId, fields: dict) -> Profile:
        scalar_fields = embedded_lists.merge_present(
            {}, {key: fields.get(key) for key in PROFILE_FIELDS},
        )
        if fields.get("skills"):
            scalar_fields["skills"] = embedded_lists.split_skills(fields["skills"])
        social = embedded_lists.merge_present(
            {}, {key: fields.get(key) for key in SOCIAL_FIELDS},
        )

        profile = await self._find(owner_id)
        if profile is None:
            await self.identities.get(owner_id)
            profile = Profile(
                user_id=owner_id,
                skills=[],
                social=social,
                experience=[],
                education=[],
                date=datetime.now(timezone.utc),
            )
            self.db.add(profile)
        elif social:
            profile.social = embedded_lists.merge_present(profile.social, social)
        for key, value in scalar_fields.items():
            setattr(profile, key, value)

        await self.db.commit()
        return profile

    # ─── Cascade ─────────────────────────────────────────────────

    async def _delete_profile(self, owner_id: IdentityId) -> None:
        await self.db.execute(delete(Profile).where(Profile.user_id == owner_id))
        await self.db.commit()

    async def delete_cascade(self, owner_id: IdentityId) -> None:
        steps = (
            ("posts", self.content.delete_by_author),
            ("profile", self._delete_profile),
            ("identity", self.identities.delete),
        )
        completed: list[str] = []
        for step, action in steps:
            try:
                await action(owner_id)
            except SQLAlchemyError as e:
                await self.db.rollback()
                logger.error(
                    f"Cascade delete failed: {e}",
                    extra={"identity_id": str(owner_id), "step": step},
                    exc_info=True,
                )
                raise CascadeDeleteError(
                    step, completed, ErrorContext(identity_id=str(owner_id)),
                ) from e
            completed.append(step)
        logger.info("Account deleted", extra={"identity_id": str(owner_id)})

    # ─── History lists ───────────────────────────────────────────

    async def add_entry(
        self, owner_id: IdentityId, which: HistoryList, fields: dict,
    ) -> Profile:
        profile = await self.get_by_owner(owner_id)
        entry = embedded_lists.pick_fields(fields, _ENTRY_FIELDS[which])
        setattr(
            profile, which.value,
            embedded_lists.add_entry(getattr(profile, which.value), entry),
        )
        await self.db.commit()
        return profile

    async def remove_entry(
        self, owner_id: IdentityId, which: HistoryList, entry_id: str,
    ) -> Profile:
        profile = await self.get_by_owner(owner_id)
        setattr(
            profile, which.value,
            embedded_lists.remove_entry(getattr(profile, which.value), entry_id),
        )
        await self.db.commit()
        return profile

    async def update_entry(
        self, owner_id: IdentityId, which: HistoryList, entry_id: str, fields: dict,
    ) -> Profile:
        profile = await self.get_by_owner(owner_id)
        entry = embedded_lists.pick_fields(fields, _ENTRY_FIELDS[which])
        setattr(
            profile, which.value,
            embedded_lists.replace_entry(
                getattr(profile, which.value), entry_id, entry,
            ),
        )
        await self.db.commit()
        return profile

    async def add_experience(self, owner_id: IdentityId, fields: dict) -> Profile:
        return await self.add_entry(owner_id, HistoryList.EXPERIENCE, fields)

    async def add_education(self, owner_id: IdentityId, fields: dict) -> Profile:
        return await self.add_entry(owner_id, HistoryList.EDUCATION, fields)

    async def remove_experience(self, owner_id: IdentityId, entry_id: str) -> Profile:
        return await self.remove_entry(owner_id, HistoryList.EXPERIENCE, entry_id)

    async def remove_education(self, owner_id: IdentityId, entry_id: str) -> Profile:
        return await self.remove_entry(owner_id, HistoryList.EDUCATION, entry_id)

    async def update_experience(
        self, owner_id: IdentityId, entry_id: str, fields: dict,
    ) -> Profile:
        return await self.update_entry(
            owner_id, HistoryList.EXPERIENCE, entry_id, fields,
        )

    async def update_education(
        self, owner_id: IdentityId, entry_id: str, fields: dict,
    ) -> Profile:
        return await self.update_entry(
            owner_id, HistoryList.EDUCATION, entry_id, fields,
        )
