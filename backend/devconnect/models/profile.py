"""Profile ORM — career/social metadata for one identity.

Invariants:
    - user_id is unique: at most one profile per identity
    - skills: JSON list of trimmed strings
    - social: JSON object keyed by network (youtube, twitter, ...)
    - experience / education: JSON lists of entries, newest first, each with a
      stable "id"

Design Decisions:
    - Embedded lists as JSON columns: the profile is read and written as one
      document (read-modify-write, no per-entry rows)
    - owner relationship is lazy="raise": callers opt in with selectinload
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from devconnect.db.base import Base


class Profile(Base):
    """Profile document owned by an Identity."""
    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, unique=True,
    )
    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str | None] = mapped_column(String(255), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    githubusername: Mapped[str | None] = mapped_column(String(100), nullable=True)
    skills: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    social: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    experience: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    education: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    owner: Mapped["Identity"] = relationship("Identity", lazy="raise")
