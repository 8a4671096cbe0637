"""Post ORM — a status update with embedded likes and comments.

Invariants:
    - user_id is the author; only the author may edit or delete the post
    - likes: JSON list of {"user": <identity id>}, one entry per identity
    - comments: JSON list, newest first, each with a stable "id" and a
      name/avatar snapshot taken when the comment was written

Design Decisions:
    - Likes and comments embedded in the post row: every mutation rewrites the
      whole list (lost updates possible under concurrent writers)
    - author relationship is lazy="raise": listing queries opt in with selectinload
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from devconnect.db.base import Base


class Post(Base):
    """Post document authored by an Identity."""
    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    likes: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    comments: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    author: Mapped["Identity"] = relationship("Identity", lazy="raise")

    __table_args__ = (
        Index("idx_posts_user", "user_id"),
        Index("idx_posts_date", "date"),
    )
