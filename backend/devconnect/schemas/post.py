"""Post Schemas — post/comment bodies and post responses.

Invariants:
    - PostResponse.user is always the author id; author is filled only by listings
    - Likes and comments are echoed in stored order (newest first)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from devconnect.schemas.identity import AuthorSummary


class PostCreate(BaseModel):
    text: str | None = None


class CommentCreate(BaseModel):
    text: str | None = None


class LikeEntry(BaseModel):
    user: str


class CommentEntry(BaseModel):
    id: str
    user: str
    text: str
    name: str | None = None
    avatar: str | None = None
    date: str | None = None


class PostResponse(BaseModel):
    id: UUID
    user: UUID
    text: str
    likes: list[LikeEntry]
    comments: list[CommentEntry]
    date: datetime
    author: AuthorSummary | None = None

    @classmethod
    def from_post(cls, post, include_author: bool = False) -> "PostResponse":
        return cls(
            id=post.id,
            user=post.user_id,
            text=post.text,
            likes=[LikeEntry.model_validate(like) for like in post.likes],
            comments=[CommentEntry.model_validate(c) for c in post.comments],
            date=post.date,
            author=(
                AuthorSummary.from_identity(post.author) if include_author else None
            ),
        )


class MessageResponse(BaseModel):
    msg: str
