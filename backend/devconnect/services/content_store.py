"""Content Store — posts with embedded likes and comments.

Invariants:
    - Malformed or unknown post ids fail PostNotFoundError (400, {"msg"})
    - Only the author may update/delete a post (OwnershipError otherwise);
      update replaces text only — author, likes, comments and date untouched
    - Listings are newest first
    - list_by_author fails only for a malformed author id; no posts is []
    - Comment update/delete use the collection-level gate in core/embedded_lists.py
    - create and add_comment resolve the caller first: a token for a deleted
      identity fails IdentityNotFoundError, never a foreign-key error

Design Decisions:
    - Read-modify-write on the whole post row: load, run a pure transform,
      assign the new list, commit. Two writers racing on one post can lose an
      update; there is no version column or row lock
    - Author summaries are loaded only for listings (selectinload), every
      other operation returns the bare post
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from devconnect.core import embedded_lists
from devconnect.core.domain_types import IdentityId, parse_id
from devconnect.core.errors import OwnershipError, PostNotFoundError
from devconnect.core.repository_protocols import IdentityDirectory
from devconnect.models.post import Post

logger = logging.getLogger(__name__)


class ContentStore:
    """Posts, likes and comments."""

    def __init__(self, db: AsyncSession, identities: IdentityDirectory):
        self.db = db
        self.identities = identities

    async def _load(self, post_id: str) -> Post:
        parsed = parse_id(post_id)
        post = await self.db.get(Post, parsed) if parsed else None
        if post is None:
            raise PostNotFoundError()
        return post

    async def _load_owned(self, post_id: str, caller_id: IdentityId) -> Post:
        post = await self._load(post_id)
        if post.user_id != caller_id:
            logger.warning(
                "Post mutation by non-author",
                extra={"identity_id": str(caller_id), "post_id": str(post.id)},
            )
            raise OwnershipError()
        return post

    async def _save(self, post: Post) -> Post:
        await self.db.commit()
        return post

    # ─── Posts ───────────────────────────────────────────────────

    async def create(self, author_id: IdentityId, text: str) -> Post:
        await self.identities.get(author_id)
        post = Post(
            user_id=author_id,
            text=text,
            likes=[],
            comments=[],
            date=datetime.now(timezone.utc),
        )
        self.db.add(post)
        return await self._save(post)

    async def update(self, post_id: str, caller_id: IdentityId, text: str) -> Post:
        post = await self._load_owned(post_id, caller_id)
        post.text = text
        return await self._save(post)

    async def delete(self, post_id: str, caller_id: IdentityId) -> None:
        post = await self._load_owned(post_id, caller_id)
        await self.db.delete(post)
        await self.db.commit()

    async def list_all(self) -> list[Post]:
        result = await self.db.execute(
            select(Post)
            .options(selectinload(Post.author))
            .order_by(Post.date.desc()),
        )
        return list(result.scalars().all())

    async def list_by_author(self, author_id: str) -> list[Post]:
        parsed = parse_id(author_id)
        if parsed is None:
            raise PostNotFoundError()
        result = await self.db.execute(
            select(Post)
            .where(Post.user_id == parsed)
            .options(selectinload(Post.author))
            .order_by(Post.date.desc()),
        )
        return list(result.scalars().all())

    async def delete_by_author(self, author_id: IdentityId) -> int:
        result = await self.db.execute(delete(Post).where(Post.user_id == author_id))
        await self.db.commit()
        return result.rowcount or 0

    # ─── Likes ───────────────────────────────────────────────────

    async def toggle_like(self, post_id: str, caller_id: IdentityId) -> Post:
        post = await self._load(post_id)
        post.likes = embedded_lists.toggle_like(post.likes, str(caller_id))
        return await self._save(post)

    async def list_likers(self, post_id: str) -> list:
        post = await self._load(post_id)
        return await self.identities.list_public(embedded_lists.liker_ids(post.likes))

    # ─── Comments ────────────────────────────────────────────────

    async def add_comment(
        self, post_id: str, caller_id: IdentityId, text: str,
    ) -> Post:
        post = await self._load(post_id)
        author = await self.identities.get(caller_id)
        comment = embedded_lists.new_comment(
            str(caller_id), text, author.display_name, author.avatar,
        )
        post.comments = embedded_lists.add_comment(post.comments, comment)
        return await self._save(post)

    async def update_comment(
        self, post_id: str, comment_id: str, caller_id: IdentityId, text: str,
    ) -> Post:
        post = await self._load(post_id)
        post.comments = embedded_lists.edit_comment(
            post.comments, comment_id, str(caller_id), text,
        )
        return await self._save(post)

    async def delete_comment(
        self, post_id: str, comment_id: str, caller_id: IdentityId,
    ) -> Post:
        post = await self._load(post_id)
        post.comments = embedded_lists.remove_comment(
            post.comments, comment_id, str(caller_id),
        )
        return await self._save(post)
