"""Posts — post CRUD, like toggle, comment lifecycle. All routes are private.

Invariants:
    - Every route resolves the caller through get_caller_id first
    - Text rules run before any store access
    - Ownership and not-found checks live in ContentStore
"""

from fastapi import APIRouter, Depends

from devconnect.api.dependencies import get_caller_id, get_content_store
from devconnect.core.domain_types import IdentityId
from devconnect.core.validation import COMMENT_RULES, POST_RULES, ensure_valid
from devconnect.schemas.identity import IdentityPublic
from devconnect.schemas.post import (
    CommentCreate, MessageResponse, PostCreate, PostResponse,
)
from devconnect.services.content_store import ContentStore

router = APIRouter(prefix="/api/post", tags=["post"])


@router.post("", response_model=PostResponse)
async def create_post(
    body: PostCreate,
    caller_id: IdentityId = Depends(get_caller_id),
    posts: ContentStore = Depends(get_content_store),
):
    ensure_valid(body.model_dump(), POST_RULES)
    post = await posts.create(caller_id, body.text)
    return PostResponse.from_post(post)


@router.get("", response_model=list[PostResponse])
async def list_posts(
    caller_id: IdentityId = Depends(get_caller_id),
    posts: ContentStore = Depends(get_content_store),
):
    """All posts, newest first."""
    return [
        PostResponse.from_post(p, include_author=True)
        for p in await posts.list_all()
    ]


@router.get("/alllike/{post_id}", response_model=list[IdentityPublic])
async def list_likers(
    post_id: str,
    caller_id: IdentityId = Depends(get_caller_id),
    posts: ContentStore = Depends(get_content_store),
):
    """Public profiles of everyone who liked the post."""
    return [
        IdentityPublic.from_identity(i) for i in await posts.list_likers(post_id)
    ]


@router.get("/{user_id}", response_model=list[PostResponse])
async def list_posts_by_author(
    user_id: str,
    caller_id: IdentityId = Depends(get_caller_id),
    posts: ContentStore = Depends(get_content_store),
):
    return [
        PostResponse.from_post(p, include_author=True)
        for p in await posts.list_by_author(user_id)
    ]


@router.put("/like/{post_id}", response_model=PostResponse)
async def toggle_like(
    post_id: str,
    caller_id: IdentityId = Depends(get_caller_id),
    posts: ContentStore = Depends(get_content_store),
):
    """Like the post, or take the like back if already given."""
    return PostResponse.from_post(await posts.toggle_like(post_id, caller_id))


@router.put("/comment/update/{post_id}/{comment_id}", response_model=PostResponse)
async def update_comment(
    post_id: str,
    comment_id: str,
    body: CommentCreate,
    caller_id: IdentityId = Depends(get_caller_id),
    posts: ContentStore = Depends(get_content_store),
):
    ensure_valid(body.model_dump(), COMMENT_RULES)
    post = await posts.update_comment(post_id, comment_id, caller_id, body.text)
    return PostResponse.from_post(post)


@router.put("/comment/{post_id}", response_model=PostResponse)
async def add_comment(
    post_id: str,
    body: CommentCreate,
    caller_id: IdentityId = Depends(get_caller_id),
    posts: ContentStore = Depends(get_content_store),
):
    ensure_valid(body.model_dump(), COMMENT_RULES)
    post = await posts.add_comment(post_id, caller_id, body.text)
    return PostResponse.from_post(post)


@router.delete("/comment/{post_id}/{comment_id}", response_model=PostResponse)
async def delete_comment(
    post_id: str,
    comment_id: str,
    caller_id: IdentityId = Depends(get_caller_id),
    posts: ContentStore = Depends(get_content_store),
):
    post = await posts.delete_comment(post_id, comment_id, caller_id)
    return PostResponse.from_post(post)


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    body: PostCreate,
    caller_id: IdentityId = Depends(get_caller_id),
    posts: ContentStore = Depends(get_content_store),
):
    ensure_valid(body.model_dump(), POST_RULES)
    return PostResponse.from_post(await posts.update(post_id, caller_id, body.text))


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: str,
    caller_id: IdentityId = Depends(get_caller_id),
    posts: ContentStore = Depends(get_content_store),
):
    await posts.delete(post_id, caller_id)
    return MessageResponse(msg="Post removed successfully.")
