"""Embedded List Rules — pure transforms for likes, comments and history entries.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - Inputs are never mutated; changed entries are copied ({**entry, ...}) so
      the ORM sees a new JSON value and the committed value stays intact
    - New likes/comments/entries are prepended (newest first)
    - Entry ids are assigned on insert and survive every later update
    - A like list holds each identity at most once

Design Decisions:
    - Comment mutation is authorized at collection level: the caller must have
      authored SOME comment on the post, not necessarily the targeted one.
      Update then only touches comments matching id AND author; delete removes
      every comment with the id regardless of author
    - Unknown entry ids on remove/replace are silent no-ops
"""

from datetime import datetime, timezone

from devconnect.core.domain_types import EntryId, new_entry_id
from devconnect.core.errors import OwnershipError


# ─── Likes ───────────────────────────────────────────────────────

def has_liked(likes: list[dict], caller_id: str) -> bool:
    return any(like.get("user") == caller_id for like in likes)


def toggle_like(likes: list[dict], caller_id: str) -> list[dict]:
    """Remove caller's like if present, otherwise prepend one."""
    if has_liked(likes, caller_id):
        return [like for like in likes if like.get("user") != caller_id]
    return [{"user": caller_id}, *likes]


def liker_ids(likes: list[dict]) -> list[str]:
    return [like["user"] for like in likes]


# ─── Comments ────────────────────────────────────────────────────

def new_comment(
    caller_id: str, text: str, name: str, avatar: str | None,
    now: datetime | None = None,
) -> dict:
    """Comment with the author's display name and avatar as of now."""
    return {
        "id": new_entry_id(),
        "user": caller_id,
        "text": text,
        "name": name,
        "avatar": avatar,
        "date": (now or datetime.now(timezone.utc)).isoformat(),
    }


def add_comment(comments: list[dict], comment: dict) -> list[dict]:
    return [comment, *comments]


def require_any_comment_by(comments: list[dict], caller_id: str) -> None:
    """Raise OwnershipError unless caller authored at least one comment."""
    if not any(c.get("user") == caller_id for c in comments):
        raise OwnershipError()


def edit_comment(
    comments: list[dict], comment_id: str, caller_id: str, text: str,
) -> list[dict]:
    require_any_comment_by(comments, caller_id)
    return [
        {**c, "text": text}
        if c.get("id") == comment_id and c.get("user") == caller_id
        else c
        for c in comments
    ]


def remove_comment(
    comments: list[dict], comment_id: str, caller_id: str,
) -> list[dict]:
    require_any_comment_by(comments, caller_id)
    return [c for c in comments if c.get("id") != comment_id]


# ─── History entries (experience / education) ────────────────────

def pick_fields(data: dict, allowed: tuple[str, ...]) -> dict:
    """Keep only the allowed keys; absent keys become None."""
    return {key: data.get(key) for key in allowed}


def add_entry(entries: list[dict], fields: dict) -> list[dict]:
    return [{"id": new_entry_id(), **fields}, *entries]


def remove_entry(entries: list[dict], entry_id: EntryId | str) -> list[dict]:
    return [e for e in entries if e.get("id") != entry_id]


def replace_entry(
    entries: list[dict], entry_id: EntryId | str, fields: dict,
) -> list[dict]:
    """Swap the matching entry for fields, keeping its id."""
    return [
        {**fields, "id": e["id"]} if e.get("id") == entry_id else e
        for e in entries
    ]


# ─── Profile fields ──────────────────────────────────────────────

def split_skills(raw: str | list[str]) -> list[str]:
    """'Python, Go ,SQL' -> ['Python', 'Go', 'SQL']."""
    if isinstance(raw, list):
        return [skill.strip() for skill in raw]
    return [skill.strip() for skill in raw.split(",")]


def merge_present(current: dict, updates: dict) -> dict:
    """Overlay only the truthy values of updates onto current."""
    return {**current, **{k: v for k, v in updates.items() if v}}
