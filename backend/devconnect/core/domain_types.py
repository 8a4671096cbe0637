"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - IdentityId wraps the UUID of an identity; ids from paths go through parse_id()
    - Embedded entry ids (comments, experience, education) are UUID strings,
      stored inside the parent's JSON document
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

import uuid
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

IdentityId = NewType("IdentityId", UUID)
EntryId = NewType("EntryId", str)


def new_entry_id() -> EntryId:
    """Fresh id for an embedded sub-record."""
    return EntryId(str(uuid.uuid4()))


def parse_id(raw: str | UUID) -> UUID | None:
    """UUID from a path parameter, or None when the shape is wrong."""
    if isinstance(raw, UUID):
        return raw
    try:
        return UUID(raw)
    except (ValueError, TypeError, AttributeError):
        return None


# ─── Enums ───────────────────────────────────────────────────────

class AuthFailure(str, Enum):
    """Why a request failed authentication.

    MISSING / INVALID are what the gate reports; the other three are
    what TokenService.verify reports about a presented token.
    """
    MISSING = "missing"
    INVALID = "invalid"
    INVALID_SIGNATURE = "invalid_signature"
    EXPIRED = "expired"
    MALFORMED = "malformed"


class HistoryList(str, Enum):
    """Embedded history lists on a profile."""
    EXPERIENCE = "experience"
    EDUCATION = "education"


# ─── Field Sets ──────────────────────────────────────────────────

PROFILE_FIELDS = (
    "company", "website", "location", "bio", "status", "githubusername",
)
SOCIAL_FIELDS = ("youtube", "facebook", "twitter", "instagram", "linkedin")
EXPERIENCE_FIELDS = (
    "title", "company", "location", "from", "to", "current", "description",
)
EDUCATION_FIELDS = (
    "school", "degree", "fieldofstudy", "from", "to", "current", "description",
)
