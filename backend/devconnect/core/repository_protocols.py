"""Boundary Protocols — contracts between stores.

Invariants:
    - ProfileStore's cascade and ContentStore's comment snapshots reach other
      stores only through these Protocols
    - Implementations are injected at construction (api/dependencies.py)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO
"""

from typing import Protocol

from devconnect.core.domain_types import IdentityId


class IdentityLike(Protocol):
    """Fields of an identity the other stores read."""
    first_name: str
    last_name: str
    avatar: str | None

    @property
    def display_name(self) -> str: ...


class IdentityDirectory(Protocol):
    """Identity lookups and removal — implemented by IdentityStore."""
    async def get(self, identity_id: IdentityId) -> IdentityLike: ...
    async def list_public(self, identity_ids: list[str]) -> list: ...
    async def delete(self, identity_id: IdentityId) -> None: ...


class AuthoredContent(Protocol):
    """Bulk removal of an author's posts — implemented by ContentStore."""
    async def delete_by_author(self, author_id: IdentityId) -> int: ...
