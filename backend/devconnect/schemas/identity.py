"""Identity Schemas — registration/login bodies and public identity shapes.

Invariants:
    - Request fields are optional at the type level; core/validation.py rules
      decide which are required and word the messages
    - IdentityPublic never carries email or password hash; IdentityResponse
      adds email and is only returned to the identity itself
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class RegisterRequest(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    password: str | None = None
    confirm_password: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class TokenResponse(BaseModel):
    token: str


class IdentityPublic(BaseModel):
    """Identity as other users see it."""
    id: UUID
    first_name: str
    last_name: str
    avatar: str | None = None
    date: datetime

    @classmethod
    def from_identity(cls, identity) -> "IdentityPublic":
        return cls(
            id=identity.id,
            first_name=identity.first_name,
            last_name=identity.last_name,
            avatar=identity.avatar,
            date=identity.date,
        )


class IdentityResponse(IdentityPublic):
    """Identity as its owner sees it (GET /api/auth)."""
    email: str

    @classmethod
    def from_identity(cls, identity) -> "IdentityResponse":
        return cls(
            id=identity.id,
            first_name=identity.first_name,
            last_name=identity.last_name,
            avatar=identity.avatar,
            date=identity.date,
            email=identity.email,
        )


class AuthorSummary(BaseModel):
    """Author fields embedded in post/profile listings."""
    id: UUID
    first_name: str
    last_name: str
    avatar: str | None = None

    @classmethod
    def from_identity(cls, identity) -> "AuthorSummary":
        return cls(
            id=identity.id,
            first_name=identity.first_name,
            last_name=identity.last_name,
            avatar=identity.avatar,
        )
