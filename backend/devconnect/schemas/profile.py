"""Profile Schemas — upsert/history bodies and profile responses.

Invariants:
    - "from" is a Python keyword: exposed as from_ with alias "from" on the wire
    - to_fields() dumps by alias so stores and rules see the wire names
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from devconnect.schemas.identity import AuthorSummary


class ProfileUpsert(BaseModel):
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    status: str | None = None
    githubusername: str | None = None
    skills: str | list[str] | None = None
    youtube: str | None = None
    facebook: str | None = None
    twitter: str | None = None
    instagram: str | None = None
    linkedin: str | None = None

    def to_fields(self) -> dict:
        return self.model_dump()


class _HistoryBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: str | None = Field(None, alias="from")
    to: str | None = None
    current: bool = False
    description: str | None = None

    def to_fields(self) -> dict:
        return self.model_dump(by_alias=True)


class ExperienceBody(_HistoryBody):
    title: str | None = None
    company: str | None = None
    location: str | None = None


class EducationBody(_HistoryBody):
    school: str | None = None
    degree: str | None = None
    fieldofstudy: str | None = None


class ExperienceEntry(ExperienceBody):
    id: str


class EducationEntry(EducationBody):
    id: str


class ProfileResponse(BaseModel):
    id: UUID
    user: UUID
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    status: str | None = None
    githubusername: str | None = None
    skills: list[str]
    social: dict[str, str]
    experience: list[ExperienceEntry]
    education: list[EducationEntry]
    date: datetime
    owner: AuthorSummary | None = None

    @classmethod
    def from_profile(cls, profile, include_owner: bool = False) -> "ProfileResponse":
        return cls(
            id=profile.id,
            user=profile.user_id,
            company=profile.company,
            website=profile.website,
            location=profile.location,
            bio=profile.bio,
            status=profile.status,
            githubusername=profile.githubusername,
            skills=profile.skills,
            social=profile.social,
            experience=[ExperienceEntry.model_validate(e) for e in profile.experience],
            education=[EducationEntry.model_validate(e) for e in profile.education],
            date=profile.date,
            owner=(
                AuthorSummary.from_identity(profile.owner) if include_owner else None
            ),
        )
