"""Profiles — upsert, lookups, history lists, and account deletion.

Invariants:
    - GET /api/profile and GET /api/profile/{user_id} are public; the rest are private
    - /me is registered before /{user_id} so it is never read as an id
    - DELETE /api/profile removes the caller's posts, profile and identity
"""

from fastapi import APIRouter, Depends

from devconnect.api.dependencies import get_caller_id, get_profile_store
from devconnect.core.domain_types import IdentityId
from devconnect.core.validation import (
    EDUCATION_RULES, EXPERIENCE_RULES, PROFILE_RULES, ensure_valid,
)
from devconnect.schemas.post import MessageResponse
from devconnect.schemas.profile import (
    EducationBody, ExperienceBody, ProfileResponse, ProfileUpsert,
)
from devconnect.services.profile_store import ProfileStore

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("/me", response_model=ProfileResponse)
async def my_profile(
    caller_id: IdentityId = Depends(get_caller_id),
    profiles: ProfileStore = Depends(get_profile_store),
):
    profile = await profiles.get_by_owner(caller_id, include_owner=True)
    return ProfileResponse.from_profile(profile, include_owner=True)


@router.post("", response_model=ProfileResponse)
async def upsert_profile(
    body: ProfileUpsert,
    caller_id: IdentityId = Depends(get_caller_id),
    profiles: ProfileStore = Depends(get_profile_store),
):
    """Create the caller's profile, or merge the given fields into it."""
    fields = body.to_fields()
    ensure_valid(fields, PROFILE_RULES)
    return ProfileResponse.from_profile(await profiles.upsert(caller_id, fields))


@router.get("", response_model=list[ProfileResponse])
async def list_profiles(profiles: ProfileStore = Depends(get_profile_store)):
    return [
        ProfileResponse.from_profile(p, include_owner=True)
        for p in await profiles.list_all()
    ]


@router.delete("", response_model=MessageResponse)
async def delete_account(
    caller_id: IdentityId = Depends(get_caller_id),
    profiles: ProfileStore = Depends(get_profile_store),
):
    await profiles.delete_cascade(caller_id)
    return MessageResponse(msg="User deleted successfully.")


# ─── Experience ──────────────────────────────────────────────────

@router.put("/experience", response_model=ProfileResponse)
async def add_experience(
    body: ExperienceBody,
    caller_id: IdentityId = Depends(get_caller_id),
    profiles: ProfileStore = Depends(get_profile_store),
):
    fields = body.to_fields()
    ensure_valid(fields, EXPERIENCE_RULES)
    return ProfileResponse.from_profile(
        await profiles.add_experience(caller_id, fields),
    )


@router.put("/experience/update/{experience_id}", response_model=ProfileResponse)
async def update_experience(
    experience_id: str,
    body: ExperienceBody,
    caller_id: IdentityId = Depends(get_caller_id),
    profiles: ProfileStore = Depends(get_profile_store),
):
    fields = body.to_fields()
    ensure_valid(fields, EXPERIENCE_RULES)
    return ProfileResponse.from_profile(
        await profiles.update_experience(caller_id, experience_id, fields),
    )


@router.delete("/experience/{experience_id}", response_model=ProfileResponse)
async def remove_experience(
    experience_id: str,
    caller_id: IdentityId = Depends(get_caller_id),
    profiles: ProfileStore = Depends(get_profile_store),
):
    return ProfileResponse.from_profile(
        await profiles.remove_experience(caller_id, experience_id),
    )


# ─── Education ───────────────────────────────────────────────────

@router.put("/education", response_model=ProfileResponse)
async def add_education(
    body: EducationBody,
    caller_id: IdentityId = Depends(get_caller_id),
    profiles: ProfileStore = Depends(get_profile_store),
):
    fields = body.to_fields()
    ensure_valid(fields, EDUCATION_RULES)
    return ProfileResponse.from_profile(
        await profiles.add_education(caller_id, fields),
    )


@router.put("/education/update/{education_id}", response_model=ProfileResponse)
async def update_education(
    education_id: str,
    body: EducationBody,
    caller_id: IdentityId = Depends(get_caller_id),
    profiles: ProfileStore = Depends(get_profile_store),
):
    fields = body.to_fields()
    ensure_valid(fields, EDUCATION_RULES)
    return ProfileResponse.from_profile(
        await profiles.update_education(caller_id, education_id, fields),
    )


@router.delete("/education/{education_id}", response_model=ProfileResponse)
async def remove_education(
    education_id: str,
    caller_id: IdentityId = Depends(get_caller_id),
    profiles: ProfileStore = Depends(get_profile_store),
):
    return ProfileResponse.from_profile(
        await profiles.remove_education(caller_id, education_id),
    )


# Registered last: a bare segment would otherwise shadow the routes above.
@router.get("/{user_id}", response_model=ProfileResponse)
async def profile_by_user(
    user_id: str,
    profiles: ProfileStore = Depends(get_profile_store),
):
    profile = await profiles.get_by_owner(user_id, include_owner=True)
    return ProfileResponse.from_profile(profile, include_owner=True)
