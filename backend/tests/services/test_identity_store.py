"""Identity Store — registration, credential check, lookup, delete.

Invariants:
    - Duplicate email (any case/whitespace) → ValidationError "User already exists."
    - Unknown email and wrong password fail with the same message
    - Stored password is a bcrypt hash, never the plain password
    - list_public keeps the order of the ids passed in
"""

import uuid

import pytest

from devconnect.core.errors import IdentityNotFoundError, ValidationError
from devconnect.services.identity_store import INVALID_CREDENTIALS


async def test_create_normalizes_email_and_sets_avatar(identities):
    identity = await identities.create("Ann", "Lee", "  Ann@Example.COM ", "secret1")
    assert identity.email == "ann@example.com"
    assert identity.avatar.startswith("//www.gravatar.com/avatar/")
    assert identity.date is not None


async def test_password_is_stored_hashed(identities, hasher):
    identity = await identities.create("Ann", "Lee", "ann@example.com", "secret1")
    assert identity.password_hash != "secret1"
    assert hasher.check("secret1", identity.password_hash)


async def test_duplicate_email_rejected(identities, alice):
    with pytest.raises(ValidationError) as exc_info:
        await identities.create("Other", "Alice", "ALICE@example.com", "secret9")
    assert exc_info.value.to_response()["errors"][0]["msg"] == "User already exists."


async def test_authenticate_returns_identity(identities, alice):
    identity = await identities.authenticate("alice@example.com", "secret1")
    assert identity.id == alice.id


async def test_wrong_password_and_unknown_email_look_the_same(identities, alice):
    with pytest.raises(ValidationError) as wrong_password:
        await identities.authenticate("alice@example.com", "secret2")
    with pytest.raises(ValidationError) as unknown_email:
        await identities.authenticate("nobody@example.com", "secret1")
    assert wrong_password.value.message == INVALID_CREDENTIALS
    assert unknown_email.value.message == INVALID_CREDENTIALS


async def test_get_unknown_or_malformed_id(identities):
    with pytest.raises(IdentityNotFoundError):
        await identities.get(uuid.uuid4())
    with pytest.raises(IdentityNotFoundError):
        await identities.get("not-a-uuid")


async def test_list_public_keeps_requested_order(identities, alice, bob, carol):
    listed = await identities.list_public(
        [str(carol.id), "garbage", str(alice.id), str(uuid.uuid4()), str(bob.id)],
    )
    assert [i.id for i in listed] == [carol.id, alice.id, bob.id]


async def test_list_public_empty(identities):
    assert await identities.list_public([]) == []


async def test_delete_removes_identity(identities, alice):
    await identities.delete(alice.id)
    assert await identities.find_by_email("alice@example.com") is None
