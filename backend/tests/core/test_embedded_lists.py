"""Embedded List Rules — tests for pure like/comment/history transforms.

Tests cover:
    - toggle_like is an involution and keeps the order of other likes
    - Inputs are never mutated
    - Comment gate is collection-level: any own comment authorizes
    - edit_comment only touches id+author matches; remove_comment ignores author
    - History entries: prepend with fresh id, silent no-op for unknown ids,
      replace keeps the id
"""

import copy

import pytest

from devconnect.core.embedded_lists import (
    add_comment,
    add_entry,
    edit_comment,
    has_liked,
    liker_ids,
    merge_present,
    new_comment,
    pick_fields,
    remove_comment,
    remove_entry,
    replace_entry,
    split_skills,
    toggle_like,
)
from devconnect.core.errors import OwnershipError

A, B, C = "user-a", "user-b", "user-c"


# ─── Likes ───────────────────────────────────────────────────────

def test_toggle_like_prepends_new_like():
    likes = [{"user": B}]
    assert toggle_like(likes, A) == [{"user": A}, {"user": B}]


def test_toggle_like_removes_existing_like():
    likes = [{"user": B}, {"user": A}, {"user": C}]
    assert toggle_like(likes, A) == [{"user": B}, {"user": C}]


def test_toggle_like_twice_restores_original():
    likes = [{"user": B}, {"user": C}]
    assert toggle_like(toggle_like(likes, A), A) == likes


def test_toggle_like_twice_on_existing_like_keeps_others_in_order():
    likes = [{"user": B}, {"user": A}, {"user": C}]
    twice = toggle_like(toggle_like(likes, A), A)
    assert [like["user"] for like in twice if like["user"] != A] == [B, C]
    assert has_liked(twice, A)


def test_toggle_like_does_not_mutate_input():
    likes = [{"user": B}]
    snapshot = copy.deepcopy(likes)
    toggle_like(likes, A)
    toggle_like(likes, B)
    assert likes == snapshot


def test_each_identity_likes_at_most_once():
    likes = []
    for caller in (A, B, A, A, C):
        likes = toggle_like(likes, caller)
    assert len(liker_ids(likes)) == len(set(liker_ids(likes)))


# ─── Comments ────────────────────────────────────────────────────

@pytest.fixture
def comments():
    """Newest first: B's comment, then A's."""
    return [
        {"id": "c2", "user": B, "text": "from b", "name": "Bob Jones", "avatar": None},
        {"id": "c1", "user": A, "text": "from a", "name": "Alice Smith", "avatar": None},
    ]


def test_new_comment_snapshots_author():
    comment = new_comment(A, "hi", "Alice Smith", "//avatar")
    assert comment["user"] == A
    assert comment["name"] == "Alice Smith"
    assert comment["avatar"] == "//avatar"
    assert comment["id"]
    assert comment["date"]


def test_add_comment_prepends(comments):
    comment = new_comment(C, "newest", "Carol White", None)
    assert add_comment(comments, comment)[0] is comment


def test_edit_own_comment(comments):
    edited = edit_comment(comments, "c1", A, "edited")
    assert edited[1]["text"] == "edited"
    assert edited[0] == comments[0]


def test_edit_someone_elses_comment_passes_gate_but_changes_nothing(comments):
    edited = edit_comment(comments, "c2", A, "hijack")
    assert edited == comments


def test_edit_without_any_own_comment_is_rejected(comments):
    with pytest.raises(OwnershipError):
        edit_comment(comments, "c1", C, "nope")


def test_edit_does_not_mutate_input(comments):
    snapshot = copy.deepcopy(comments)
    edit_comment(comments, "c1", A, "edited")
    assert comments == snapshot


def test_remove_comment_ignores_author_once_gate_passes(comments):
    remaining = remove_comment(comments, "c2", A)
    assert [c["id"] for c in remaining] == ["c1"]


def test_remove_comment_without_any_own_comment_is_rejected(comments):
    with pytest.raises(OwnershipError):
        remove_comment(comments, "c1", C)


def test_remove_unknown_comment_id_is_noop(comments):
    assert remove_comment(comments, "missing", A) == comments


def test_comment_gate_on_empty_list_rejects():
    with pytest.raises(OwnershipError):
        edit_comment([], "c1", A, "x")


# ─── History entries ─────────────────────────────────────────────

def test_add_entry_prepends_with_fresh_id():
    first = add_entry([], {"title": "Old"})
    both = add_entry(first, {"title": "Eng"})
    assert both[0]["title"] == "Eng"
    assert both[0]["id"] != both[1]["id"]


def test_remove_unknown_entry_is_noop():
    entries = add_entry([], {"title": "Eng"})
    assert remove_entry(entries, "unknown") == entries


def test_remove_entry_by_id():
    entries = add_entry(add_entry([], {"title": "Old"}), {"title": "Eng"})
    assert [e["title"] for e in remove_entry(entries, entries[0]["id"])] == ["Old"]


def test_replace_entry_keeps_id_and_other_entries():
    entries = add_entry(add_entry([], {"title": "Old"}), {"title": "Eng"})
    target = entries[1]["id"]
    replaced = replace_entry(entries, target, {"title": "Senior", "id": "ignored"})
    assert replaced[1] == {"title": "Senior", "id": target}
    assert replaced[0] == entries[0]


def test_replace_unknown_entry_is_noop():
    entries = add_entry([], {"title": "Eng"})
    assert replace_entry(entries, "unknown", {"title": "X"}) == entries


def test_pick_fields_fills_missing_with_none():
    assert pick_fields({"title": "Eng", "extra": 1}, ("title", "company")) == {
        "title": "Eng", "company": None,
    }


# ─── Profile fields ──────────────────────────────────────────────

def test_split_skills_trims_each_entry():
    assert split_skills(" Python, Go ,SQL") == ["Python", "Go", "SQL"]


def test_split_skills_accepts_list():
    assert split_skills([" a", "b "]) == ["a", "b"]


def test_merge_present_skips_empty_values():
    merged = merge_present({"bio": "old", "company": "X"}, {"bio": "", "company": "Y"})
    assert merged == {"bio": "old", "company": "Y"}
