"""Field Validation Pipeline — per-endpoint rule sets run before any store call.

Invariants:
    - All functions are PURE: rules read a dict, never mutate it
    - run_rules() reports every failing field, in rule order
    - ensure_valid() raises ValidationError with all failures, or returns None

Design Decisions:
    - Rules are data (FieldRule tuples) composed per endpoint, so each route
      declares its requirements next to its schema instead of inside the store
    - Pydantic still owns the body's shape; these rules own the messages
      clients show next to each input
"""

import re
from dataclasses import dataclass
from typing import Any, Callable

from devconnect.core.errors import FieldFailure, ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

Predicate = Callable[[Any, dict], bool]


@dataclass(frozen=True)
class FieldRule:
    """A single check: predicate(value, whole_payload) must hold for field."""
    field: str
    message: str
    predicate: Predicate


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, dict)):
        return not value
    return False


def not_empty(field: str, message: str) -> FieldRule:
    return FieldRule(field, message, lambda v, _: not _is_blank(v))


def is_email(field: str, message: str) -> FieldRule:
    return FieldRule(
        field, message,
        lambda v, _: isinstance(v, str) and bool(_EMAIL_RE.match(v.strip())),
    )


def min_length(field: str, length: int, message: str) -> FieldRule:
    return FieldRule(
        field, message, lambda v, _: isinstance(v, str) and len(v) >= length,
    )


def equals_field(field: str, other: str, message: str) -> FieldRule:
    return FieldRule(field, message, lambda v, data: v == data.get(other))


def run_rules(data: dict, rules: tuple[FieldRule, ...]) -> list[FieldFailure]:
    return [
        FieldFailure(param=rule.field, msg=rule.message)
        for rule in rules
        if not rule.predicate(data.get(rule.field), data)
    ]


def ensure_valid(data: dict, rules: tuple[FieldRule, ...]) -> None:
    failures = run_rules(data, rules)
    if failures:
        raise ValidationError(failures)


# ─── Endpoint rule sets ──────────────────────────────────────────

REGISTER_RULES = (
    not_empty("first_name", "First name should not be empty."),
    not_empty("last_name", "Last name should not be empty."),
    is_email("email", "Email should be in email format."),
    min_length("password", 6, "Password should be 6 or more characters."),
    equals_field(
        "confirm_password", "password",
        "Password confirmation does not match password.",
    ),
)

LOGIN_RULES = (
    is_email("email", "Email should be in email format."),
    not_empty("password", "Password should not be empty."),
)

PROFILE_RULES = (
    not_empty("status", "Status is required."),
    not_empty("skills", "Skills are required."),
)

EXPERIENCE_RULES = (
    not_empty("title", "Title is required."),
    not_empty("company", "Company is required."),
    not_empty("from", "From date is required."),
)

EDUCATION_RULES = (
    not_empty("school", "School is required."),
    not_empty("degree", "Degree is required."),
    not_empty("fieldofstudy", "Field of study is required."),
    not_empty("from", "From date is required."),
)

POST_RULES = (
    not_empty("text", "Post should not be empty."),
)

COMMENT_RULES = (
    not_empty("text", "Comment should not be empty."),
)
