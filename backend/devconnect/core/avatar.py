"""Avatar Derivation — Gravatar URL for an email address.

Invariants:
    - Email is trimmed and lowercased before hashing (Gravatar's rule)
    - Size 200, rating pg, default "mm" (mystery person) silhouette
"""

import hashlib
from urllib.parse import urlencode

GRAVATAR_BASE = "//www.gravatar.com/avatar/"
GRAVATAR_OPTIONS = {"s": "200", "r": "pg", "d": "mm"}


def gravatar_url(email: str) -> str:
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"{GRAVATAR_BASE}{digest}?{urlencode(GRAVATAR_OPTIONS)}"
