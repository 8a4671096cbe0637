"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Embedded sub-collections live in JSON columns on their parent row

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from devconnect.models.identity import Identity  # noqa: F401
from devconnect.models.profile import Profile  # noqa: F401
from devconnect.models.post import Post  # noqa: F401
