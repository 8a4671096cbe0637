"""Infrastructure Layer — database engine, password hashing, logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
    - SQLAlchemy failures are mapped to DatabaseError at the session boundary
"""
