"""Password Hashing — bcrypt wrapper used by IdentityStore.

Invariants:
    - Only bcrypt hashes are stored; plain passwords are never persisted
    - Input is cut to bcrypt's 72-byte limit, the same bytes for hash and check
    - check() returns False (never raises) for a malformed stored hash
"""

import bcrypt

BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """bcrypt with a configurable cost factor."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def check(self, password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(password), hashed.encode("utf-8"))
        except ValueError:
            return False
