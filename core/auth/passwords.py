"""bcrypt password hashing.

bcrypt only considers the first 72 bytes of its input and the library
rejects anything longer, so callers validate length before hashing.
"""

import bcrypt

from core.config import settings

MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Hash and verify passwords with a per-password salt."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        # Checked against when the user does not exist
        self._dummy_hash = bcrypt.hashpw(b"dummy-password", bcrypt.gensalt(rounds))

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str | None) -> bool:
        """Return True if ``password`` matches ``password_hash``.

        A ``None`` hash, or a password longer than bcrypt accepts, still runs
        a full comparison against a dummy digest and then returns False.
        """
        candidate = password.encode("utf-8")
        if password_hash is None or len(candidate) > MAX_PASSWORD_BYTES:
            bcrypt.checkpw(b"dummy-password-mismatch", self._dummy_hash)
            return False
        try:
            return bcrypt.checkpw(candidate, password_hash.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt digest
            return False


_hasher: PasswordHasher | None = None


def get_password_hasher() -> PasswordHasher:
    """FastAPI dependency returning the process-wide hasher."""
    global _hasher
    if _hasher is None:
        _hasher = PasswordHasher(rounds=settings.auth.bcrypt_rounds)
    return _hasher
