"""
Password Hasher

One-way bcrypt hashing with a tunable cost factor.
"""

import bcrypt


class PasswordHasher:
    """
    bcrypt wrapper used by login and invitation consumption.

    verify() never raises: malformed hashes, the unset-password sentinel and
    passwords bcrypt refuses all verify as False. Those paths still spend one
    bcrypt computation so that they take as long as a real mismatch.
    """

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._dummy_hash = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(rounds))

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(
            password.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds)
        ).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        if not password_hash.startswith("$2"):
            self.dummy_verify(password)
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            return False

    def dummy_verify(self, password: str) -> None:
        """Burn one bcrypt computation; used when there is nothing to compare against."""
        try:
            bcrypt.checkpw(password.encode("utf-8"), self._dummy_hash)
        except ValueError:
            pass
