"""
Password hashing with bcrypt.
"""

import bcrypt

# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode('utf-8')[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """Hashes and verifies account passwords."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=self.rounds)).decode('utf-8')

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_password_bytes(password), password_hash.encode('utf-8'))
        except ValueError:
            # malformed stored hash
            return False
