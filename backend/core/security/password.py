"""
Password hashing utilities using bcrypt.
"""

from passlib.context import CryptContext

from infrastructure.config.settings import settings


class PasswordHasher:
    """Password hashing and verification using bcrypt."""

    def __init__(self, rounds: int | None = None):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds or settings.bcrypt_rounds,
        )

    def hash(self, password: str) -> str:
        """
        Hash a password using bcrypt.

        Args:
            password: Plain text password to hash

        Returns:
            Hashed password string
        """
        return self._context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against a hash.

        Args:
            plain_password: Plain text password to verify
            hashed_password: Hashed password to check against

        Returns:
            True if password matches, False otherwise
        """
        return self._context.verify(plain_password, hashed_password)


# Singleton instance
password_hasher = PasswordHasher()
