"""
Password hashing and verification utilities.
"""

from typing import Optional

import bcrypt

from supplier_portal.utils.config import get_config
from supplier_portal.utils.exceptions import ValidationError
from supplier_portal.utils.logger import get_logger

logger = get_logger(__name__)


class PasswordManager:
    """
    Manages password hashing and verification using bcrypt.
    """

    def __init__(self, rounds: Optional[int] = None, min_length: Optional[int] = None):
        """
        Initialize password manager.

        Args:
            rounds: bcrypt cost factor
            min_length: Minimum accepted password length
        """
        config = get_config()
        self.rounds = rounds or config.bcrypt_rounds
        self.min_length = min_length or config.password_min_length

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password.

        Args:
            password: Plaintext password

        Returns:
            Hashed password string

        Raises:
            ValidationError: If the password is shorter than the minimum length
        """
        if not password or len(password) < self.min_length:
            raise ValidationError(
                f"Password must be at least {self.min_length} characters",
                field="password"
            )

        # Bcrypt only accepts up to 72 bytes
        password_bytes = password.encode('utf-8')[:72]
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(password_bytes, salt)
        return hashed.decode('utf-8')

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against its hash.

        Args:
            plain_password: Plaintext password to verify
            hashed_password: Hashed password to compare against

        Returns:
            True if password matches, False otherwise
        """
        if not plain_password or not hashed_password:
            return False

        try:
            password_bytes = plain_password.encode('utf-8')[:72]
            hashed_bytes = hashed_password.encode('utf-8')
            return bcrypt.checkpw(password_bytes, hashed_bytes)
        except ValueError as e:
            # Malformed stored hash
            logger.error(f"Password verification failed: {e}")
            return False


# Global password manager instance
_password_manager: Optional[PasswordManager] = None


def get_password_manager() -> PasswordManager:
    """Get or create global password manager instance."""
    global _password_manager
    if _password_manager is None:
        _password_manager = PasswordManager()
    return _password_manager


def hash_password(password: str) -> str:
    """Convenience function to hash password."""
    return get_password_manager().hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Convenience function to verify password."""
    return get_password_manager().verify(plain_password, hashed_password)
