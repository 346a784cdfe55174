"""
JWT token management for authentication.
"""

from datetime import datetime, timedelta
from typing import Optional, Dict, Any
import uuid

from jose import JWTError, jwt

from supplier_portal.auth.principal import Principal, Role
from supplier_portal.utils.config import get_config
from supplier_portal.utils.logger import get_logger

logger = get_logger(__name__)


class JWTManager:
    """
    Manages JWT token creation and verification.

    Tokens are signed with a shared secret (HS256) and expire after a fixed
    window. There is no refresh or revocation, expiry is the only bound.
    """

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        access_token_expire_hours: Optional[int] = None
    ):
        """
        Initialize JWT manager.

        Args:
            secret_key: Secret key for signing tokens
            algorithm: Signing algorithm
            access_token_expire_hours: Access token TTL in hours
        """
        config = get_config()
        self.secret_key = secret_key or config.secret_key
        self.algorithm = algorithm or config.jwt_algorithm
        expire_hours = access_token_expire_hours or config.access_token_expire_hours
        self.access_token_expire = timedelta(hours=expire_hours)

        logger.info(f"Initialized JWT manager (algorithm={self.algorithm}, access_ttl={expire_hours}h)")

    @property
    def expires_in(self) -> int:
        """Token lifetime in seconds."""
        return int(self.access_token_expire.total_seconds())

    def create_access_token(
        self,
        account_id: str,
        username: str,
        role: Role,
        additional_claims: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Create access token for an authenticated account.

        Args:
            account_id: Admin or tenant UUID
            username: Account username
            role: Account role
            additional_claims: Optional additional claims to include

        Returns:
            JWT access token string
        """
        now = datetime.utcnow()
        expires = now + self.access_token_expire

        payload = {
            "sub": str(account_id),
            "username": username,
            "role": Role(role).value,
            "type": "access",
            "iat": now,
            "exp": expires,
            "jti": str(uuid.uuid4())
        }

        if additional_claims:
            payload.update(additional_claims)

        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        logger.debug(f"Created access token for {role} {username} (expires in {self.access_token_expire})")

        return token

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode JWT token.

        Args:
            token: JWT token string

        Returns:
            Decoded token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm]
            )

            if payload.get("type") != "access":
                raise JWTError(f"Invalid token type: {payload.get('type')}")

            return payload

        except JWTError as e:
            logger.warning(f"Token verification failed: {e}")
            raise

    def decode_principal(self, token: str) -> Principal:
        """Verify a token and return the caller it identifies."""
        return Principal.from_claims(self.verify_token(token))


# Global JWT manager instance
_jwt_manager: Optional[JWTManager] = None


def get_jwt_manager() -> JWTManager:
    """Get or create global JWT manager instance."""
    global _jwt_manager
    if _jwt_manager is None:
        _jwt_manager = JWTManager()
    return _jwt_manager


def create_access_token(account_id: str, username: str, role: Role) -> str:
    """Convenience function to create access token."""
    return get_jwt_manager().create_access_token(account_id, username, role)


def verify_token(token: str) -> Dict[str, Any]:
    """Convenience function to verify token."""
    return get_jwt_manager().verify_token(token)
