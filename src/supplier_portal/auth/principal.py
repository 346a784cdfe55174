"""
Caller identity extracted from an access token.
"""

import enum
from dataclasses import dataclass
from typing import Any, Dict
from uuid import UUID

from supplier_portal.utils.exceptions import InvalidTokenError


class Role(str, enum.Enum):
    """Account types that can hold a token."""
    ADMIN = "admin"
    TENANT = "tenant"


@dataclass(frozen=True)
class Principal:
    """Authenticated caller: role plus the id and username of its account."""

    role: Role
    account_id: UUID
    username: str

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @property
    def is_tenant(self) -> bool:
        return self.role is Role.TENANT

    @classmethod
    def from_claims(cls, payload: Dict[str, Any]) -> "Principal":
        """
        Build a principal from verified token claims.

        Raises:
            InvalidTokenError: If a claim is missing or the role is unknown
        """
        try:
            role = Role(payload.get("role"))
            account_id = UUID(str(payload.get("sub")))
        except ValueError:
            raise InvalidTokenError("Invalid token.")

        username = payload.get("username")
        if not username:
            raise InvalidTokenError("Invalid token.")

        return cls(role=role, account_id=account_id, username=username)
