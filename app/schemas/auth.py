"""
==============================================================================
Caller Schemas Module
==============================================================================

The authenticated caller injected into request handlers.

==============================================================================
"""

import enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class CallerRole(str, enum.Enum):
    """
    Caller role enumeration.

    - ADMIN: May create and update products
    - USER: May browse products and add comments
    """

    ADMIN = "admin"
    USER = "user"

    def __str__(self) -> str:
        return self.value


class CurrentCaller(BaseModel):
    """Authenticated caller derived from a verified access token."""
    id: str = Field(..., min_length=1)
    username: Optional[str] = None
    role: CallerRole = Field(default=CallerRole.USER)

    @property
    def is_admin(self) -> bool:
        """Check if caller has admin role."""
        return self.role == CallerRole.ADMIN

    @classmethod
    def from_token_payload(cls, payload: Dict[str, Any]) -> "CurrentCaller":
        """
        Build a caller from verified token claims.

        Unknown roles are treated as plain users.
        """
        raw_role = str(payload.get("role", "")).lower()
        role = CallerRole.ADMIN if raw_role == CallerRole.ADMIN.value else CallerRole.USER

        return cls(
            id=str(payload["sub"]),
            username=payload.get("username"),
            role=role
        )
