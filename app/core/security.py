"""
==============================================================================
Security Module - Caller Tokens
==============================================================================

JWT handling for the catalog service.

Callers are authenticated by an external identity provider that signs
bearer tokens with the shared JWT_SECRET_KEY. This module verifies those
tokens and, for operators and tests, can mint equivalent ones.

Token Structure:
---------------
{
    "sub": "caller-id",           # Subject (caller ID)
    "username": "john",           # Display name
    "role": "admin|user",         # Caller role
    "type": "access",             # Token type
    "exp": 1234567890,            # Expiration timestamp
    "iat": 1234567890             # Issued at timestamp
}

==============================================================================
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, Optional, Tuple

from jose import ExpiredSignatureError, JWTError, jwt

from app.config import get_settings


# Module logger
logger = logging.getLogger(__name__)


class TokenStatus(str, Enum):
    """Outcome of a token verification."""

    VALID = "valid"
    EXPIRED = "expired"
    INVALID = "invalid"


class SecurityManager:
    """
    Centralized manager for caller token operations.

    Attributes:
        _settings: Application settings reference

    Example:
        >>> security = SecurityManager()
        >>> token = security.create_access_token({"sub": "c-1", "role": "admin"})
        >>> status, payload = security.verify_token(token)
        >>> payload["role"]
        'admin'
    """

    TOKEN_TYPE_ACCESS = "access"

    def __init__(self) -> None:
        self._settings = get_settings()
        logger.debug("SecurityManager initialized")

    # =========================================================================
    # JWT TOKEN CREATION
    # =========================================================================

    def create_access_token(
        self,
        data: Dict[str, Any],
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """
        Create a JWT access token.

        Args:
            data: Payload data (must include 'sub' for the caller ID)
            expires_delta: Custom expiration time (optional)

        Returns:
            Encoded JWT access token string
        """
        payload = data.copy()

        now = datetime.now(timezone.utc)
        expire = now + (
            expires_delta
            or timedelta(minutes=self._settings.access_token_expire_minutes)
        )

        payload.update({
            "type": self.TOKEN_TYPE_ACCESS,
            "exp": expire,
            "iat": now
        })

        encoded_token = jwt.encode(
            payload,
            self._settings.jwt_secret_key,
            algorithm=self._settings.jwt_algorithm
        )

        logger.debug(f"Created access token, expires: {expire.isoformat()}")

        return encoded_token

    # =========================================================================
    # JWT TOKEN VERIFICATION
    # =========================================================================

    def verify_token(
        self,
        token: str,
        token_type: str = TOKEN_TYPE_ACCESS
    ) -> Tuple[TokenStatus, Optional[Dict[str, Any]]]:
        """
        Verify and decode a JWT token.

        Validates the signature, the expiration and the token type.

        Args:
            token: The JWT token string to verify
            token_type: Expected token type

        Returns:
            (status, payload); payload is None unless status is VALID
        """
        try:
            payload = jwt.decode(
                token,
                self._settings.jwt_secret_key,
                algorithms=[self._settings.jwt_algorithm]
            )
        except ExpiredSignatureError:
            logger.debug("Token verification failed: token expired")
            return TokenStatus.EXPIRED, None
        except JWTError as e:
            logger.warning(f"Token verification failed: {e}")
            return TokenStatus.INVALID, None

        if payload.get("type") != token_type:
            logger.warning(
                f"Token type mismatch: expected {token_type}, "
                f"got {payload.get('type')}"
            )
            return TokenStatus.INVALID, None

        return TokenStatus.VALID, payload


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_security_manager() -> SecurityManager:
    """Get the global SecurityManager instance."""
    return SecurityManager()
