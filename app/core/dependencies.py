"""
==============================================================================
FastAPI Dependencies Module
==============================================================================

Dependency injection for caller resolution and authorization.

This module implements:
- CallerResolver: Turns a bearer token into a CurrentCaller
- FastAPI dependencies for route protection

Dependency Hierarchy:
--------------------
        ┌──────────────────────┐
        │ get_current_caller   │
        └──────────┬───────────┘
                   │
        ┌──────────▼───────────┐
        │    require_admin     │
        └──────────────────────┘

Usage Examples:
--------------
    # Require any authenticated caller
    @router.get("/{product_id}")
    async def get_product(caller: CurrentCaller = Depends(get_current_caller)):
        ...

    # Require admin role
    @router.post("/create")
    async def create_product(admin: CurrentCaller = Depends(require_admin)):
        ...

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core import exceptions
from app.core.security import SecurityManager, TokenStatus, get_security_manager
from app.schemas.auth import CurrentCaller


# Module logger
logger = logging.getLogger(__name__)

# HTTP Bearer security scheme for Swagger UI
security_scheme = HTTPBearer(auto_error=False)


class CallerResolver:
    """
    Resolves the current caller from request credentials.

    Example:
        >>> resolver = CallerResolver(get_security_manager())
        >>> caller = resolver.resolve(credentials)
        >>> resolver.require_admin(caller)
    """

    def __init__(self, security: SecurityManager) -> None:
        self._security = security

    def extract_token(self, credentials: Optional[HTTPAuthorizationCredentials]) -> str:
        """
        Extract the JWT from the Authorization header.

        Raises:
            AppException: TOKEN_INVALID if no credentials were sent
        """
        if not credentials or not credentials.credentials:
            logger.debug("No authorization credentials provided")
            raise exceptions.token_invalid()

        return credentials.credentials

    def resolve(self, credentials: Optional[HTTPAuthorizationCredentials]) -> CurrentCaller:
        """
        Verify the bearer token and build the caller.

        Raises:
            AppException: TOKEN_EXPIRED or TOKEN_INVALID
        """
        token = self.extract_token(credentials)
        status, payload = self._security.verify_token(token)

        if status == TokenStatus.EXPIRED:
            raise exceptions.token_expired()

        if status != TokenStatus.VALID or not payload or not payload.get("sub"):
            logger.warning("Rejected caller token")
            raise exceptions.token_invalid()

        caller = CurrentCaller.from_token_payload(payload)
        logger.debug(f"Caller authenticated: {caller.id} ({caller.role.value})")
        return caller

    def require_admin(self, caller: CurrentCaller) -> CurrentCaller:
        """
        Require caller to have the admin role.

        Raises:
            AppException: ADMIN_REQUIRED if the caller is not an admin
        """
        if not caller.is_admin:
            logger.warning(f"Admin check failed for caller {caller.id}")
            raise exceptions.admin_required()
        return caller


# =============================================================================
# FASTAPI DEPENDENCY FUNCTIONS
# =============================================================================

async def get_current_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme)
) -> CurrentCaller:
    """
    FastAPI dependency to get the current authenticated caller.

    Raises:
        AppException: If the token is missing, invalid or expired
    """
    return CallerResolver(get_security_manager()).resolve(credentials)


async def require_admin(
    caller: CurrentCaller = Depends(get_current_caller)
) -> CurrentCaller:
    """
    FastAPI dependency requiring the admin role.

    Raises:
        AppException: If the caller is not an admin
    """
    return CallerResolver(get_security_manager()).require_admin(caller)
