"""
==============================================================================
Core Package
==============================================================================

Core utilities and infrastructure for the application.

This package provides:
- Custom exception handling with consistent error responses
- JWT verification for caller tokens
- FastAPI dependencies for caller resolution and authorization

Modules:
--------
- exceptions: AppException class and error factory functions
- security: SecurityManager for token operations
- dependencies: FastAPI dependency injection functions

Usage:
------
    from app.core import get_current_caller, require_admin

    # Or use exception factory functions via module
    from app.core import exceptions
    raise exceptions.product_not_found(product_id)

==============================================================================
"""

from .exceptions import (
    AppException,
    register_exception_handlers,
)
from .security import SecurityManager, TokenStatus, get_security_manager
from .dependencies import (
    CallerResolver,
    get_current_caller,
    require_admin,
)

__all__ = [
    # Exceptions
    "AppException",
    "register_exception_handlers",
    # Security
    "SecurityManager",
    "TokenStatus",
    "get_security_manager",
    # Dependencies
    "CallerResolver",
    "get_current_caller",
    "require_admin",
]
