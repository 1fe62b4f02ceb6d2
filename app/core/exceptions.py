"""
Application Exception Handling

Single AppException class for all application errors with FastAPI integration.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


class AppException(Exception):
    """
    Unified application exception for all error scenarios.

    Provides consistent error response format across the entire API.

    Usage:
        raise AppException("Product doesn't exist", "PRODUCT_NOT_FOUND", 404)

    Error Codes:
        Authentication:
            - TOKEN_EXPIRED (401)
            - TOKEN_INVALID (401)

        Authorization:
            - FORBIDDEN (403)
            - ADMIN_REQUIRED (403)

        Product:
            - PRODUCT_NOT_FOUND (404)
            - MISSING_PRODUCT_FIELDS (400)
            - MISSING_COMMENT_FIELDS (400)
            - MALFORMED_PRODUCT_IDS (400)
            - INVALID_PRODUCT_DATA (400)

        General:
            - VALIDATION_ERROR (400)
            - INTERNAL_ERROR (500)
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None,
        extra: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "PRODUCT_NOT_FOUND")
            status_code: HTTP status code (default: 400)
            details: Additional error context (optional)
            extra: Top-level body fields merged into the response (optional)
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.extra = extra or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        error_dict = {
            **self.extra,
            "success": False,
            "message": self.message,
            "error": {
                "code": self.code,
                "message": self.message,
                "timestamp": self.timestamp
            }
        }

        if self.details:
            error_dict["error"]["details"] = self.details

        return error_dict


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Convert AppException to consistent JSON error response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Report malformed bodies and parameters as 400 validation failures."""
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    logger.warning(f"Validation failed on {request.method} {request.url.path}: {errors}")
    return await app_exception_handler(request, validation_error(errors))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures with detail, answer with a generic 500."""
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=exc
    )
    return await app_exception_handler(request, internal_error())


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def token_expired() -> AppException:
    """Create token expired exception."""
    return AppException("Token has expired", "TOKEN_EXPIRED", 401)


def token_invalid() -> AppException:
    """Create invalid token exception."""
    return AppException("Invalid or malformed token", "TOKEN_INVALID", 401)


def admin_required() -> AppException:
    """Create admin role required exception."""
    return AppException("Admin role required", "ADMIN_REQUIRED", 403)


def product_not_found(product_id: Optional[str] = None) -> AppException:
    """Create product not found exception."""
    details = {"product_id": product_id} if product_id else {}
    return AppException("Product doesn't exist", "PRODUCT_NOT_FOUND", 404, details)


def missing_product_fields(missing: list) -> AppException:
    """Create exception for a create request lacking required fields."""
    return AppException(
        "Please enter all required fields",
        "MISSING_PRODUCT_FIELDS",
        400,
        {"missing": missing}
    )


def missing_comment_fields(missing: list) -> AppException:
    """Create exception for a comment lacking required fields."""
    return AppException(
        "All fields are required for adding a comment",
        "MISSING_COMMENT_FIELDS",
        400,
        {"missing": missing}
    )


def malformed_product_ids() -> AppException:
    """Create exception for an unusable productIds query parameter."""
    return AppException(
        "Query param for products is malformed",
        "MALFORMED_PRODUCT_IDS",
        400,
        extra={"result": [], "total": 0}
    )


def invalid_product_data() -> AppException:
    """Create exception for a product the store refused to create."""
    return AppException("Invalid product data", "INVALID_PRODUCT_DATA", 400)


def validation_error(errors: list) -> AppException:
    """Create request validation exception."""
    return AppException(
        "Request validation failed",
        "VALIDATION_ERROR",
        400,
        {"errors": errors}
    )


def internal_error(message: str = "Internal Server Error") -> AppException:
    """Create internal server error exception."""
    return AppException(message, "INTERNAL_ERROR", 500)
