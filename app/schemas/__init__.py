"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Request and response schemas using Pydantic for validation.

This package provides:
- Common: Shared response schemas
- Auth: The injected current caller
- Product: Catalog request/response schemas

==============================================================================
"""

from .common import HealthResponse
from .auth import CallerRole, CurrentCaller
from .product import (
    CommentCreate,
    CommentDetail,
    ProductBatchResponse,
    ProductBrief,
    ProductBriefListResponse,
    ProductCreate,
    ProductDetail,
    ProductListResponse,
    ProductMutationResponse,
    ProductSummary,
    ProductUpdate,
)

__all__ = [
    # Common
    "HealthResponse",
    # Auth
    "CallerRole",
    "CurrentCaller",
    # Product
    "CommentCreate",
    "CommentDetail",
    "ProductBatchResponse",
    "ProductBrief",
    "ProductBriefListResponse",
    "ProductCreate",
    "ProductDetail",
    "ProductListResponse",
    "ProductMutationResponse",
    "ProductSummary",
    "ProductUpdate",
]
