"""
==============================================================================
Product Schemas Module
==============================================================================

Request and response schemas for catalog operations.

Wire names are camelCase (discountPercentage, reviewerName, createdAt);
Python attributes stay snake_case. Request schemas accept either form.

Required-field checks for create and comment requests are done by the
service so that a missing field is reported as a 400 with the catalog's
own message instead of a generic validation error.

==============================================================================
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema using camelCase aliases on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class ProductUpdate(CamelModel):
    """
    Editable product fields.

    Every field is written on update; an omitted field becomes null.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    discount_percentage: Optional[float] = None
    stock: Optional[int] = None
    brand: Optional[str] = None
    category: Optional[str] = None


class ProductCreate(ProductUpdate):
    """Product creation request."""
    images: Optional[List[str]] = None
    specifications: Optional[Dict[str, Any]] = None


class CommentCreate(CamelModel):
    """Review comment submitted by a caller. The date is assigned server-side."""
    comment: Optional[str] = None
    rating: Optional[float] = None
    reviewer_name: Optional[str] = None
    reviewer_email: Optional[str] = None


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class CommentDetail(CamelModel):
    """Stored review comment."""
    comment: str
    rating: float
    reviewer_name: str
    reviewer_email: str
    date: datetime


class ProductBrief(CamelModel):
    """Lightweight product entry for the brief listing."""
    id: str
    title: Optional[str] = None
    price: Optional[float] = None
    discount_percentage: Optional[float] = None
    stock: Optional[int] = None


class ProductSummary(ProductBrief):
    """Product entry for search results (no comments, specs or timestamps)."""
    description: Optional[str] = None
    brand: Optional[str] = None
    category: Optional[str] = None
    images: List[str] = Field(default_factory=list)


class ProductDetail(ProductSummary):
    """Full product document."""
    specifications: Dict[str, Any] = Field(default_factory=dict)
    comments: List[CommentDetail] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        """SQLite drops the offset; stored timestamps are UTC."""
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class ProductBriefListResponse(CamelModel):
    """Paginated brief listing."""
    result: List[ProductBrief]
    page: int = Field(ge=0, description="0-based page index")
    products_per_page: int = Field(ge=1)
    total: int = Field(ge=0)
    pages: int = Field(ge=1)


class ProductListResponse(ProductBriefListResponse):
    """Paginated search results with spelling suggestions."""
    result: List[ProductSummary]
    suggestions: List[str] = Field(default_factory=list)


class ProductBatchResponse(CamelModel):
    """Products fetched by identifier set."""
    result: List[ProductDetail]
    total: int = Field(ge=0)
    message: Optional[str] = None


class ProductMutationResponse(CamelModel):
    """Outcome of a create or comment request."""
    message: str
    product: ProductDetail
