"""
==============================================================================
Product Service Module
==============================================================================

Business logic for the product catalog.

This module implements:
- ProductService: search/list, batch and single fetch, create, update,
  and comment append
- ProductPage: one page of search results
- get_product_service: request-scoped FastAPI dependency

Search Flow:
-----------
    ┌──────────────┐
    │ page / size  │ → normalized (first page, size clamped to [1, max])
    └──────┬───────┘
           │
    ┌──────▼───────┐     ┌─────────────────────┐
    │ search text? │────▶│ suggester over all  │ (suggestion variant only)
    └──────┬───────┘     │ distinct titles     │
           │             └──────────┬──────────┘
    ┌──────▼──────────────────────▼─┐
    │ title ~ term OR ~ suggestions │ (literal, case-insensitive)
    └──────┬────────────────────────┘
           │
    ┌──────▼───────┐
    │ sort by id,  │
    │ page, count  │
    └──────────────┘

All persistence goes through a ProductRepository; the service itself does
no locking, retrying or transaction management beyond what the
repository provides.

==============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.catalog.suggestions import SequenceMatcherSuggester, TitleSuggester
from app.config import Settings, get_settings
from app.core import exceptions
from app.db.database import get_db
from app.db.models import Product
from app.repositories.product_repository import ProductRepository, SqlProductRepository
from app.schemas.product import CommentCreate, ProductCreate, ProductUpdate
from app.utils.validators import PageRequest, PaginationNormalizer, ProductIdValidator


# Module logger
logger = logging.getLogger(__name__)


# Fields overwritten by an update, in wire order
EDITABLE_FIELDS = (
    "title",
    "description",
    "price",
    "discount_percentage",
    "stock",
    "brand",
    "category",
)

REQUIRED_CREATE_FIELDS = ("title", "description", "price", "brand", "category")

REQUIRED_COMMENT_FIELDS = ("comment", "rating", "reviewer_name", "reviewer_email")


def _missing_fields(data: Dict[str, Any], required: Iterable[str]) -> List[str]:
    """Names of required fields that are absent, zero, or blank."""
    missing = []
    for name in required:
        value = data.get(name)
        if isinstance(value, str):
            value = value.strip()
        if not value:
            missing.append(name)
    return missing


@dataclass
class ProductPage:
    """One page of search results."""

    products: List[Product]
    page: PageRequest
    total: int
    suggestions: List[str] = field(default_factory=list)

    @property
    def pages(self) -> int:
        return self.page.total_pages(self.total)


class ProductService:
    """
    Catalog operations over a ProductRepository.

    Attributes:
        _repository: Product data access
        _suggester: Title suggester used by the suggestion search variant
        _settings: Application settings

    Example:
        >>> service = ProductService(SqlProductRepository(db))
        >>> page = service.search_products(search="iphnoe")
        >>> page.suggestions
        ['iPhone 9']
    """

    def __init__(
        self,
        repository: ProductRepository,
        suggester: Optional[TitleSuggester] = None,
        settings: Optional[Settings] = None
    ) -> None:
        self._repository = repository
        self._settings = settings or get_settings()
        self._suggester = suggester or SequenceMatcherSuggester(
            threshold=self._settings.suggestion_threshold
        )
        self._pagination = PaginationNormalizer(
            default_size=self._settings.products_per_page_default,
            max_size=self._settings.products_per_page_max
        )
        self._id_validator = ProductIdValidator()

    # =========================================================================
    # SEARCH / LIST
    # =========================================================================

    def search_products(
        self,
        search: Optional[str] = None,
        page: Optional[str] = None,
        products_per_page: Optional[str] = None,
        with_suggestions: bool = True
    ) -> ProductPage:
        """
        Search and paginate the catalog.

        Args:
            search: Free text matched against titles (optional)
            page: 1-indexed page number as sent by the client
            products_per_page: Requested page size as sent by the client
            with_suggestions: Also match the closest known titles

        Returns:
            ProductPage for the normalized page

        Raises:
            AppException: INTERNAL_ERROR on any unexpected failure
        """
        page_request = self._pagination.normalize(page, products_per_page)
        term = search.strip() if search else ""

        try:
            suggestions: List[str] = []
            if term and with_suggestions:
                suggestions = self._suggester.suggest(
                    term,
                    self._repository.distinct_titles(),
                    self._settings.suggestion_limit
                )

            title_terms = [term, *suggestions] if term else []

            products = self._repository.search(
                title_terms,
                offset=page_request.offset,
                limit=page_request.size
            )
            total = self._repository.count(title_terms)

        except Exception as e:
            logger.error(f"Product search failed: {e}", exc_info=True)
            raise exceptions.internal_error()

        logger.debug(
            f"Search {term!r}: page={page_request.index} size={page_request.size} "
            f"total={total} suggestions={suggestions}"
        )

        return ProductPage(
            products=products,
            page=page_request,
            total=total,
            suggestions=suggestions
        )

    # =========================================================================
    # FETCH
    # =========================================================================

    def get_products_by_ids(self, raw_ids: Optional[List[str]]) -> List[Product]:
        """
        Fetch all products in an identifier set, newest first.

        Args:
            raw_ids: Raw values of the productIds parameter, None if absent

        Returns:
            Matching products (possibly empty)

        Raises:
            AppException: MALFORMED_PRODUCT_IDS if the parameter is absent
                or contains an invalid identifier
        """
        is_valid, product_ids = self._id_validator.parse_many(raw_ids)

        if not is_valid:
            logger.warning(f"Malformed productIds parameter: {raw_ids!r}")
            raise exceptions.malformed_product_ids()

        return self._repository.get_many(product_ids)

    def get_product(self, product_id: str) -> Product:
        """
        Fetch a single product.

        Raises:
            AppException: PRODUCT_NOT_FOUND if no product has this id
        """
        normalized = self._id_validator.normalize(product_id)
        product = self._repository.get(normalized) if normalized else None

        if product is None:
            logger.warning(f"Product not found: {product_id}")
            raise exceptions.product_not_found(product_id)

        return product

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def update_product(self, product_id: str, data: ProductUpdate) -> Product:
        """
        Overwrite all editable fields of a product.

        Fields omitted from the request are written as null. Comments,
        images, specifications and the identifier are left untouched.

        Raises:
            AppException: PRODUCT_NOT_FOUND if no product has this id
        """
        values = data.model_dump()
        fields = {name: values.get(name) for name in EDITABLE_FIELDS}

        normalized = self._id_validator.normalize(product_id)
        product = self._repository.update(normalized, fields) if normalized else None

        if product is None:
            logger.warning(f"Update failed, product not found: {product_id}")
            raise exceptions.product_not_found(product_id)

        logger.info(f"Product updated: {product.id}")
        return product

    def create_product(self, data: ProductCreate) -> Product:
        """
        Create a product with an empty comment list.

        Raises:
            AppException: MISSING_PRODUCT_FIELDS if a required field is missing
            AppException: INVALID_PRODUCT_DATA if the store rejects the product
        """
        values = data.model_dump()
        missing = _missing_fields(values, REQUIRED_CREATE_FIELDS)

        if missing:
            logger.warning(f"Product creation rejected, missing: {missing}")
            raise exceptions.missing_product_fields(missing)

        fields = {name: values.get(name) for name in EDITABLE_FIELDS}
        fields["images"] = values.get("images") or []
        fields["specifications"] = values.get("specifications") or {}

        try:
            product = self._repository.create(fields)
        except SQLAlchemyError as e:
            logger.error(f"Product creation failed: {e}")
            raise exceptions.invalid_product_data()

        logger.info(f"✅ Product created: {product.id} ({product.title})")
        return product

    def add_comment(self, product_id: str, data: CommentCreate) -> Product:
        """
        Append a review comment to a product.

        The comment date is assigned here; prior comments keep their order.

        Raises:
            AppException: MISSING_COMMENT_FIELDS if a required field is missing
            AppException: PRODUCT_NOT_FOUND if no product has this id
        """
        values = data.model_dump()
        missing = _missing_fields(values, REQUIRED_COMMENT_FIELDS)

        if missing:
            logger.warning(f"Comment rejected, missing: {missing}")
            raise exceptions.missing_comment_fields(missing)

        comment = {
            "comment": data.comment,
            "rating": data.rating,
            "reviewerName": data.reviewer_name,
            "reviewerEmail": data.reviewer_email,
            "date": datetime.now(timezone.utc).isoformat(),
        }

        normalized = self._id_validator.normalize(product_id)
        product = (
            self._repository.append_comment(normalized, comment)
            if normalized else None
        )

        if product is None:
            logger.warning(f"Comment rejected, product not found: {product_id}")
            raise exceptions.product_not_found(product_id)

        logger.info(f"Comment added to {product.id} ({product.comment_count} total)")
        return product


# =============================================================================
# FASTAPI DEPENDENCY
# =============================================================================

def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    """FastAPI dependency providing a ProductService bound to the request session."""
    return ProductService(SqlProductRepository(db))
