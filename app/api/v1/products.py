"""
==============================================================================
Product Catalog Endpoints
==============================================================================

Endpoints for searching, fetching and editing the product catalog.

Routes:
-------
    GET  /products                      search with spelling suggestions
    GET  /products/brief                lightweight search, no suggestions
    GET  /products/by-ids               batch fetch by identifier set
    GET  /products/{product_id}         single product
    PUT  /products/{product_id}         overwrite editable fields (admin)
    POST /products/{product_id}/comments
    POST /products/create               new product (admin)

Static paths are registered before /{product_id} so they are not captured
as identifiers.

==============================================================================
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request

from app.core.dependencies import get_current_caller, require_admin
from app.schemas.auth import CurrentCaller
from app.schemas.product import (
    CommentCreate,
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
from app.services.product_service import ProductService, get_product_service


router = APIRouter(prefix="/products", tags=["Products"])


# Accepted spellings of the batch identifier parameter
PRODUCT_IDS_KEYS = ("productIds", "productIds[]")


class ProductController:
    """Controller for product catalog operations."""

    def __init__(self, service: ProductService):
        self._service = service

    def search(
        self,
        search: Optional[str],
        page: Optional[str],
        products_per_page: Optional[str]
    ) -> ProductListResponse:
        """Search with suggestions."""
        result = self._service.search_products(search, page, products_per_page)

        return ProductListResponse(
            result=[ProductSummary.model_validate(p) for p in result.products],
            page=result.page.index,
            products_per_page=result.page.size,
            total=result.total,
            pages=result.pages,
            suggestions=result.suggestions
        )

    def search_brief(
        self,
        search: Optional[str],
        page: Optional[str],
        products_per_page: Optional[str]
    ) -> ProductBriefListResponse:
        """Literal title search with the lightweight projection."""
        result = self._service.search_products(
            search, page, products_per_page, with_suggestions=False
        )

        return ProductBriefListResponse(
            result=[ProductBrief.model_validate(p) for p in result.products],
            page=result.page.index,
            products_per_page=result.page.size,
            total=result.total,
            pages=result.pages
        )

    def get_by_ids(self, raw_ids: Optional[List[str]]) -> ProductBatchResponse:
        """Batch fetch."""
        products = self._service.get_products_by_ids(raw_ids)

        if not products:
            return ProductBatchResponse(result=[], total=0, message="No products found")

        return ProductBatchResponse(
            result=[ProductDetail.model_validate(p) for p in products],
            total=len(products)
        )

    def get_product(self, product_id: str) -> ProductDetail:
        product = self._service.get_product(product_id)
        return ProductDetail.model_validate(product)

    def update_product(self, product_id: str, data: ProductUpdate) -> ProductDetail:
        product = self._service.update_product(product_id, data)
        return ProductDetail.model_validate(product)

    def add_comment(self, product_id: str, data: CommentCreate) -> ProductMutationResponse:
        product = self._service.add_comment(product_id, data)
        return ProductMutationResponse(
            message="Comment added successfully",
            product=ProductDetail.model_validate(product)
        )

    def create_product(self, data: ProductCreate) -> ProductMutationResponse:
        product = self._service.create_product(data)
        return ProductMutationResponse(
            message="Product was created successfully",
            product=ProductDetail.model_validate(product)
        )


def _raw_product_ids(request: Request) -> Optional[List[str]]:
    """Collect productIds values; None when the parameter is absent."""
    params = request.query_params
    if not any(key in params for key in PRODUCT_IDS_KEYS):
        return None

    values: List[str] = []
    for key in PRODUCT_IDS_KEYS:
        values.extend(params.getlist(key))
    return values


# =============================================================================
# SEARCH
# =============================================================================

@router.get("", response_model=ProductListResponse)
async def search_products(
    search: Optional[str] = Query(None, description="Free text matched against titles"),
    page: Optional[str] = Query(None, description="1-indexed page number"),
    products_per_page: Optional[str] = Query(None, alias="productsPerPage"),
    caller: CurrentCaller = Depends(get_current_caller),
    service: ProductService = Depends(get_product_service)
):
    """
    Search the catalog.

    Matches titles containing the search text or any of the closest known
    titles, which are returned as `suggestions`.
    """
    controller = ProductController(service)
    return controller.search(search, page, products_per_page)


@router.get("/brief", response_model=ProductBriefListResponse)
async def search_products_brief(
    search: Optional[str] = Query(None, description="Free text matched against titles"),
    page: Optional[str] = Query(None, description="1-indexed page number"),
    products_per_page: Optional[str] = Query(None, alias="productsPerPage"),
    caller: CurrentCaller = Depends(get_current_caller),
    service: ProductService = Depends(get_product_service)
):
    """Search the catalog without suggestions, returning brief entries."""
    controller = ProductController(service)
    return controller.search_brief(search, page, products_per_page)


@router.get(
    "/by-ids",
    response_model=ProductBatchResponse,
    response_model_exclude_none=True
)
async def get_products_by_ids(
    request: Request,
    caller: CurrentCaller = Depends(get_current_caller),
    service: ProductService = Depends(get_product_service)
):
    """
    Fetch products by identifier, newest first.

    Accepts `productIds=a&productIds=b`, `productIds[]=a` or a comma
    separated `productIds=a,b`.
    """
    controller = ProductController(service)
    return controller.get_by_ids(_raw_product_ids(request))


# =============================================================================
# CREATE
# =============================================================================

@router.post("/create", response_model=ProductMutationResponse)
async def create_product(
    data: ProductCreate,
    admin: CurrentCaller = Depends(require_admin),
    service: ProductService = Depends(get_product_service)
):
    """Create a product. Admin only."""
    controller = ProductController(service)
    return controller.create_product(data)


# =============================================================================
# SINGLE PRODUCT
# =============================================================================

@router.get("/{product_id}", response_model=ProductDetail)
async def get_product(
    product_id: str,
    caller: CurrentCaller = Depends(get_current_caller),
    service: ProductService = Depends(get_product_service)
):
    """Get a single product with its comments."""
    controller = ProductController(service)
    return controller.get_product(product_id)


@router.put("/{product_id}", response_model=ProductDetail)
async def update_product(
    product_id: str,
    data: ProductUpdate,
    admin: CurrentCaller = Depends(require_admin),
    service: ProductService = Depends(get_product_service)
):
    """
    Overwrite the editable fields of a product. Admin only.

    Omitted fields are cleared; comments, images and specifications are kept.
    """
    controller = ProductController(service)
    return controller.update_product(product_id, data)


@router.post("/{product_id}/comments", response_model=ProductMutationResponse)
async def add_comment(
    product_id: str,
    data: CommentCreate,
    caller: CurrentCaller = Depends(get_current_caller),
    service: ProductService = Depends(get_product_service)
):
    """Append a review comment to a product."""
    controller = ProductController(service)
    return controller.add_comment(product_id, data)
