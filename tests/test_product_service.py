"""
==============================================================================
Product Service Tests
==============================================================================

Tests for catalog business rules against an in-memory repository.

==============================================================================
"""

import uuid
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Sequence

import pytest

from app.core.exceptions import AppException
from app.repositories.product_repository import ProductRepository
from app.schemas.product import CommentCreate, ProductCreate, ProductUpdate
from app.services.product_service import ProductService


class InMemoryProductRepository(ProductRepository):
    """Dict-backed repository recording the title terms it was asked for."""

    def __init__(self) -> None:
        self.products: Dict[str, SimpleNamespace] = {}
        self.last_terms: Optional[List[str]] = None
        self._clock = 0

    def add(self, title: str, **fields: Any) -> SimpleNamespace:
        self._clock += 1
        product = SimpleNamespace(
            id=str(uuid.uuid4()),
            title=title,
            description=None,
            price=None,
            discount_percentage=None,
            stock=None,
            brand=None,
            category=None,
            images=[],
            specifications={},
            comments=[],
            created_at=self._clock,
        )
        for name, value in fields.items():
            setattr(product, name, value)
        product.comment_count = len(product.comments)
        self.products[product.id] = product
        return product

    def _matching(self, title_terms: Sequence[str]) -> List[SimpleNamespace]:
        terms = [t.lower() for t in title_terms if t]
        matches = [
            p for p in self.products.values()
            if not terms or any(t in (p.title or "").lower() for t in terms)
        ]
        return sorted(matches, key=lambda p: p.id)

    def distinct_titles(self) -> List[str]:
        return sorted({p.title for p in self.products.values() if p.title})

    def search(self, title_terms, offset, limit):
        self.last_terms = list(title_terms)
        return self._matching(title_terms)[offset:offset + limit]

    def count(self, title_terms):
        return len(self._matching(title_terms))

    def get(self, product_id):
        return self.products.get(product_id)

    def get_many(self, product_ids):
        found = [self.products[i] for i in product_ids if i in self.products]
        return sorted(found, key=lambda p: p.created_at, reverse=True)

    def create(self, fields):
        return self.add(**fields)

    def update(self, product_id, fields):
        product = self.products.get(product_id)
        if product is None:
            return None
        for name, value in fields.items():
            setattr(product, name, value)
        return product

    def append_comment(self, product_id, comment):
        product = self.products.get(product_id)
        if product is None:
            return None
        product.comments = [*product.comments, comment]
        product.comment_count = len(product.comments)
        return product


class StaticSuggester:
    """Suggester returning a fixed answer and recording its calls."""

    def __init__(self, suggestions: List[str]) -> None:
        self.suggestions = suggestions
        self.calls = []

    def suggest(self, query, candidates, limit):
        self.calls.append((query, list(candidates), limit))
        return self.suggestions[:limit]


@pytest.fixture
def repository() -> InMemoryProductRepository:
    return InMemoryProductRepository()


@pytest.fixture
def service(repository: InMemoryProductRepository) -> ProductService:
    return ProductService(repository)


class TestSearchProducts:
    """Tests for search and pagination."""

    def test_defaults(self, service: ProductService, repository):
        """Test first page with the default size."""
        for i in range(12):
            repository.add(f"Product {i}")
        page = service.search_products()
        assert page.page.index == 0
        assert page.page.size == 10
        assert len(page.products) == 10
        assert page.total == 12
        assert page.pages == 2

    def test_suggestions_extend_terms(self, repository):
        """Test suggested titles are searched alongside the literal term."""
        repository.add("iPhone 9")
        suggester = StaticSuggester(["iPhone 9"])
        service = ProductService(repository, suggester=suggester)

        page = service.search_products(search="  iphnoe ")

        assert page.suggestions == ["iPhone 9"]
        assert repository.last_terms == ["iphnoe", "iPhone 9"]
        assert suggester.calls[0][0] == "iphnoe"
        assert suggester.calls[0][2] == 3
        assert [p.title for p in page.products] == ["iPhone 9"]

    def test_without_suggestions(self, repository):
        """Test the lightweight variant never consults the suggester."""
        suggester = StaticSuggester(["iPhone 9"])
        service = ProductService(repository, suggester=suggester)

        page = service.search_products(search="iphnoe", with_suggestions=False)

        assert suggester.calls == []
        assert page.suggestions == []
        assert repository.last_terms == ["iphnoe"]

    def test_blank_search_matches_all(self, service: ProductService, repository):
        """Test whitespace-only search is treated as no search."""
        repository.add("iPhone 9")
        repository.add("MacBook Pro")
        page = service.search_products(search="   ")
        assert page.total == 2
        assert repository.last_terms == []

    def test_store_failure(self, service: ProductService, repository, monkeypatch):
        """Test any repository failure becomes an internal error."""
        def broken(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(repository, "count", broken)

        with pytest.raises(AppException) as exc_info:
            service.search_products()

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Internal Server Error"


class TestGetProductsByIds:
    """Tests for batch fetch."""

    def test_absent_parameter(self, service: ProductService):
        with pytest.raises(AppException) as exc_info:
            service.get_products_by_ids(None)
        assert exc_info.value.status_code == 400
        assert exc_info.value.code == "MALFORMED_PRODUCT_IDS"

    def test_newest_first(self, service: ProductService, repository):
        older = repository.add("Older")
        newer = repository.add("Newer")
        products = service.get_products_by_ids([older.id, newer.id])
        assert [p.title for p in products] == ["Newer", "Older"]

    def test_empty_set(self, service: ProductService):
        assert service.get_products_by_ids([""]) == []


class TestCreateProduct:
    """Tests for product creation rules."""

    def test_create(self, service: ProductService):
        data = ProductCreate(
            title="Galaxy S21",
            description="Samsung flagship",
            price=799,
            brand="Samsung",
            category="smartphones"
        )
        product = service.create_product(data)
        assert product.title == "Galaxy S21"
        assert product.comments == []
        assert product.images == []
        assert product.specifications == {}

    def test_blank_title_is_missing(self, service: ProductService):
        data = ProductCreate(
            title="   ",
            description="Samsung flagship",
            price=799,
            brand="Samsung",
            category="smartphones"
        )
        with pytest.raises(AppException) as exc_info:
            service.create_product(data)
        assert exc_info.value.status_code == 400
        assert exc_info.value.details == {"missing": ["title"]}


class TestUpdateProduct:
    """Tests for the full-overwrite update."""

    def test_omitted_fields_cleared(self, service: ProductService, repository):
        product = repository.add(
            "iPhone 9",
            description="Old",
            brand="Apple",
            images=["a.jpg"],
            comments=[{"comment": "kept"}]
        )
        updated = service.update_product(product.id, ProductUpdate(title="iPhone 9S"))
        assert updated.title == "iPhone 9S"
        assert updated.description is None
        assert updated.brand is None
        assert updated.images == ["a.jpg"]
        assert updated.comments == [{"comment": "kept"}]

    def test_unknown_product(self, service: ProductService):
        with pytest.raises(AppException) as exc_info:
            service.update_product(str(uuid.uuid4()), ProductUpdate(title="x"))
        assert exc_info.value.status_code == 404


class TestAddComment:
    """Tests for comment append rules."""

    def test_appends_with_date(self, service: ProductService, repository):
        product = repository.add("iPhone 9", comments=[{"comment": "first"}])
        data = CommentCreate(
            comment="second",
            rating=4,
            reviewer_name="Sam",
            reviewer_email="sam@example.com"
        )
        updated = service.add_comment(product.id, data)
        assert [c["comment"] for c in updated.comments] == ["first", "second"]
        assert updated.comments[-1]["reviewerName"] == "Sam"
        assert "date" in updated.comments[-1]

    def test_zero_rating_is_missing(self, service: ProductService, repository):
        product = repository.add("iPhone 9")
        data = CommentCreate(
            comment="meh",
            rating=0,
            reviewer_name="Sam",
            reviewer_email="sam@example.com"
        )
        with pytest.raises(AppException) as exc_info:
            service.add_comment(product.id, data)
        assert exc_info.value.code == "MISSING_COMMENT_FIELDS"
        assert repository.products[product.id].comments == []

    def test_malformed_id(self, service: ProductService):
        data = CommentCreate(
            comment="hi",
            rating=5,
            reviewer_name="Sam",
            reviewer_email="sam@example.com"
        )
        with pytest.raises(AppException) as exc_info:
            service.add_comment("not-a-uuid", data)
        assert exc_info.value.status_code == 404
