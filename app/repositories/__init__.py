"""
==============================================================================
Repositories Package - Data Access Layer
==============================================================================

Storage-agnostic repository interface and its SQLAlchemy implementation.

==============================================================================
"""

from .product_repository import ProductRepository, SqlProductRepository

__all__ = [
    "ProductRepository",
    "SqlProductRepository",
]
