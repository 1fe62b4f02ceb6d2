"""
==============================================================================
Utilities Package
==============================================================================

Utility classes and functions for the application.

Modules:
--------
- validators: Identifier validation, pagination normalization, LIKE escaping

==============================================================================
"""

from .validators import (
    LIKE_ESCAPE,
    MAX_ROW_OFFSET,
    PageRequest,
    PaginationNormalizer,
    ProductIdValidator,
    escape_like,
)

__all__ = [
    "LIKE_ESCAPE",
    "MAX_ROW_OFFSET",
    "PageRequest",
    "PaginationNormalizer",
    "ProductIdValidator",
    "escape_like",
]
