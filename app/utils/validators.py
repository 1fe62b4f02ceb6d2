"""
==============================================================================
Validation Utilities Module
==============================================================================

Validation and normalization helpers for catalog request input.

This module implements:
- ProductIdValidator: Validates product identifiers (UUID strings)
- PaginationNormalizer: Lenient parsing of page / page size query values
- escape_like: Escapes user text for a literal SQL LIKE match

Pagination Rules:
----------------
- page is 1-indexed on the wire; absent, non-numeric or < 1 means
  the first page (internal index 0)
- page size defaults when absent or non-numeric, then is clamped
  to [1, max]
- page indexes are capped so OFFSET + LIMIT fits a signed 64-bit integer

==============================================================================
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple


# Escape character used for LIKE patterns
LIKE_ESCAPE = "\\"

# Largest OFFSET + LIMIT a signed 64-bit SQL integer can hold
MAX_ROW_OFFSET = 2 ** 63 - 1


def escape_like(term: str, escape: str = LIKE_ESCAPE) -> str:
    """
    Escape LIKE wildcards so the term matches literally.

    Example:
        >>> escape_like("50%_off")
        '50\\\\%\\\\_off'
    """
    return (
        term.replace(escape, escape + escape)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )


class ProductIdValidator:
    """
    Validator for product identifiers.

    Identifiers are canonical UUID strings assigned by the store.

    Example:
        >>> validator = ProductIdValidator()
        >>> validator.is_valid("not-an-id")
        False
    """

    def normalize(self, value: str) -> Optional[str]:
        """
        Return the canonical form of an identifier, or None if invalid.

        Args:
            value: Raw identifier input
        """
        if not value:
            return None

        try:
            return str(uuid.UUID(value.strip()))
        except (ValueError, AttributeError, TypeError):
            return None

    def is_valid(self, value: str) -> bool:
        """Quick validation check."""
        return self.normalize(value) is not None

    def parse_many(self, raw_values: Optional[Iterable[str]]) -> Tuple[bool, List[str]]:
        """
        Parse the values of a productIds query parameter.

        Each raw value may itself be a comma-separated list. A parameter
        that is present but empty is a well-formed empty set.

        Args:
            raw_values: All values sent for the parameter, or None if absent

        Returns:
            Tuple of (is_valid, normalized_ids)
            - If valid: (True, [ids...]) with duplicates removed, order kept
            - If invalid: (False, [])
        """
        if raw_values is None:
            return False, []

        ids: List[str] = []
        for raw in raw_values:
            for part in raw.split(","):
                part = part.strip()
                if not part:
                    continue
                normalized = self.normalize(part)
                if normalized is None:
                    return False, []
                if normalized not in ids:
                    ids.append(normalized)

        return True, ids


@dataclass(frozen=True)
class PageRequest:
    """Normalized pagination: 0-based page index and effective page size."""

    index: int
    size: int

    @property
    def offset(self) -> int:
        return self.index * self.size

    def total_pages(self, total: int) -> int:
        """A result smaller than one page still counts as one page."""
        if total < self.size:
            return 1
        return -(-total // self.size)


class PaginationNormalizer:
    """
    Lenient parser for page and page size query values.

    Example:
        >>> PaginationNormalizer(default_size=10, max_size=50).normalize("3", "200")
        PageRequest(index=2, size=50)
    """

    def __init__(self, default_size: int = 10, max_size: int = 50) -> None:
        self._default_size = default_size
        self._max_size = max_size

    @staticmethod
    def _to_int(value: Optional[str]) -> Optional[int]:
        if value is None:
            return None
        try:
            return int(float(str(value).strip()))
        except (ValueError, OverflowError):
            return None

    def normalize(self, page: Optional[str], page_size: Optional[str]) -> PageRequest:
        """
        Normalize raw page and page size values.

        Args:
            page: 1-indexed page number as sent by the client
            page_size: Requested page size as sent by the client

        Returns:
            PageRequest with a 0-based index and a clamped size
        """
        page_number = self._to_int(page)
        index = page_number - 1 if page_number is not None and page_number >= 1 else 0

        size = self._to_int(page_size)
        if size is None:
            size = self._default_size
        size = max(1, min(size, self._max_size))

        # Far-out pages stay empty instead of overflowing the OFFSET bind
        index = min(index, (MAX_ROW_OFFSET - size) // size)

        return PageRequest(index=index, size=size)
