"""
==============================================================================
Title Suggestion Module
==============================================================================

Spelling-correction suggestions for catalog search.

A suggester receives the search text and the known product titles and
returns the closest titles, best first. The service depends only on the
TitleSuggester protocol; SequenceMatcherSuggester is the default
implementation.

Scoring:
--------
    score = max(ratio(query, title), partial_ratio(query, title))

- ratio: difflib similarity of the whole strings (0.0 - 1.0)
- partial_ratio: best similarity between the query and any window of the
  title of the same length, so "iphnoe" still scores well against
  "iPhone 9"; only used when the query is shorter than the title

Comparison is case-insensitive. Titles scoring below the threshold are
dropped.

==============================================================================
"""

from __future__ import annotations

import logging
from difflib import SequenceMatcher
from typing import Iterable, List, Protocol, Tuple


# Module logger
logger = logging.getLogger(__name__)


class TitleSuggester(Protocol):
    """Capability: suggest(query, candidates, limit) -> ordered matches."""

    def suggest(self, query: str, candidates: Iterable[str], limit: int) -> List[str]:
        ...


class SequenceMatcherSuggester:
    """
    Edit-distance tolerant suggester built on difflib.SequenceMatcher.

    Attributes:
        threshold: Minimum score (0.0 - 1.0) for a title to be suggested

    Example:
        >>> suggester = SequenceMatcherSuggester(threshold=0.7)
        >>> suggester.suggest("iphnoe", ["iPhone 9", "Samsung Universe 9"], 3)
        ['iPhone 9']
    """

    def __init__(self, threshold: float = 0.7) -> None:
        if not 0.0 <= threshold <= 1.0:
            raise ValueError("threshold must be between 0 and 1")
        self.threshold = threshold

    # =========================================================================
    # SCORING
    # =========================================================================

    @staticmethod
    def _ratio(a: str, b: str) -> float:
        return SequenceMatcher(None, a, b, autojunk=False).ratio()

    @classmethod
    def _partial_ratio(cls, shorter: str, longer: str) -> float:
        """Best ratio between `shorter` and same-length windows of `longer`."""
        matcher = SequenceMatcher(None, shorter, longer, autojunk=False)
        best = 0.0

        for block in matcher.get_matching_blocks():
            start = max(block.b - block.a, 0)
            window = longer[start:start + len(shorter)]
            best = max(best, cls._ratio(shorter, window))
            if best == 1.0:
                break

        return best

    def score(self, query: str, candidate: str) -> float:
        """
        Similarity between a query and a candidate title.

        Returns:
            Score between 0.0 and 1.0
        """
        q = query.strip().lower()
        c = candidate.strip().lower()
        if not q or not c:
            return 0.0

        score = self._ratio(q, c)
        if len(q) < len(c):
            score = max(score, self._partial_ratio(q, c))
        return score

    # =========================================================================
    # SUGGESTIONS
    # =========================================================================

    def suggest(self, query: str, candidates: Iterable[str], limit: int) -> List[str]:
        """
        Return up to `limit` candidate titles closest to the query.

        Args:
            query: Raw search text
            candidates: Known titles (duplicates are ignored)
            limit: Maximum number of suggestions

        Returns:
            Titles ordered by descending score, ties broken alphabetically
        """
        if limit <= 0 or not query or not query.strip():
            return []

        scored: List[Tuple[float, str]] = []
        for candidate in set(candidates):
            if not candidate:
                continue
            score = self.score(query, candidate)
            if score >= self.threshold:
                scored.append((score, candidate))

        scored.sort(key=lambda item: (-item[0], item[1]))
        suggestions = [candidate for _, candidate in scored[:limit]]

        logger.debug(f"Suggestions for {query!r}: {suggestions}")
        return suggestions
