"""
==============================================================================
Catalog Package - Search Suggestions
==============================================================================

Fuzzy title matching used to suggest spelling corrections during search.

Classes:
--------
- TitleSuggester: Protocol for pluggable suggesters
- SequenceMatcherSuggester: difflib-based default implementation

==============================================================================
"""

from .suggestions import SequenceMatcherSuggester, TitleSuggester

__all__ = [
    "SequenceMatcherSuggester",
    "TitleSuggester",
]
