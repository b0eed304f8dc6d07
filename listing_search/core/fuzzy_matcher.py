"""Fuzzy matching of query terms against listing fields."""

import re
from typing import Iterable, List, Optional

from rapidfuzz import fuzz, process

_WHITESPACE = re.compile(r"\s+")


class FuzzyMatcher:
    """Decides whether a term loosely matches a field, and suggests spellings."""

    def __init__(self, threshold: float = 0.6) -> None:
        """
        Initialize the fuzzy matcher.

        Args:
            threshold: Minimum similarity (0-1) for spelling suggestions
        """
        self.threshold = threshold

    def matches(self, field_value: Optional[str], term: Optional[str]) -> bool:
        """
        Check whether a term fuzzy-matches a field value.

        A match is any of: the term is a substring of the field; the
        whitespace-free term is a substring of the whitespace-free field
        ("Tubman Burg" vs "tubmanburg"); a word of the field starts with the
        term or the term starts with a word of the field.

        Args:
            field_value: Listing field, may be None or empty
            term: Lowercase query term

        Returns:
            True if the term matches
        """
        if not field_value or not term:
            return False

        value = field_value.lower()
        term = term.lower()

        if term in value:
            return True

        compact_term = _WHITESPACE.sub("", term)
        if compact_term and compact_term in _WHITESPACE.sub("", value):
            return True

        for word in value.split():
            if word.startswith(term) or term.startswith(word):
                return True

        return False

    def matches_any(self, field_values: Iterable[Optional[str]], terms: Iterable[str]) -> bool:
        """True if any term matches any of the field values."""
        values = [value for value in field_values if value]
        return any(self.matches(value, term) for term in terms for value in values)

    def is_exact(self, field_value: Optional[str], term: Optional[str]) -> bool:
        """Case-insensitive equality, ignoring surrounding whitespace."""
        if not field_value or not term:
            return False
        return field_value.strip().lower() == term.strip().lower()

    def suggest_corrections(
        self,
        query: str,
        candidates: List[str],
        max_suggestions: int = 5
    ) -> List[str]:
        """
        Suggest corrections for a query.

        Args:
            query: Query to get suggestions for
            candidates: List of candidate words
            max_suggestions: Maximum number of suggestions

        Returns:
            List of suggested corrections, best first
        """
        if not query or not candidates:
            return []

        suggestions = process.extract(
            query.lower(),
            candidates,
            limit=max_suggestions,
            scorer=fuzz.WRatio,
            processor=str.lower,
        )

        return [suggestion[0] for suggestion in suggestions
                if suggestion[1] >= self.threshold * 100]
