"""Relevance scoring for listing records."""

from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

from ..models.listing import ListingRecord
from .fuzzy_matcher import FuzzyMatcher


class FieldWeight(NamedTuple):
    """Points awarded per term for one listing field."""

    field: str
    exact: Optional[float]
    fuzzy: float


# Exact (case-insensitive equality) beats fuzzy on the same field. Free-text
# fields have no exact weight.
FIELD_WEIGHTS: Tuple[FieldWeight, ...] = (
    FieldWeight("service_type", 15, 10),
    FieldWeight("community", 12, 8),
    FieldWeight("city", 10, 6),
    FieldWeight("county", 8, 4),
    FieldWeight("name", 15, 8),
    FieldWeight("description", None, 5),
    FieldWeight("detailed_description", None, 6),
    FieldWeight("tags", None, 12),
    FieldWeight("features", None, 7),
)

AVAILABLE_BOOST = 5.0
VIEWS_PER_POINT = 10.0
MAX_POPULARITY_BOOST = 5.0


class ScoredResult(NamedTuple):
    """A listing paired with its relevance score for one search call."""

    listing: ListingRecord
    score: float


class Scorer:
    """Computes heuristic keyword relevance for a listing."""

    def __init__(
        self,
        fuzzy_matcher: Optional[FuzzyMatcher] = None,
        weights: Sequence[FieldWeight] = FIELD_WEIGHTS,
    ) -> None:
        self.fuzzy_matcher = fuzzy_matcher or FuzzyMatcher()
        self.weights = tuple(weights)

    def score(self, listing: ListingRecord, terms: Iterable[str]) -> float:
        """
        Score a listing against expanded query terms.

        Args:
            listing: Candidate listing
            terms: Expanded lowercase terms

        Returns:
            Non-negative score; 0.0 for every listing when there are no terms
        """
        terms = list(terms)
        if not terms:
            return 0.0

        total = 0.0
        for term in terms:
            total += self.term_score(listing, term)

        return total + self.boost(listing)

    def term_score(self, listing: ListingRecord, term: str) -> float:
        """Points one term earns across all weighted fields."""
        points = 0.0
        for weight in self.weights:
            value = getattr(listing, weight.field, None)
            if not value:
                continue
            if weight.exact is not None and self.fuzzy_matcher.is_exact(value, term):
                points += weight.exact
            elif self.fuzzy_matcher.matches(value, term):
                points += weight.fuzzy
        return points

    def boost(self, listing: ListingRecord) -> float:
        """Flat availability and popularity boosts, applied once per listing."""
        boost = AVAILABLE_BOOST if listing.available else 0.0
        boost += min(listing.view_count / VIEWS_PER_POINT, MAX_POPULARITY_BOOST)
        return boost

    def rank(self, listings: Iterable[ListingRecord], terms: Iterable[str]) -> List[ScoredResult]:
        """
        Score and order listings, best first.

        Ties are broken by listing id, highest first.

        Returns:
            List of ScoredResult
        """
        terms = list(terms)
        scored = [ScoredResult(listing, self.score(listing, terms)) for listing in listings]
        scored.sort(key=lambda result: (result.score, result.listing.id), reverse=True)
        return scored
