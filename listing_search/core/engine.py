"""Main search engine implementation."""

import math
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type, TypeVar, Union

import structlog

from ..models.listing import ListingRecord
from ..models.request import BrowseOptions, BrowseSort, PageParams, SearchFilters, SortMode
from ..models.response import SearchPage
from .fuzzy_matcher import FuzzyMatcher
from .lexicon import Lexicon
from .normalizer import QueryNormalizer
from .scorer import Scorer
from .store import ListingStore

logger = structlog.get_logger(__name__)

# Fields a term must hit for a listing to be a candidate at all.
SEARCHABLE_FIELDS = ("service_type", "community", "city", "county", "name", "description")

# Fields whose distinct values feed spelling suggestions.
SUGGESTION_FIELDS = ("service_type", "city", "county", "community")

P = TypeVar("P", bound=PageParams)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC, bad ones give None."""
    if not value or not value.strip():
        return None
    text = value.strip()
    if text[-1] in "zZ":
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class SearchEngine:
    """Keyword search, ranking and browsing over a listing store snapshot.

    The engine keeps no per-query state: every call fetches a fresh snapshot
    from the store, so concurrent calls are independent. Errors raised by the
    store propagate to the caller unchanged.
    """

    def __init__(
        self,
        store: ListingStore,
        lexicon: Optional[Lexicon] = None,
        fuzzy_threshold: float = 0.6
    ) -> None:
        """
        Initialize the search engine.

        Args:
            store: Source of listing snapshots
            lexicon: Alias and synonym tables (bundled defaults if None)
            fuzzy_threshold: Similarity threshold for spelling suggestions
        """
        self.store = store
        self.lexicon = lexicon if lexicon is not None else Lexicon.default()
        self.normalizer = QueryNormalizer(self.lexicon)
        self.fuzzy_matcher = FuzzyMatcher(fuzzy_threshold)
        self.scorer = Scorer(self.fuzzy_matcher)

    def search(self, query: Optional[str]) -> List[ListingRecord]:
        """
        Simple search over available listings.

        Args:
            query: Free-text query; empty or blank matches every listing

        Returns:
            Matching listings, highest score first, ties by id descending
        """
        start_time = time.time()
        terms = self.normalizer.expand(query)

        matched = self._match_terms(self.store.all_available(), terms)
        results = [result.listing for result in self.scorer.rank(matched, terms)]

        logger.debug(
            "Simple search completed",
            query=query,
            terms=terms,
            total_results=len(results),
            execution_time_ms=round((time.time() - start_time) * 1000, 3)
        )
        return results

    def advanced_search(
        self,
        query: Optional[str],
        filters: Union[SearchFilters, Mapping[str, Any], None] = None
    ) -> SearchPage:
        """
        Filtered, sorted and paginated search.

        Structured filters shrink the candidate set first; the text query is
        then applied exactly as in simple search.

        Args:
            query: Free-text query; empty or blank applies no text filter
            filters: SearchFilters or an equivalent dictionary

        Returns:
            SearchPage with the requested page and the pre-pagination total
        """
        start_time = time.time()
        filters = self._coerce(filters, SearchFilters)
        terms = self.normalizer.expand(query)

        snapshot = self.store.all_available() if filters.available else self.store.all_listings()
        candidates = [listing for listing in snapshot if self._passes_filters(listing, filters)]
        matched = self._match_terms(candidates, terms)
        ordered = self._order(matched, terms, filters.sort)
        page = self._paginate(ordered, filters)

        logger.debug(
            "Advanced search completed",
            query=query,
            terms=terms,
            filters=filters.model_dump(exclude_defaults=True),
            total_results=page.total,
            execution_time_ms=round((time.time() - start_time) * 1000, 3)
        )
        return page

    def by_location(
        self,
        county: Optional[str] = None,
        city: Optional[str] = None
    ) -> List[ListingRecord]:
        """
        Available listings in a county and/or city, newest first.

        A field matches when it contains the requested text (case-insensitive)
        or when both resolve to the same entry of the location alias table.

        Args:
            county: County to match, optional
            city: City to match, optional

        Returns:
            Listings ordered by id descending
        """
        county = county.strip() if county and county.strip() else None
        city = city.strip() if city and city.strip() else None

        listings = self.store.all_available()
        if county:
            listings = [l for l in listings if self._location_matches(l.county, county)]
        if city:
            listings = [l for l in listings if self._location_matches(l.city, city)]

        listings.sort(key=lambda listing: listing.id, reverse=True)

        logger.debug("Location browse completed", county=county, city=city, total_results=len(listings))
        return listings

    def browse(self, options: Union[BrowseOptions, Mapping[str, Any], None] = None) -> SearchPage:
        """
        Paginated feed of available listings.

        Args:
            options: BrowseOptions or an equivalent dictionary

        Returns:
            SearchPage for the requested page
        """
        options = self._coerce(options, BrowseOptions)
        listings = self.store.all_available()

        if options.category:
            category = options.category.lower()
            listings = [l for l in listings if l.service_type.strip().lower() == category]

        if options.sort == BrowseSort.CLOSEST:
            # Stable sorts: id descending, then city/community ascending.
            listings.sort(key=lambda l: l.id, reverse=True)
            listings.sort(key=lambda l: (l.city.lower(), l.community.lower()))
        elif options.sort == BrowseSort.POPULAR:
            listings.sort(key=lambda l: (l.view_count, l.id), reverse=True)
        else:
            listings.sort(key=lambda l: l.id, reverse=True)

        return self._paginate(listings, options)

    def suggest(self, query: Optional[str], max_suggestions: int = 5) -> List[str]:
        """
        Suggest known spellings for the words of a query.

        Args:
            query: Query that needs help
            max_suggestions: Maximum number of suggestions

        Returns:
            Suggested terms, best first
        """
        tokens = self.normalizer.tokenize(query)
        if not tokens:
            return []

        candidates: Dict[str, None] = dict.fromkeys(self.lexicon.vocabulary())
        for listing in self.store.all_available():
            for field in SUGGESTION_FIELDS:
                value = getattr(listing, field)
                if value:
                    candidates[value.strip().lower()] = None
        vocabulary = list(candidates)

        suggestions: Dict[str, None] = {}
        for token in tokens:
            for suggestion in self.fuzzy_matcher.suggest_corrections(
                token, vocabulary, max_suggestions
            ):
                suggestions[suggestion] = None

        return list(suggestions)[:max_suggestions]

    def _match_terms(self, listings: Sequence[ListingRecord], terms: List[str]) -> List[ListingRecord]:
        """Keep listings where some term matches some searchable field."""
        if not terms:
            return list(listings)
        return [
            listing for listing in listings
            if self.fuzzy_matcher.matches_any(
                (getattr(listing, field) for field in SEARCHABLE_FIELDS), terms
            )
        ]

    def _passes_filters(self, listing: ListingRecord, filters: SearchFilters) -> bool:
        if filters.county and filters.county.lower() not in listing.county.lower():
            return False
        if filters.city and filters.city.lower() not in listing.city.lower():
            return False
        if filters.service_type and (
            listing.service_type.strip().lower() != filters.service_type.lower()
        ):
            return False
        return True

    def _location_matches(self, field_value: str, wanted: str) -> bool:
        if wanted.lower() in field_value.lower():
            return True
        canonical = self.lexicon.canonical_location(wanted)
        return canonical is not None and canonical == self.lexicon.canonical_location(field_value)

    def _order(
        self,
        listings: List[ListingRecord],
        terms: List[str],
        sort: SortMode
    ) -> List[ListingRecord]:
        if sort == SortMode.NEWEST:
            return sorted(listings, key=self._recency_key, reverse=True)
        if sort == SortMode.POPULAR:
            return sorted(listings, key=lambda l: (l.view_count, l.id), reverse=True)
        return [result.listing for result in self.scorer.rank(listings, terms)]

    @staticmethod
    def _recency_key(listing: ListingRecord):
        # Unparseable or missing timestamps sort after every dated listing.
        timestamp = parse_timestamp(listing.last_updated)
        return (timestamp is not None, timestamp or _EPOCH, listing.id)

    @staticmethod
    def _paginate(listings: List[ListingRecord], params: PageParams) -> SearchPage:
        total = len(listings)
        start = params.offset
        return SearchPage(
            results=listings[start:start + params.limit],
            total=total,
            page=params.page,
            total_pages=math.ceil(total / params.limit),
        )

    @staticmethod
    def _coerce(value: Union[P, Mapping[str, Any], None], model: Type[P]) -> P:
        """Validate loosely-typed options into their model, defaulting bad values."""
        if isinstance(value, model):
            return value
        return model.model_validate(dict(value or {}))
