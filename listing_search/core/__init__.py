"""Core search engine functionality."""

from .engine import SearchEngine
from .fuzzy_matcher import FuzzyMatcher
from .lexicon import Lexicon
from .normalizer import QueryNormalizer
from .scorer import Scorer, ScoredResult
from .store import InMemoryListingStore, ListingStore, ListingStoreError

__all__ = [
    "SearchEngine",
    "FuzzyMatcher",
    "Lexicon",
    "QueryNormalizer",
    "Scorer",
    "ScoredResult",
    "InMemoryListingStore",
    "ListingStore",
    "ListingStoreError",
]
