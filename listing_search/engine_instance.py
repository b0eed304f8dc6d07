"""Global store and search engine instances to avoid circular imports."""

from .config import get_settings
from .core.engine import SearchEngine
from .core.lexicon import Lexicon
from .core.store import InMemoryListingStore
from .stats import SearchStats

settings = get_settings()

# Lexicon is loaded once at start-up and never changes afterwards.
lexicon = Lexicon.from_file(settings.lexicon_file) if settings.lexicon_file else Lexicon.default()

listing_store = InMemoryListingStore()
search_engine = SearchEngine(listing_store, lexicon=lexicon, fuzzy_threshold=settings.fuzzy_threshold)
search_stats = SearchStats()
