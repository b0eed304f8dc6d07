"""Query normalization and lexicon-driven term expansion."""

import re
from typing import Dict, List, Optional

from .lexicon import Lexicon

# Spellings of Tubmanburg that users split or misspell; collapsed before expansion.
TUBMANBURG_PATTERN = re.compile(r"tubman[\s-]*b(?:u|e|ou)rgh?")


class QueryNormalizer:
    """Turns a raw query string into the set of terms the engine searches for."""

    def __init__(self, lexicon: Optional[Lexicon] = None) -> None:
        """
        Initialize the normalizer.

        Args:
            lexicon: Alias and synonym tables (an empty lexicon if None)
        """
        self.lexicon = lexicon if lexicon is not None else Lexicon.empty()
        self.whitespace_regex = re.compile(r"\s+")

    def normalize(self, text: Optional[str]) -> str:
        """
        Lowercase, trim and collapse whitespace.

        Args:
            text: Input text

        Returns:
            Normalized text ("" for empty input)
        """
        if not text:
            return ""
        return self.whitespace_regex.sub(" ", text.lower()).strip()

    def collapse_known_phrases(self, text: str) -> str:
        """Rewrite multi-word spellings that must be searched as one token."""
        return TUBMANBURG_PATTERN.sub("tubmanburg", text)

    def tokenize(self, text: Optional[str]) -> List[str]:
        """
        Tokenize a query into lowercase words.

        Args:
            text: Input text

        Returns:
            List of non-empty tokens
        """
        normalized = self.normalize(text)
        if not normalized:
            return []
        normalized = self.collapse_known_phrases(normalized)
        return [token for token in normalized.split(" ") if token]

    def expand(self, raw: Optional[str]) -> List[str]:
        """
        Expand a query through the lexicon.

        The raw tokens come first. For every token, each canonical term whose
        entry it hits is added: a hit is an exact match on the canonical term
        or a substring relation (either way) with one of its variants. A token
        equal to the canonical term also pulls in every variant with its
        whitespace removed.

        Args:
            raw: Raw query string, possibly empty

        Returns:
            Deduplicated terms in insertion order; empty for an empty query
        """
        tokens = self.tokenize(raw)
        terms: Dict[str, None] = dict.fromkeys(tokens)

        for token in tokens:
            for table in self.lexicon.tables():
                for canonical, variants in table.items():
                    if token == canonical:
                        terms[canonical] = None
                        for variant in variants:
                            compact = self.whitespace_regex.sub("", variant)
                            if compact:
                                terms[compact] = None
                    elif any(token in variant or variant in token for variant in variants):
                        terms[canonical] = None

        return list(terms)
