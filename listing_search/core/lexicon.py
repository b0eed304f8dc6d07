"""Alias and synonym tables used to expand search queries."""

import json
import re
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

# Canonical place name -> known spellings. Keys and variants are lowercase.
LOCATION_ALIASES: Dict[str, Tuple[str, ...]] = {
    "tubmanburg": ("tubman burg", "tubman-burg", "tubmanberg", "tubman berg", "tubman bourg"),
    "monrovia": ("monrovia city", "monrovai", "monrovya"),
    "paynesville": ("paynes ville", "paynesvile", "painesville", "paynesville city"),
    "montserrado": ("montserado", "montserrado county", "monsterrado"),
    "margibi": ("margibi county", "margibe"),
    "bomi": ("bomi county", "bomi hills"),
    "kakata": ("kakatta", "kakata city"),
    "gbarnga": ("gbanga", "gbarga", "gbarnga city"),
    "buchanan": ("buchannan", "buchanon", "grand bassa"),
    "sinkor": ("sinkoe", "sinkore"),
    "congo town": ("congotown", "congo-town"),
    "elwa": ("elwa junction", "e.l.w.a"),
}

# Canonical service type -> words people search with instead.
CATEGORY_SYNONYMS: Dict[str, Tuple[str, ...]] = {
    "room": ("apartment", "house", "flat", "rent", "bedroom", "lodging"),
    "restaurant": ("food", "cookshop", "eatery", "diner", "cafe"),
    "barbershop": ("barber", "haircut", "barbing"),
    "salon": ("beauty", "braids", "hairdresser", "nails", "hair salon"),
}

_WHITESPACE = re.compile(r"\s+")


def _clean(text: str) -> str:
    return _WHITESPACE.sub(" ", text.strip().lower())


def _compact(text: str) -> str:
    return _WHITESPACE.sub("", text.lower())


def _freeze(table: Optional[Mapping[str, Iterable[str]]]) -> Mapping[str, Tuple[str, ...]]:
    frozen: Dict[str, Tuple[str, ...]] = {}
    for canonical, variants in (table or {}).items():
        key = _clean(canonical)
        if not key:
            continue
        cleaned = tuple(dict.fromkeys(_clean(v) for v in variants if v and v.strip()))
        frozen[key] = cleaned
    return MappingProxyType(frozen)


class Lexicon:
    """Read-only location alias and category synonym tables.

    Both tables map a canonical lowercase term to a tuple of lowercase
    variants. A missing or empty table simply means no expansion happens
    for that kind of term.
    """

    def __init__(
        self,
        location_aliases: Optional[Mapping[str, Iterable[str]]] = None,
        category_synonyms: Optional[Mapping[str, Iterable[str]]] = None,
    ) -> None:
        self.location_aliases = _freeze(location_aliases)
        self.category_synonyms = _freeze(category_synonyms)

    @classmethod
    def default(cls) -> "Lexicon":
        """Lexicon built from the bundled tables."""
        return cls(LOCATION_ALIASES, CATEGORY_SYNONYMS)

    @classmethod
    def empty(cls) -> "Lexicon":
        """Lexicon with no entries (literal matching only)."""
        return cls()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Mapping[str, Iterable[str]]]) -> "Lexicon":
        """
        Build a lexicon from a ``{"locations": {...}, "categories": {...}}`` mapping.

        Args:
            data: Mapping with optional ``locations`` and ``categories`` tables

        Returns:
            New Lexicon
        """
        return cls(data.get("locations"), data.get("categories"))

    @classmethod
    def from_file(cls, path: str) -> "Lexicon":
        """Load a lexicon from a JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_mapping(json.load(f))

    def tables(self) -> Iterator[Mapping[str, Tuple[str, ...]]]:
        """Iterate over the location table, then the category table."""
        yield self.location_aliases
        yield self.category_synonyms

    def canonical_location(self, value: Optional[str]) -> Optional[str]:
        """Canonical place name for a spelling, or None if it is unknown."""
        return self._canonical(self.location_aliases, value)

    def canonical_category(self, value: Optional[str]) -> Optional[str]:
        """Canonical service type for a word, or None if it is unknown."""
        return self._canonical(self.category_synonyms, value)

    def vocabulary(self) -> List[str]:
        """Canonical terms of both tables; variants are misspellings, not suggestions."""
        words: Dict[str, None] = {}
        for table in self.tables():
            for canonical in table:
                words[canonical] = None
        return list(words)

    @staticmethod
    def _canonical(table: Mapping[str, Tuple[str, ...]], value: Optional[str]) -> Optional[str]:
        if not value or not value.strip():
            return None
        cleaned = _clean(value)
        compact = _compact(cleaned)
        for canonical, variants in table.items():
            for candidate in (canonical,) + variants:
                if cleaned == candidate or compact == _compact(candidate):
                    return canonical
        return None

    def __len__(self) -> int:
        return len(self.location_aliases) + len(self.category_synonyms)

    def __repr__(self) -> str:
        return (
            f"Lexicon(locations={len(self.location_aliases)}, "
            f"categories={len(self.category_synonyms)})"
        )
