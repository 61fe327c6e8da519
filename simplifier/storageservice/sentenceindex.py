"""Lookup index from normalized sentence keys to stored sentences."""

from __future__ import annotations

import bisect
import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple

from ..schemas import Sentence

# Length of the secondary key stored for long sentences.
PREFIX_KEY_LENGTH = 20
# Keys shorter than this never take part in the substring scan.
MIN_FUZZY_KEY_LENGTH = 10


class MatchTier(str, Enum):
    EXACT = "exact"
    PREFIX = "prefix"
    FUZZY = "fuzzy"


@dataclass(frozen=True)
class SentenceMatch:
    """A lookup hit together with the tier and key that produced it."""

    sentence: Sentence
    tier: MatchTier
    key: str


class SentenceIndex:
    """Keyed index over normalized sentences.

    Two structures back the index:

    * ``_entries`` maps every key (full normalized keys and claimed
      20-character prefix keys) to its sentence.
    * ``_by_length`` keeps the same keys ordered by descending length, ties
      in the order the keys were added, for the substring scan.

    Callers pass keys that are already normalized.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Sentence] = {}
        self._full_keys: Set[str] = set()
        self._by_length: List[Tuple[int, int, str]] = []
        self._seq = itertools.count()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def keys(self) -> List[str]:
        """All keys in the order they were added."""
        return list(self._entries)

    def keys_by_length(self) -> List[str]:
        return [key for _, _, key in self._by_length]

    def get_full(self, key: str) -> Optional[Sentence]:
        """Return the sentence whose full normalized key is ``key``."""
        if key in self._full_keys:
            return self._entries[key]
        return None

    def add(self, key: str, sentence: Sentence) -> None:
        """Index ``sentence`` under its full key and, when long, its prefix key.

        A full key always points at its own sentence, even if an earlier
        sentence had claimed the same string as a prefix key. A prefix key is
        only added when no other key already uses that string.
        """
        self._put(key, sentence)
        self._full_keys.add(key)

        if len(key) > PREFIX_KEY_LENGTH:
            prefix = key[:PREFIX_KEY_LENGTH]
            if prefix not in self._entries:
                self._put(prefix, sentence)

    def lookup(self, key: str) -> Optional[SentenceMatch]:
        """Find the sentence for ``key``: exact, then prefix, then substring scan."""
        sentence = self._entries.get(key)
        if sentence is not None:
            return SentenceMatch(sentence, MatchTier.EXACT, key)

        if len(key) > PREFIX_KEY_LENGTH:
            prefix = key[:PREFIX_KEY_LENGTH]
            sentence = self._entries.get(prefix)
            if sentence is not None:
                return SentenceMatch(sentence, MatchTier.PREFIX, prefix)

        for _, _, candidate in self._by_length:
            # sorted longest first, so every remaining key is too short
            if len(candidate) < MIN_FUZZY_KEY_LENGTH:
                break
            if key in candidate or candidate in key:
                return SentenceMatch(self._entries[candidate], MatchTier.FUZZY, candidate)

        return None

    def clear(self) -> None:
        self._entries.clear()
        self._full_keys.clear()
        self._by_length.clear()

    def _put(self, key: str, sentence: Sentence) -> None:
        if key not in self._entries:
            bisect.insort(self._by_length, (-len(key), next(self._seq), key))
        self._entries[key] = sentence
