"""Case-insensitive word frequency table."""
from __future__ import annotations

from typing import Dict, Iterator

from common.text import normalize_word


class FrequencyTable:
    """Maps lower-cased words to occurrence counts for a single file."""

    def __init__(self) -> None:
        self._counts: Dict[str, int] = {}

    def increment(self, word: str) -> int:
        key = normalize_word(word)
        count = self._counts.get(key, 0) + 1
        self._counts[key] = count
        return count

    def snapshot(self) -> Dict[str, int]:
        return dict(self._counts)

    @property
    def total_words(self) -> int:
        return sum(self._counts.values())

    @property
    def unique_words(self) -> int:
        return len(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and normalize_word(word) in self._counts

    def __getitem__(self, word: str) -> int:
        return self._counts[normalize_word(word)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._counts)
