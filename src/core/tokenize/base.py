"""Common tokenizer contract."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator, Optional

from .source import Source


class Tokenizer(ABC):
    """Lazy word sequence over a text source.

    ``next_word`` returns the next maximal run of non-separator characters,
    or ``None`` once the input is exhausted. Reaching the end is terminal:
    further calls keep returning ``None``.
    """

    strategy = "abstract"

    def __init__(self, source: Source) -> None:
        self.source = source
        self.exhausted = False

    @abstractmethod
    def next_word(self) -> Optional[str]:
        ...

    def close(self) -> None:
        """Release any open handle. Safe to call more than once."""

    def __iter__(self) -> Iterator[str]:
        while True:
            word = self.next_word()
            if word is None:
                return
            yield word

    def __enter__(self) -> "Tokenizer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
