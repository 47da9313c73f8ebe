"""Line-oriented tokenizer: one regex pass per line."""
from __future__ import annotations

from typing import Iterator, Optional, TextIO

from common.text import WORD_PATTERN
from .base import Tokenizer
from .source import Source


class LineTokenizer(Tokenizer):
    strategy = "lines"

    def __init__(self, source: Source) -> None:
        super().__init__(source)
        self._handle: Optional[TextIO] = None
        self._matches: Optional[Iterator] = None

    def next_word(self) -> Optional[str]:
        if self.exhausted:
            return None
        if self._handle is None:
            self._handle = self.source.open()
        while True:
            if self._matches is None:
                line = self._handle.readline()
                if not line:
                    self.exhausted = True
                    self.close()
                    return None
                self._matches = WORD_PATTERN.finditer(line)
            match = next(self._matches, None)
            if match is not None:
                return match.group()
            self._matches = None

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
