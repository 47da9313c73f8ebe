"""Reference tokenizer that re-reads the source from the start for every word.

Each call reopens the source, skips the characters consumed so far and then
scans one character at a time, so the cost is quadratic in the input size.
``rescan=False`` keeps a single handle open instead; the word sequence is
the same.
"""
from __future__ import annotations

from typing import List, Optional, TextIO

from common.text import is_separator
from .base import Tokenizer
from .source import Source


class RescanTokenizer(Tokenizer):
    strategy = "rescan"

    def __init__(self, source: Source, *, rescan: bool = True) -> None:
        super().__init__(source)
        self.rescan = rescan
        self.offset = 0
        self._handle: Optional[TextIO] = None

    def next_word(self) -> Optional[str]:
        if self.exhausted:
            return None
        if self.rescan:
            with self.source.open() as handle:
                self._skip_consumed(handle)
                return self._scan(handle)
        if self._handle is None:
            self._handle = self.source.open()
        return self._scan(self._handle)

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def _skip_consumed(self, handle: TextIO) -> None:
        remaining = self.offset
        while remaining > 0:
            skipped = handle.read(remaining)
            if not skipped:
                break
            remaining -= len(skipped)

    def _scan(self, handle: TextIO) -> Optional[str]:
        chars: List[str] = []
        while True:
            char = handle.read(1)
            if not char:
                self.exhausted = True
                self.close()
                break
            self.offset += 1
            if is_separator(char):
                if chars:
                    break
                continue
            chars.append(char)
        return "".join(chars) if chars else None
