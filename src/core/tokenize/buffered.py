"""Chunked tokenizer that stitches words split across buffer boundaries."""
from __future__ import annotations

from typing import Optional, TextIO

from common.models import DEFAULT_CHUNK_SIZE
from common.text import WORD_PATTERN
from .base import Tokenizer
from .source import Source


class BufferedTokenizer(Tokenizer):
    """Reads ``chunk_size`` characters at a time and matches word runs.

    A run that ends exactly at the end of the buffer may continue in the next
    chunk, so it is held as a dangling fragment until a separator or the end
    of input closes it.
    """

    strategy = "buffered"

    def __init__(self, source: Source, *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        super().__init__(source)
        if chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")
        self.chunk_size = chunk_size
        self.buffer = ""
        self.position = 0
        self.eof = False
        self.dangling: Optional[str] = None
        self._handle: Optional[TextIO] = None

    def next_word(self) -> Optional[str]:
        if self.exhausted:
            return None
        while True:
            if self.position >= len(self.buffer) and not self._fill():
                return self._finish_input()

            match = WORD_PATTERN.search(self.buffer, self.position)
            if match is None:
                self.position = len(self.buffer)
                if self.dangling is not None:
                    return self._take_dangling()
                continue

            if self.dangling is not None and match.start() > self.position:
                # separator between the fragment and this run
                self.position = match.start()
                return self._take_dangling()

            self.dangling = (self.dangling or "") + match.group()
            self.position = match.end()
            if self.position < len(self.buffer):
                return self._take_dangling()

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def _fill(self) -> bool:
        if self.eof:
            return False
        if self._handle is None:
            self._handle = self.source.open()
        chunk = self._handle.read(self.chunk_size)
        if not chunk:
            self.eof = True
            self.close()
            return False
        self.buffer = chunk
        self.position = 0
        return True

    def _finish_input(self) -> Optional[str]:
        self.exhausted = True
        return self._take_dangling()

    def _take_dangling(self) -> Optional[str]:
        word, self.dangling = self.dangling, None
        return word
