"""Lightweight text helpers shared across tokenizers and counters."""
from __future__ import annotations

import re

SEPARATORS = frozenset(" \t\n\r\f")

# Maximal run of non-separator characters.
WORD_PATTERN = re.compile(r"[^ \t\n\r\f]+")


def is_separator(char: str) -> bool:
    return char in SEPARATORS


def normalize_word(word: str) -> str:
    """Return the canonical counting key for a word."""

    return word.lower()


def split_words(text: str) -> list[str]:
    return WORD_PATTERN.findall(text)
