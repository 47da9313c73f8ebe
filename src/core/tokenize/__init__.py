"""Word tokenizers over text sources (rescan, buffered, lines)."""
from __future__ import annotations

from common.errors import BackendError, ErrorCode
from common.models import DEFAULT_CHUNK_SIZE, TOKENIZER_STRATEGIES
from .base import Tokenizer
from .buffered import BufferedTokenizer
from .lines import LineTokenizer
from .rescan import RescanTokenizer
from .source import InlineSource, Source, TextSource


def build_tokenizer(source: Source, strategy: str = "rescan", *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Tokenizer:
    """Create the tokenizer registered under ``strategy``."""

    if strategy == "rescan":
        return RescanTokenizer(source)
    if strategy == "buffered":
        return BufferedTokenizer(source, chunk_size=chunk_size)
    if strategy == "lines":
        return LineTokenizer(source)
    allowed = ", ".join(TOKENIZER_STRATEGIES)
    raise BackendError(
        ErrorCode.CONFIG_ERROR,
        f"Unknown tokenizer strategy '{strategy}'. Allowed: {allowed}",
    )


__all__ = [
    "BufferedTokenizer",
    "InlineSource",
    "LineTokenizer",
    "RescanTokenizer",
    "Source",
    "TextSource",
    "Tokenizer",
    "build_tokenizer",
]
