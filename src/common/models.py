"""Data models shared across UI, core engine, and storage layers."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Literal, Optional

TokenizerStrategy = Literal["rescan", "buffered", "lines"]
TOKENIZER_STRATEGIES = ("rescan", "buffered", "lines")

DEFAULT_CHUNK_SIZE = 64 * 1024


@dataclass(slots=True)
class GlobalSettings:
    """Global knobs that apply across profiles."""

    encoding: str = "locale"  # "locale" resolves to the platform default
    error_policy: str = "fail-fast"  # fail-fast | replace


@dataclass(slots=True)
class ProfileSettings:
    """Tokenizer selection and buffering for one profile."""

    description: str
    strategy: str = "rescan"
    chunk_size: int = DEFAULT_CHUNK_SIZE
    progress_interval: int = 1000


@dataclass(slots=True)
class RuntimeConfig:
    """Resolved configuration for a single run."""

    global_settings: GlobalSettings
    profile: ProfileSettings


@dataclass(slots=True)
class FileProgress:
    """Progress payload reported back to the CLI while counting a file."""

    file_path: Path
    processed_words: int
    current_phase: str
    unique_words: int = 0
    words_per_second: Optional[float] = None


@dataclass(slots=True)
class WordCountResult:
    """Finalized tally for one file."""

    file_path: Path
    counts: Dict[str, int] = field(default_factory=dict)
    elapsed_ns: int = 0
    strategy: str = "rescan"

    @property
    def total_words(self) -> int:
        return sum(self.counts.values())

    @property
    def unique_words(self) -> int:
        return len(self.counts)

    def sorted_items(self) -> list[tuple[str, int]]:
        return sorted(self.counts.items())
