"""Text sources that tokenizers can (re)open on demand."""
from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO, Union

from common.config import error_mode_from_policy
from common.errors import BackendError, ErrorCode
from common.models import GlobalSettings


@dataclass(slots=True, frozen=True)
class TextSource:
    """A file on disk decoded with a fixed encoding.

    ``newline=""`` keeps carriage returns intact so character offsets match
    the raw content between reopenings.
    """

    path: Path
    encoding: str = "locale"
    errors: str = "strict"

    @classmethod
    def from_settings(cls, path: Path, settings: GlobalSettings) -> "TextSource":
        return cls(
            path=Path(path),
            encoding=settings.encoding,
            errors=error_mode_from_policy(settings.error_policy),
        )

    @property
    def name(self) -> str:
        return str(self.path)

    def open(self) -> TextIO:
        try:
            return self.path.open("r", encoding=self.encoding, errors=self.errors, newline="")
        except LookupError as exc:
            raise BackendError(
                ErrorCode.CONFIG_ERROR,
                f"Unknown encoding '{self.encoding}' for {self.path}",
                context={"path": str(self.path), "encoding": self.encoding},
            ) from exc


@dataclass(slots=True, frozen=True)
class InlineSource:
    """In-memory text exposing the same interface as :class:`TextSource`."""

    text: str
    label: str = "<inline>"

    @property
    def name(self) -> str:
        return self.label

    @property
    def path(self) -> Path:
        return Path(self.label)

    def open(self) -> TextIO:
        return io.StringIO(self.text, newline="")


Source = Union[TextSource, InlineSource]
