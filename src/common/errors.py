"""Shared error codes and exceptions for the counting pipeline."""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    CONFIG_ERROR = "CONFIG_ERROR"
    NOT_FOUND = "NOT_FOUND"
    ACCESS_DENIED = "ACCESS_DENIED"
    IO_ERROR = "IO_ERROR"
    STATE_ERROR = "STATE_ERROR"


# DOS-style process exit codes reported by the CLI.
EXIT_CODES: Dict[ErrorCode, int] = {
    ErrorCode.NOT_FOUND: 2,
    ErrorCode.ACCESS_DENIED: 5,
}
GENERAL_FAILURE_EXIT_CODE = 0x1F


class BackendError(RuntimeError):
    """Exception carrying a structured error code for the CLI."""

    def __init__(self, code: ErrorCode, message: str, *, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.code = code
        self.context = context or {}

    @property
    def exit_code(self) -> int:
        return EXIT_CODES.get(self.code, GENERAL_FAILURE_EXIT_CODE)

    def __str__(self) -> str:  # pragma: no cover - formatting sugar
        base = super().__str__()
        return f"[{self.code.value}] {base}" if base else self.code.value
