"""Structured progress logging utilities."""
from __future__ import annotations

import json
import time
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import BackendError, ErrorCode
from .models import FileProgress, WordCountResult


def _log_write_error(path: Path, exc: OSError) -> BackendError:
    return BackendError(
        ErrorCode.IO_ERROR,
        f"Cannot write log '{path}': {exc}",
        context={"path": str(path)},
    )


def _prepare_log(path: Path) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise _log_write_error(path, exc) from exc


def _append_jsonl(path: Path, payload: Dict[str, Any]) -> None:
    try:
        with path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(payload, ensure_ascii=False))
            handle.write("\n")
    except OSError as exc:
        raise _log_write_error(path, exc) from exc


class ProgressLogger:
    """Appends counting progress events to a JSONL file.

    Instances are callable so they can be passed directly as an engine
    progress callback. A logger without a path is a no-op.
    """

    def __init__(self, path: Optional[Path]) -> None:
        self.path = path
        self.events_written = 0
        if path:
            _prepare_log(path)

    def __call__(self, progress: FileProgress) -> None:
        self.emit(progress)

    def emit(self, progress: FileProgress) -> None:
        if not self.path:
            return
        payload = asdict(progress)
        payload["file_path"] = str(progress.file_path)
        payload["timestamp"] = time.time()
        _append_jsonl(self.path, payload)
        self.events_written += 1


class BenchmarkRecorder:
    """Stores per-file throughput measurements for later analysis."""

    def __init__(self, path: Path) -> None:
        self.path = path
        _prepare_log(path)

    def record(self, result: WordCountResult) -> Dict[str, Any]:
        seconds = result.elapsed_ns / 1_000_000_000
        metrics = {
            "file": str(result.file_path),
            "strategy": result.strategy,
            "seconds": seconds,
            "words": result.total_words,
            "unique_words": result.unique_words,
            "words_per_second": result.total_words / seconds if seconds else 0.0,
            "timestamp": time.time(),
        }
        _append_jsonl(self.path, metrics)
        return metrics
