"""JSON persistence helpers for word-count results."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Sequence

from common.errors import BackendError, ErrorCode
from common.models import WordCountResult

RESULTS_FORMAT_VERSION = 1


def save_results(results: Sequence[WordCountResult], path: Path) -> None:
    """Serialize results to JSON, words sorted for stable diffs."""

    data = {
        "version": RESULTS_FORMAT_VERSION,
        "files": [serialize_result(result) for result in results],
    }
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    except OSError as exc:
        raise BackendError(
            ErrorCode.IO_ERROR,
            f"Cannot write results to '{path}': {exc}",
            context={"path": str(path)},
        ) from exc


def load_results(path: Path) -> List[WordCountResult]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except json.JSONDecodeError as exc:
        raise BackendError(ErrorCode.IO_ERROR, f"Results file '{path}' is not valid JSON: {exc}") from exc
    if not isinstance(data, dict) or not isinstance(data.get("files"), list):
        raise BackendError(ErrorCode.IO_ERROR, f"Results file '{path}' has no 'files' list")
    return [deserialize_result(item) for item in data["files"]]


def serialize_result(result: WordCountResult) -> Dict[str, object]:
    return {
        "file_path": str(result.file_path),
        "strategy": result.strategy,
        "elapsed_ns": result.elapsed_ns,
        "total_words": result.total_words,
        "unique_words": result.unique_words,
        "counts": dict(result.sorted_items()),
    }


def deserialize_result(data: Dict[str, object]) -> WordCountResult:
    counts = data.get("counts") or {}
    return WordCountResult(
        file_path=Path(str(data["file_path"])),
        counts={str(word): int(count) for word, count in counts.items()},
        elapsed_ns=int(data.get("elapsed_ns", 0)),
        strategy=str(data.get("strategy", "rescan")),
    )
