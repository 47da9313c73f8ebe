from __future__ import annotations

import json
from pathlib import Path

from common.models import FileProgress, WordCountResult
from common.progress import BenchmarkRecorder, ProgressLogger


def test_progress_logger_appends_jsonl(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "progress.jsonl"
    logger = ProgressLogger(log_path)
    logger(FileProgress(file_path=Path("a.txt"), processed_words=0, current_phase="setup"))
    logger.emit(FileProgress(file_path=Path("a.txt"), processed_words=7, current_phase="finished", unique_words=3))

    events = [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]
    assert [event["current_phase"] for event in events] == ["setup", "finished"]
    assert events[1]["processed_words"] == 7
    assert events[1]["file_path"] == "a.txt"
    assert "timestamp" in events[0]
    assert logger.events_written == 2


def test_progress_logger_without_path_is_noop() -> None:
    logger = ProgressLogger(None)
    logger.emit(FileProgress(file_path=Path("a.txt"), processed_words=1, current_phase="running"))
    assert logger.events_written == 0


def test_benchmark_recorder_computes_throughput(tmp_path: Path) -> None:
    recorder = BenchmarkRecorder(tmp_path / "bench.jsonl")
    result = WordCountResult(
        file_path=Path("words.txt"),
        counts={"a": 3, "b": 1},
        elapsed_ns=2_000_000_000,
        strategy="lines",
    )
    metrics = recorder.record(result)
    assert metrics["words_per_second"] == 2.0
    stored = json.loads((tmp_path / "bench.jsonl").read_text(encoding="utf-8"))
    assert stored["strategy"] == "lines"
    assert stored["unique_words"] == 2
