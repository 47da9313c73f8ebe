"""Counter engine driving a tokenizer into a frequency table."""
from __future__ import annotations

import os
import time
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from common.errors import BackendError, ErrorCode
from common.models import DEFAULT_CHUNK_SIZE, FileProgress, RuntimeConfig, WordCountResult
from core.jobs import CounterState, CounterStateMachine
from core.tokenize import Source, TextSource, Tokenizer, build_tokenizer
from .table import FrequencyTable

ProgressCallback = Optional[Callable[[FileProgress], None]]


class CounterEngine:
    """Counts the words of one source, exactly once.

    The engine walks Idle -> Setup -> Running -> Finished. Any read or decode
    failure while running closes the tokenizer, moves the engine to Failed and
    raises ``BackendError(IO_ERROR)``; the partial table is never exposed.
    """

    def __init__(
        self,
        *,
        strategy: str = "rescan",
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        progress_interval: int = 1000,
        progress_callback: ProgressCallback = None,
    ) -> None:
        self.strategy = strategy
        self.chunk_size = chunk_size
        self.progress_interval = max(1, progress_interval)
        self.progress_callback = progress_callback
        self.machine = CounterStateMachine()
        self.source: Optional[Source] = None
        self.tokenizer: Optional[Tokenizer] = None
        self.table: Optional[FrequencyTable] = None
        self.words_processed = 0
        self._started_at: Optional[float] = None

    @classmethod
    def from_runtime(cls, runtime: RuntimeConfig, *, progress_callback: ProgressCallback = None) -> "CounterEngine":
        profile = runtime.profile
        return cls(
            strategy=profile.strategy,
            chunk_size=profile.chunk_size,
            progress_interval=profile.progress_interval,
            progress_callback=progress_callback,
        )

    @property
    def state(self) -> CounterState:
        return self.machine.state

    def setup(self, source: Source) -> None:
        self.machine.transition(CounterState.SETUP, detail=source.name)
        self.source = source
        self.table = FrequencyTable()
        self.words_processed = 0
        try:
            self.tokenizer = build_tokenizer(source, self.strategy, chunk_size=self.chunk_size)
        except (BackendError, ValueError) as exc:
            self.machine.mark_failed(str(exc))
            raise
        self._emit("setup")

    def run(self) -> None:
        self.machine.transition(CounterState.RUNNING)
        self._started_at = time.perf_counter()
        assert self.tokenizer is not None and self.table is not None
        try:
            for word in self.tokenizer:
                self.table.increment(word)
                self.words_processed += 1
                if self.words_processed % self.progress_interval == 0:
                    self._emit("running")
        except BackendError as exc:
            self._fail(exc)
            raise
        except (OSError, UnicodeError) as exc:
            self._fail(exc)
            raise BackendError(
                ErrorCode.IO_ERROR,
                f"Failure processing {self._source_name()}: {exc.__class__.__name__} {exc}",
                context={
                    "path": self._source_name(),
                    "strategy": self.tokenizer.strategy,
                    "words_processed": self.words_processed,
                },
            ) from exc

    def finish(self) -> Dict[str, int]:
        self.machine.transition(CounterState.FINISHED)
        if self.tokenizer is not None:
            self.tokenizer.close()
        self._emit("finished")
        return self.snapshot()

    def snapshot(self) -> Dict[str, int]:
        if self.state != CounterState.FINISHED or self.table is None:
            raise BackendError(
                ErrorCode.STATE_ERROR,
                f"Counts are only available after a finished run (state={self.state.value})",
            )
        return self.table.snapshot()

    def process(self, source: Source) -> Dict[str, int]:
        self.setup(source)
        self.run()
        return self.finish()

    def _fail(self, exc: BaseException) -> None:
        if self.tokenizer is not None:
            self.tokenizer.close()
        self.machine.mark_failed(f"{exc.__class__.__name__}: {exc}")
        self._emit("failed")

    def _source_name(self) -> str:
        return self.source.name if self.source is not None else "<unbound>"

    def _emit(self, phase: str) -> None:
        if not self.progress_callback or self.source is None:
            return
        rate = None
        if self._started_at is not None:
            elapsed = time.perf_counter() - self._started_at
            rate = self.words_processed / elapsed if elapsed > 0 else None
        self.progress_callback(
            FileProgress(
                file_path=self.source.path,
                processed_words=self.words_processed,
                current_phase=phase,
                unique_words=len(self.table) if self.table is not None else 0,
                words_per_second=rate,
            )
        )


def check_readable(path: Path) -> Path:
    """Raise NOT_FOUND / ACCESS_DENIED before any processing starts."""

    resolved = path.resolve()
    if not resolved.exists():
        raise BackendError(
            ErrorCode.NOT_FOUND,
            f"File {resolved} does not exist.",
            context={"path": str(resolved)},
        )
    if not os.access(resolved, os.R_OK):
        raise BackendError(
            ErrorCode.ACCESS_DENIED,
            f"File {resolved} cannot be read.",
            context={"path": str(resolved)},
        )
    return resolved


def process_file(
    path: Path | str,
    runtime: RuntimeConfig,
    *,
    progress_callback: ProgressCallback = None,
) -> WordCountResult:
    """Count the words of one file with a fresh engine and time the run."""

    resolved = check_readable(Path(path))
    source = TextSource.from_settings(resolved, runtime.global_settings)
    engine = CounterEngine.from_runtime(runtime, progress_callback=progress_callback)
    start = time.perf_counter_ns()
    counts = engine.process(source)
    elapsed = time.perf_counter_ns() - start
    return WordCountResult(
        file_path=resolved,
        counts=counts,
        elapsed_ns=elapsed,
        strategy=engine.strategy,
    )


def process_files(
    paths: Iterable[Path | str],
    runtime: RuntimeConfig,
    *,
    progress_callback: ProgressCallback = None,
    on_result: Optional[Callable[[WordCountResult], None]] = None,
) -> List[WordCountResult]:
    """Process files strictly in order; the first failure stops the batch."""

    results: List[WordCountResult] = []
    for path in paths:
        result = process_file(path, runtime, progress_callback=progress_callback)
        results.append(result)
        if on_result:
            on_result(result)
    return results
