"""CLI shell: count word frequencies per file and benchmark tokenizers."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from common.config import DEFAULT_PROFILE, load_runtime_config
from common.errors import BackendError
from common.models import TOKENIZER_STRATEGIES, FileProgress, RuntimeConfig, WordCountResult
from common.progress import BenchmarkRecorder, ProgressLogger
from core.counting import process_files
from core.reporting import format_elapsed, render_report
from storage import save_results


def render_progress(progress: FileProgress) -> None:
    rate = f" words/s={progress.words_per_second:,.0f}" if progress.words_per_second else ""
    print(
        f"[count] {progress.file_path} words={progress.processed_words}"
        f" unique={progress.unique_words} phase={progress.current_phase}{rate}"
    )


def print_report(result: WordCountResult) -> None:
    print()
    for line in render_report(result):
        print(line)


def build_runtime(args: argparse.Namespace) -> RuntimeConfig:
    profile_overrides: Dict[str, Any] = {}
    if args.strategy:
        profile_overrides["strategy"] = args.strategy
    if args.chunk_size is not None:
        profile_overrides["chunk_size"] = args.chunk_size
    config_path = Path(args.config) if args.config else None
    return load_runtime_config(
        args.profile,
        config_path=config_path,
        overrides={"profile": profile_overrides} if profile_overrides else None,
    )


def command_count(args: argparse.Namespace) -> int:
    runtime = build_runtime(args)
    progress_logger = ProgressLogger(Path(args.progress_log) if args.progress_log else None)

    def on_progress(progress: FileProgress) -> None:
        progress_logger.emit(progress)
        if args.verbose:
            render_progress(progress)

    results: List[WordCountResult] = []

    def on_result(result: WordCountResult) -> None:
        results.append(result)
        if not args.quiet:
            print_report(result)

    failure: Optional[BackendError] = None
    try:
        process_files(
            [Path(p) for p in args.inputs],
            runtime,
            progress_callback=on_progress,
            on_result=on_result,
        )
    except BackendError as exc:
        failure = exc

    if args.output and results:
        try:
            save_results(results, Path(args.output))
            print(f"[count] wrote {len(results)} result(s) to {args.output}")
        except BackendError as exc:
            if failure is None:
                raise
            # the batch failure decides the exit code
            print(f"[count] {exc}", file=sys.stderr)
    if failure is not None:
        raise failure
    return 0


def command_benchmark(args: argparse.Namespace) -> int:
    runtime = build_runtime(args)
    recorder = BenchmarkRecorder(Path(args.log))
    print(
        f"[benchmark] strategy={runtime.profile.strategy} chunk_size={runtime.profile.chunk_size}"
        f" files={len(args.inputs)}"
    )
    results = process_files([Path(p) for p in args.inputs], runtime)
    for result in results:
        metrics = recorder.record(result)
        print(
            f"[benchmark] {result.file_path.name} words={result.total_words}"
            f" unique={result.unique_words} in {format_elapsed(result.elapsed_ns)}"
            f" ({metrics['words_per_second']:,.0f} words/s)"
        )
    return 0


def _add_runtime_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("inputs", nargs="+", help="Text files to process, in order")
    parser.add_argument(
        "--profile",
        default=DEFAULT_PROFILE,
        help="Profile from config/defaults.json (e.g., reference, buffered, lines)",
    )
    parser.add_argument("--config", help="Alternate configuration JSON")
    parser.add_argument(
        "--strategy",
        choices=TOKENIZER_STRATEGIES,
        help="Override the profile's tokenizer strategy",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        help="Override the buffered tokenizer chunk size (characters, min 1)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wordtally", description="Case-insensitive word frequency counter"
    )
    subparsers = parser.add_subparsers(dest="command")

    count = subparsers.add_parser("count", help="Count words in each file and print the tally")
    _add_runtime_arguments(count)
    count.add_argument("--output", help="Write results JSON to this path")
    count.add_argument("--progress-log", help="Path to JSONL file for structured progress events")
    count.add_argument("--quiet", action="store_true", help="Skip printing the per-file report")
    count.add_argument("--verbose", action="store_true", help="Print progress events to the console")
    count.set_defaults(func=command_count)

    benchmark = subparsers.add_parser("benchmark", help="Measure tokenizer throughput")
    _add_runtime_arguments(benchmark)
    benchmark.add_argument(
        "--log",
        default="artifacts/benchmarks.jsonl",
        help="Where to append benchmark metrics",
    )
    benchmark.set_defaults(func=command_benchmark)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    try:
        return args.func(args)
    except BackendError as exc:
        print(f"Failure processing: {exc}", file=sys.stderr)
        return exc.exit_code


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
