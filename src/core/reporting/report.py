"""Plain-text rendering of word-count results."""
from __future__ import annotations

from typing import List

from common.models import WordCountResult

_NS_PER_MS = 1_000_000


def format_elapsed(nanos: int) -> str:
    """Render a duration as ``[Nm ][Ns ][Nms ]Nns``, omitting leading zero units."""

    if nanos < _NS_PER_MS:
        return f"{nanos}ns"
    millis, nanos = divmod(nanos, _NS_PER_MS)
    if millis < 1000:
        return f"{millis}ms {nanos}ns"
    secs, millis = divmod(millis, 1000)
    if secs < 60:
        return f"{secs}s {millis}ms {nanos}ns"
    mins, secs = divmod(secs, 60)
    return f"{mins}m {secs}s {millis}ms {nanos}ns"


def summary_line(result: WordCountResult) -> str:
    return (
        f"...Processed {result.total_words} total words"
        f" with {result.unique_words} unique words"
        f" in {format_elapsed(result.elapsed_ns)}"
    )


def render_report(result: WordCountResult) -> List[str]:
    lines = [
        "~" * 44,
        f"Processing {result.file_path}...",
        "-----------",
        "Word Counts",
        "-----------",
    ]
    lines.extend(f"{word}: {count}" for word, count in result.sorted_items())
    lines.append("___________")
    lines.append(summary_line(result))
    lines.append("===========")
    return lines
