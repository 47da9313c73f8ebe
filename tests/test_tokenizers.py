from __future__ import annotations

from collections import Counter
from pathlib import Path

import pytest

from common.errors import BackendError, ErrorCode
from common.text import split_words
from core.tokenize import (
    BufferedTokenizer,
    InlineSource,
    LineTokenizer,
    RescanTokenizer,
    TextSource,
    build_tokenizer,
)

SAMPLES = [
    "",
    "   \t\n ",
    "the quick brown fox the Fox",
    "elephant zebra",
    "a\tb\nc\rd\fe",
    "  leading and trailing  \n",
    "line one\r\nline two\r\n\r\nend",
    "unterminated-final-word",
    "punctuation, stays; attached! (yes)",
    "x" * 50 + " " + "y" * 17,
]


def _tokenize(tokenizer) -> list[str]:
    with tokenizer:
        return list(tokenizer)


def test_rescan_returns_words_in_order() -> None:
    tokenizer = RescanTokenizer(InlineSource("the quick brown fox the Fox"))
    assert _tokenize(tokenizer) == ["the", "quick", "brown", "fox", "the", "Fox"]


def test_rescan_offset_advances_past_separator() -> None:
    tokenizer = RescanTokenizer(InlineSource("ab  cd"))
    assert tokenizer.next_word() == "ab"
    assert tokenizer.offset == 3
    assert tokenizer.next_word() == "cd"
    assert tokenizer.offset == 6


def test_rescan_end_of_input_is_terminal() -> None:
    tokenizer = RescanTokenizer(InlineSource("one"))
    assert tokenizer.next_word() == "one"
    assert tokenizer.next_word() is None
    assert tokenizer.next_word() is None
    assert tokenizer.exhausted


def test_rescan_reopens_the_file_for_every_word(tmp_path: Path) -> None:
    path = tmp_path / "words.txt"
    path.write_text("alpha beta gamma", encoding="utf-8")
    opened: list[int] = []

    class CountingSource(TextSource):
        def open(self):  # type: ignore[override]
            opened.append(1)
            return TextSource.open(self)

    source = CountingSource(path=path, encoding="utf-8")
    assert _tokenize(RescanTokenizer(source)) == ["alpha", "beta", "gamma"]
    assert len(opened) == 3


@pytest.mark.parametrize("text", SAMPLES)
def test_single_cursor_mode_matches_rescan(text: str) -> None:
    rescanned = _tokenize(RescanTokenizer(InlineSource(text)))
    forward = _tokenize(RescanTokenizer(InlineSource(text), rescan=False))
    assert forward == rescanned == split_words(text)


@pytest.mark.parametrize("chunk_size", [1, 2, 3, 4, 5, 7, 16, 65536])
@pytest.mark.parametrize("text", SAMPLES)
def test_buffered_matches_reference_for_any_chunk_size(text: str, chunk_size: int) -> None:
    reference = _tokenize(RescanTokenizer(InlineSource(text)))
    buffered = _tokenize(BufferedTokenizer(InlineSource(text), chunk_size=chunk_size))
    assert buffered == reference


@pytest.mark.parametrize("text", SAMPLES)
def test_lines_matches_reference(text: str) -> None:
    reference = _tokenize(RescanTokenizer(InlineSource(text)))
    assert _tokenize(LineTokenizer(InlineSource(text))) == reference


def test_buffered_stitches_word_split_across_chunks() -> None:
    tokenizer = BufferedTokenizer(InlineSource("elephant zebra"), chunk_size=3)
    assert tokenizer.next_word() == "elephant"
    assert tokenizer.dangling is None
    assert tokenizer.next_word() == "zebra"
    assert tokenizer.next_word() is None
    assert tokenizer.next_word() is None


def test_buffered_fragment_ends_at_chunk_boundary_followed_by_space() -> None:
    # "abc" fills the first chunk exactly; the next chunk starts with a separator
    assert _tokenize(BufferedTokenizer(InlineSource("abc def"), chunk_size=3)) == ["abc", "def"]


def test_buffered_rejects_zero_chunk_size() -> None:
    with pytest.raises(ValueError):
        BufferedTokenizer(InlineSource("x"), chunk_size=0)


def test_all_separator_classes_split_words() -> None:
    words = _tokenize(RescanTokenizer(InlineSource("a\tb\nc\rd\fe")))
    assert words == ["a", "b", "c", "d", "e"]


def test_vertical_tab_and_nul_are_word_characters() -> None:
    for strategy in ("rescan", "buffered", "lines"):
        tokenizer = build_tokenizer(InlineSource("a\x0bb c\x00d"), strategy, chunk_size=2)
        assert _tokenize(tokenizer) == ["a\x0bb", "c\x00d"]


def test_retokenizing_joined_words_gives_same_multiset() -> None:
    text = "Some\ttext\n\nwith  Some\rrepeated\fwords words"
    first = _tokenize(BufferedTokenizer(InlineSource(text), chunk_size=4))
    second = _tokenize(BufferedTokenizer(InlineSource(" ".join(first)), chunk_size=4))
    assert Counter(second) == Counter(first)


def test_tokenizers_read_files_on_disk(tmp_path: Path) -> None:
    path = tmp_path / "sample.txt"
    path.write_text("Grüße aus\nKöln\n", encoding="utf-8")
    source = TextSource(path=path, encoding="utf-8")
    for strategy in ("rescan", "buffered", "lines"):
        assert _tokenize(build_tokenizer(source, strategy, chunk_size=2)) == ["Grüße", "aus", "Köln"]


def test_close_releases_handle_mid_stream(tmp_path: Path) -> None:
    path = tmp_path / "sample.txt"
    path.write_text("one two three", encoding="utf-8")
    tokenizer = BufferedTokenizer(TextSource(path=path, encoding="utf-8"), chunk_size=4)
    assert tokenizer.next_word() == "one"
    tokenizer.close()
    tokenizer.close()
    assert tokenizer._handle is None


def test_unknown_strategy_is_config_error() -> None:
    with pytest.raises(BackendError) as exc:
        build_tokenizer(InlineSource("x"), "regex")
    assert exc.value.code == ErrorCode.CONFIG_ERROR
