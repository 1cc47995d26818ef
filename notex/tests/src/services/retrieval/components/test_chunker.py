"""Unit tests for the WindowChunker component."""

import unittest

import pytest

from notex.src.services.retrieval.components.chunker import (
    DEFAULT_CHUNK_SIZE,
    WindowChunker,
    cjk_ratio,
    resolve_chunk_params,
)
from notex.src.services.retrieval.exceptions import ChunkingConfigError


class TestWindowChunker(unittest.TestCase):
    """Test cases for the WindowChunker component."""

    def setUp(self) -> None:
        self.chunker = WindowChunker()

    def test_word_windows_with_overlap(self) -> None:
        text = "the quick brown fox jumps over the lazy dog"
        chunks = self.chunker.split(text, 5, 1)
        self.assertEqual(
            chunks, ["the quick brown fox jumps", "jumps over the lazy dog"]
        )

    def test_word_windows_collapse_whitespace(self) -> None:
        chunks = self.chunker.split("alpha\n\nbeta\tgamma   delta", 2, 0)
        self.assertEqual(chunks, ["alpha beta", "gamma delta"])

    def test_text_shorter_than_window_is_one_chunk(self) -> None:
        self.assertEqual(self.chunker.split("one two three", 10, 2), ["one two three"])

    def test_last_window_is_clamped(self) -> None:
        chunks = self.chunker.split("a b c d e f g", 3, 1)
        self.assertEqual(chunks, ["a b c", "c d e", "e f g"])

        chunks = self.chunker.split("a b c d e f g h", 3, 1)
        self.assertEqual(chunks, ["a b c", "c d e", "e f g", "g h"])

    def test_cjk_windows_by_character(self) -> None:
        text = "今天天气很好我们去公园"
        chunks = self.chunker.split(text, 4, 1)
        self.assertEqual(chunks, ["今天天气", "气很好我", "我们去公", "公园"])
        for chunk in chunks:
            self.assertLessEqual(len(chunk), 4)

    def test_cjk_windows_keep_whitespace(self) -> None:
        text = "你好 世界"
        self.assertEqual(self.chunker.split(text, 3, 0), ["你好 ", "世界"])

    def test_latin_text_with_few_cjk_characters_splits_by_word(self) -> None:
        text = "hello world this is mostly english 你"
        chunks = self.chunker.split(text, 3, 0)
        self.assertEqual(chunks[0], "hello world this")

    def test_empty_text_yields_no_chunks(self) -> None:
        self.assertEqual(self.chunker.split("", 5, 1), [])

    def test_whitespace_only_text_yields_no_chunks(self) -> None:
        self.assertEqual(self.chunker.split("   \n\t ", 5, 1), [])

    def test_defaults_substituted(self) -> None:
        words = " ".join(f"w{i}" for i in range(DEFAULT_CHUNK_SIZE + 1))
        chunks = self.chunker.split(words, 0, -1)
        self.assertEqual(len(chunks), 2)
        self.assertEqual(len(chunks[0].split()), DEFAULT_CHUNK_SIZE)
        # step is 800, so the second window starts at word 800
        self.assertTrue(chunks[1].startswith("w800 "))

    def test_overlap_not_smaller_than_size_raises(self) -> None:
        with self.assertRaises(ChunkingConfigError):
            self.chunker.split("a b c", 3, 3)
        with self.assertRaises(ChunkingConfigError):
            self.chunker.split("a b c", 2, 5)

    def test_invalid_params_raise_even_for_empty_text(self) -> None:
        with self.assertRaises(ChunkingConfigError):
            self.chunker.split("", 4, 4)

    def test_custom_threshold(self) -> None:
        chunker = WindowChunker(cjk_ratio_threshold=0.9)
        # Half CJK: below the custom threshold, so split by word
        self.assertFalse(chunker.is_cjk_dominant("中文ab"))
        self.assertTrue(WindowChunker().is_cjk_dominant("中文ab"))


@pytest.mark.parametrize(
    "text,expected",
    [
        ("", 0.0),
        ("abcd", 0.0),
        ("中文", 1.0),
        ("中a", 0.5),
        ("日本語テキスト", 3 / 7),
    ],
)
def test_cjk_ratio(text: str, expected: float) -> None:
    assert cjk_ratio(text) == pytest.approx(expected)


def test_ratio_exactly_at_threshold_is_not_cjk() -> None:
    chunker = WindowChunker(cjk_ratio_threshold=0.5)
    assert not chunker.is_cjk_dominant("中a")


@pytest.mark.parametrize(
    "size,overlap,expected",
    [
        (0, -1, (1000, 200)),
        (-5, 10, (1000, 10)),
        (500, -3, (500, 200)),
        (10, 0, (10, 0)),
    ],
)
def test_resolve_chunk_params(size: int, overlap: int, expected: tuple) -> None:
    assert resolve_chunk_params(size, overlap) == expected


def test_resolve_chunk_params_rejects_default_overlap_on_small_size() -> None:
    with pytest.raises(ChunkingConfigError) as exc_info:
        resolve_chunk_params(100, -1)
    assert exc_info.value.chunk_size == 100
    assert exc_info.value.chunk_overlap == 200


WINDOW_PARAMS = [(5, 1), (3, 0), (7, 6), (10, 3)]


@pytest.mark.parametrize("chunk_size,chunk_overlap", WINDOW_PARAMS)
@pytest.mark.parametrize("length", range(1, 40))
def test_word_window_count_and_overlap(length: int, chunk_size: int, chunk_overlap: int) -> None:
    if length <= chunk_overlap:
        pytest.skip("count formula only holds when the text is longer than the overlap")

    words = [f"w{i}" for i in range(length)]
    chunks = [c.split() for c in WindowChunker().split(" ".join(words), chunk_size, chunk_overlap)]

    expected = -(-(length - chunk_overlap) // (chunk_size - chunk_overlap))
    assert len(chunks) == expected
    assert all(len(c) <= chunk_size for c in chunks)
    for prev, nxt in zip(chunks, chunks[1:]):
        if chunk_overlap:
            assert prev[-chunk_overlap:] == nxt[:chunk_overlap]
        else:
            assert words.index(nxt[0]) == words.index(prev[-1]) + 1
    # every word is covered, in order
    assert chunks[0][0] == "w0"
    assert chunks[-1][-1] == f"w{length - 1}"


@pytest.mark.parametrize("chunk_size,chunk_overlap", WINDOW_PARAMS)
@pytest.mark.parametrize("length", [1, 6, 11, 25])
def test_character_window_count_and_overlap(length: int, chunk_size: int, chunk_overlap: int) -> None:
    if length <= chunk_overlap:
        pytest.skip("count formula only holds when the text is longer than the overlap")

    text = "".join(chr(0x4E00 + i) for i in range(length))
    chunks = WindowChunker().split(text, chunk_size, chunk_overlap)

    assert len(chunks) == -(-(length - chunk_overlap) // (chunk_size - chunk_overlap))
    for prev, nxt in zip(chunks, chunks[1:]):
        assert prev[len(prev) - chunk_overlap:] == nxt[:chunk_overlap]
    assert chunks[0][0] == text[0]
    assert chunks[-1][-1] == text[-1]


def test_forty_percent_cjk_splits_by_character() -> None:
    chunks = WindowChunker().split("中文字体abcdef", 3, 0)
    assert chunks == ["中文字", "体ab", "cde", "f"]


def test_ten_percent_cjk_splits_by_word() -> None:
    chunks = WindowChunker().split("中abcdefghi", 3, 0)
    assert chunks == ["中abcdefghi"]
