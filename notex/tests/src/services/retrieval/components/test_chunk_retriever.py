"""Unit tests for the LexicalChunkRetriever component."""

import threading
import unittest

import pytest

from notex.src.services.retrieval.components.chunk_index import ChunkIndex
from notex.src.services.retrieval.components.chunk_retriever import (
    DEFAULT_SEARCH_LIMIT,
    LexicalChunkRetriever,
)
from notex.src.services.retrieval.exceptions import OperationCancelledError

TOPIC_KEYWORDS = ["介绍", "什么", "啥", "内容", "文档", "说"]


class TestLexicalChunkRetriever(unittest.TestCase):
    """Test cases for the LexicalChunkRetriever component."""

    def setUp(self) -> None:
        self.index = ChunkIndex()
        self.retriever = LexicalChunkRetriever(self.index)

    def test_empty_index_returns_nothing(self) -> None:
        self.assertEqual(self.retriever.search("anything", 5), [])

    def test_exact_match_ranks_first(self) -> None:
        self.index.append(
            ["the quick brown fox jumps", "jumps over the lazy dog"], "doc1"
        )

        hits = self.retriever.search("fox", 5)

        self.assertEqual(hits[0].chunk.ordinal, 0)
        self.assertGreaterEqual(hits[0].score, 10.0)
        # substring + full character coverage + one word
        self.assertAlmostEqual(hits[0].score, 17.0)
        # "o" appears in the second chunk, so it is a weak candidate
        self.assertEqual(len(hits), 2)
        self.assertAlmostEqual(hits[1].score, 5.0 / 3)

    def test_ranking_descending_and_truncated(self) -> None:
        self.index.append(["apple", "apple pie", "banana"], "fruit")

        hits = self.retriever.search("apple pie", 2)

        self.assertEqual([h.text for h in hits], ["apple pie", "apple"])
        self.assertAlmostEqual(hits[0].score, 19.0)
        self.assertAlmostEqual(hits[1].score, 5.0 * 7 / 9 + 2.0)

    def test_fallback_returns_leading_chunks(self) -> None:
        self.index.append(["alpha", "beta", "gamma"], "doc")

        hits = self.retriever.search("888", 2)

        self.assertEqual([h.text for h in hits], ["alpha", "beta"])
        self.assertTrue(all(h.score == 0.0 for h in hits))

    def test_fallback_limited_by_index_size(self) -> None:
        self.index.append(["alpha"], "doc")
        hits = self.retriever.search("888", 5)
        self.assertEqual(len(hits), 1)
        self.assertEqual(hits[0].score, 0.0)

    def test_non_positive_limit_means_default(self) -> None:
        self.index.append([f"fox {i}" for i in range(10)], "doc")

        self.assertEqual(len(self.retriever.search("fox", 0)), DEFAULT_SEARCH_LIMIT)
        self.assertEqual(len(self.retriever.search("fox", -3)), DEFAULT_SEARCH_LIMIT)

    def test_case_insensitive(self) -> None:
        self.index.append(["The Fox"], "doc")
        hits = self.retriever.search("FOX", 5)
        self.assertAlmostEqual(hits[0].score, 17.0)

    def test_empty_query_matches_every_chunk(self) -> None:
        self.index.append(["alpha", "beta"], "doc")
        hits = self.retriever.search("", 5)
        self.assertEqual([h.score for h in hits], [10.0, 10.0])

    def test_score_components(self) -> None:
        # words + full character coverage, no whole-query substring
        self.assertAlmostEqual(
            self.retriever.score("quick fox", "the quick brown fox jumps"), 9.0
        )
        # short words earn no word bonus
        self.assertAlmostEqual(self.retriever.score("ab cd", "ab"), 2.0)
        self.assertEqual(self.retriever.score("xyz", "abc"), 0.0)

    def test_word_length_counts_characters(self) -> None:
        self.assertAlmostEqual(self.retriever.score("中文字", "这是中文字符"), 17.0)

    def test_search_does_not_mutate_index(self) -> None:
        self.index.append(["alpha", "beta"], "doc")
        before = self.index.snapshot()
        self.retriever.search("beta", 5)
        self.assertEqual(self.index.snapshot(), before)


class TestTopicKeywordBonus(unittest.TestCase):
    """Test cases for the topic keyword bonus."""

    def setUp(self) -> None:
        self.index = ChunkIndex()
        self.retriever = LexicalChunkRetriever(self.index, topic_keywords=TOPIC_KEYWORDS)

    def test_topic_query_lifts_every_chunk(self) -> None:
        self.index.append(["hello", "world"], "doc")

        hits = self.retriever.search("介绍", 5)

        self.assertEqual(len(hits), 2)
        self.assertEqual({h.score for h in hits}, {1.0})

    def test_bonus_added_once(self) -> None:
        self.assertEqual(self.retriever.score("介绍什么", "hello"), 1.0)

    def test_keywords_lowercased(self) -> None:
        retriever = LexicalChunkRetriever(self.index, topic_keywords=["About"])
        self.assertEqual(retriever.score("ABOUT", "zzz"), 1.0)


class TestSearchCancellation(unittest.TestCase):
    """Test cases for cancelling a search."""

    def setUp(self) -> None:
        self.index = ChunkIndex()
        self.index.append([f"chunk {i}" for i in range(20)], "doc")

    def test_cancelled_before_start(self) -> None:
        retriever = LexicalChunkRetriever(self.index)
        cancel = threading.Event()
        cancel.set()

        with self.assertRaises(OperationCancelledError):
            retriever.search("chunk", 5, cancel_event=cancel)

    def test_unset_event_does_not_interfere(self) -> None:
        retriever = LexicalChunkRetriever(self.index, cancel_check_interval=1)
        hits = retriever.search("chunk", 5, cancel_event=threading.Event())
        self.assertEqual(len(hits), 5)


@pytest.mark.parametrize("limit", [1, 3, 50])
def test_results_never_exceed_limit(limit: int) -> None:
    index = ChunkIndex()
    index.append([f"fox number {i}" for i in range(10)], "doc")
    hits = LexicalChunkRetriever(index).search("fox", limit)
    assert len(hits) == min(limit, 10)
    scores = [h.score for h in hits]
    assert scores == sorted(scores, reverse=True)
