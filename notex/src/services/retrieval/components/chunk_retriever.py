"""Chunk retrieval module.

This module provides chunk retrieval classes that score and rank the chunks of
a ChunkIndex against a free-text query. The module includes an abstract base
class and a lexical implementation.

The lexical scorer is a heuristic matcher rather than a vector search. It is
meant to work on any script without a tokenizer, which is why it scores
substrings and individual characters instead of terms.
"""

import abc
import logging
import threading
from typing import List, Optional, Sequence

from notex.src.data_classes import Chunk, SearchHit
from notex.src.services.retrieval.components.chunk_index import ChunkIndex
from notex.src.services.retrieval.exceptions import OperationCancelledError

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 5
DEFAULT_CANCEL_CHECK_INTERVAL = 256

SUBSTRING_BONUS = 10.0
CHAR_COVERAGE_WEIGHT = 5.0
WORD_BONUS = 2.0
MIN_WORD_LENGTH = 3
TOPIC_KEYWORD_BONUS = 1.0


class BaseChunkRetriever(abc.ABC):
    """Base class for chunk retrievers.

    Defines the interface for chunk retrieval systems.

    Attributes:
        index: The chunk index searched by this retriever
    """

    def __init__(self, index: ChunkIndex) -> None:
        """Initialize the chunk retriever.

        Args:
            index: The chunk index to search
        """
        self.index = index

    @abc.abstractmethod
    def search(
        self,
        query: str,
        limit: int,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[SearchHit]:
        """Retrieve the most relevant chunks for a query.

        Args:
            query: Free-text query
            limit: Maximum number of hits to return
            cancel_event: Optional event that aborts the search when set

        Returns:
            Hits ordered from most to least relevant
        """


class _ScoredQuery:
    """Query-dependent parts of the score, computed once per search."""

    def __init__(self, query: str, topic_keywords: Sequence[str]) -> None:
        self.text = query.lower()
        self.chars = list(self.text)
        self.words = [w for w in self.text.split() if len(w) >= MIN_WORD_LENGTH]
        self.topic_bonus = (
            TOPIC_KEYWORD_BONUS
            if any(keyword in self.text for keyword in topic_keywords)
            else 0.0
        )

    def score(self, content: str) -> float:
        """Score lower-cased chunk text against the query."""
        score = 0.0

        if self.text in content:
            score += SUBSTRING_BONUS

        if self.chars:
            match_count = sum(1 for ch in self.chars if ch in content)
            if match_count > 0:
                score += CHAR_COVERAGE_WEIGHT * (match_count / len(self.chars))

        for word in self.words:
            if word in content:
                score += WORD_BONUS

        return score + self.topic_bonus


class LexicalChunkRetriever(BaseChunkRetriever):
    """Scores chunks by substring, character and word overlap with the query.

    Per chunk, against the lower-cased query and chunk text:

    1. +10.0 if the whole query occurs in the chunk
    2. +5.0 times the share of query characters that occur in the chunk
    3. +2.0 for every query word of three or more characters found in the chunk
    4. +1.0 once if the query contains any of the topic keywords

    Chunks scoring 0 are not candidates. When no chunk is a candidate, the
    first ``limit`` chunks of the index are returned in insertion order so the
    caller always has some context to work with.

    Attributes:
        topic_keywords: Query words that mark a question about the sources as
            a whole (for instance "what is this document about")
        cancel_check_interval: Number of chunks scored between checks of the
            cancellation event
    """

    def __init__(
        self,
        index: ChunkIndex,
        topic_keywords: Optional[Sequence[str]] = None,
        cancel_check_interval: int = DEFAULT_CANCEL_CHECK_INTERVAL,
    ) -> None:
        """Initialize the lexical retriever.

        Args:
            index: The chunk index to search
            topic_keywords: Trigger words for the topic bonus; lower-cased on
                construction. None or empty disables the bonus.
            cancel_check_interval: Chunks scored between cancellation checks
        """
        super().__init__(index)
        self.topic_keywords: List[str] = [
            keyword.lower() for keyword in (topic_keywords or []) if keyword
        ]
        self.cancel_check_interval = max(1, cancel_check_interval)
        logger.info(
            f"Lexical chunk retriever initialized with {len(self.topic_keywords)} topic keywords"
        )

    def score(self, query: str, text: str) -> float:
        """Score a single text against a query.

        Args:
            query: Free-text query
            text: Chunk text

        Returns:
            The chunk's relevance score; 0.0 means no match
        """
        return _ScoredQuery(query, self.topic_keywords).score(text.lower())

    def search(
        self,
        query: str,
        limit: int,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[SearchHit]:
        """Retrieve the top-scoring chunks for a query.

        Args:
            query: Free-text query; may be empty
            limit: Maximum number of hits; non-positive values mean 5
            cancel_event: Optional event checked between chunks

        Returns:
            Up to ``limit`` hits, highest score first. Ties keep insertion order.

        Raises:
            OperationCancelledError: If ``cancel_event`` is set during scoring
        """
        if limit <= 0:
            limit = DEFAULT_SEARCH_LIMIT

        chunks = self.index.snapshot()
        logger.info(f"Searching for '{query}' (total chunks: {len(chunks)})")

        if not chunks:
            logger.info("No chunks available for search")
            return []

        candidates = self._score_chunks(chunks, query, cancel_event)
        logger.info(f"Found {len(candidates)} matching chunks")

        if not candidates:
            logger.info("No matches found, returning leading chunks as fallback")
            return [SearchHit(chunk=chunk, score=0.0) for chunk in chunks[:limit]]

        ranked = sorted(candidates, key=lambda hit: hit.score, reverse=True)[:limit]
        logger.info(
            f"Returning top {len(ranked)} results (best score: {ranked[0].score:.2f})"
        )
        return ranked

    def _score_chunks(
        self,
        chunks: Sequence[Chunk],
        query: str,
        cancel_event: Optional[threading.Event],
    ) -> List[SearchHit]:
        """Score every chunk and keep those with a positive score.

        Args:
            chunks: Snapshot of the index
            query: Free-text query
            cancel_event: Optional event checked every ``cancel_check_interval`` chunks

        Returns:
            Candidate hits in insertion order
        """
        scored_query = _ScoredQuery(query, self.topic_keywords)
        candidates: List[SearchHit] = []
        for i, chunk in enumerate(chunks):
            if (
                cancel_event is not None
                and i % self.cancel_check_interval == 0
                and cancel_event.is_set()
            ):
                raise OperationCancelledError(
                    f"Search cancelled after scoring {i} of {len(chunks)} chunks"
                )

            score = scored_query.score(chunk.text.lower())
            if score > 0:
                candidates.append(SearchHit(chunk=chunk, score=score))
        return candidates
