"""Retrieval service for source ingestion and chunk search.

This module ties the chunker, the chunk index and the chunk retriever together
behind the operations the rest of the application uses:

- ingest: chunk a source's text and append it to the index
- remove: drop every chunk of a source
- search: rank indexed chunks against a query
- stats: diagnostic counts for health/status reporting

The service also supports:
- Restoring the index at startup by replaying stored source texts
- Rendering search hits into the grounding context of a chat prompt

The index lives only in memory. One RetrievalService is created by the
composition root and shared by every request handler.
"""

import logging
import threading
from typing import Iterable, List, Optional, Tuple

from notex.conf.prompts import CONTEXT_ENTRY_TEMPLATE, CONTEXT_HEADER
from notex.src.data_classes import IndexStats, SearchHit

from .components import BaseChunkRetriever, BaseTextChunker, ChunkIndex
from .components.chunker import DEFAULT_CHUNK_OVERLAP, DEFAULT_CHUNK_SIZE
from .components.chunk_retriever import DEFAULT_SEARCH_LIMIT
from .exceptions import OperationCancelledError

logger = logging.getLogger(__name__)


class RetrievalService:
    """Ingestion and retrieval over an in-memory chunk index.

    Attributes:
        chunker (BaseTextChunker): Splits source text into chunk strings
        index (ChunkIndex): Shared chunk storage
        retriever (BaseChunkRetriever): Ranks indexed chunks against queries
        chunk_size (int): Chunk size used when a caller does not pass one
        chunk_overlap (int): Chunk overlap used when a caller does not pass one
        search_limit (int): Number of hits returned when a caller does not pass a limit
    """

    # === Initialization ===

    def __init__(
        self,
        chunker: BaseTextChunker,
        index: ChunkIndex,
        retriever: BaseChunkRetriever,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
        search_limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> None:
        """Initialize the retrieval service with component dependencies.

        Args:
            chunker: Text chunker used for ingestion
            index: Chunk index shared with the retriever
            retriever: Chunk retriever searching ``index``
            chunk_size: Default chunk size for ingestion
            chunk_overlap: Default chunk overlap for ingestion
            search_limit: Default number of hits per search
        """
        if retriever.index is not index:
            raise ValueError("Retriever must search the same index the service writes to")

        self.chunker: BaseTextChunker = chunker
        self.index: ChunkIndex = index
        self.retriever: BaseChunkRetriever = retriever
        self.chunk_size: int = chunk_size
        self.chunk_overlap: int = chunk_overlap
        self.search_limit: int = search_limit

        logger.info(
            f"RetrievalService initialized with: "
            f"chunker={type(chunker).__name__}, "
            f"retriever={type(retriever).__name__}, "
            f"chunk_size={chunk_size}, chunk_overlap={chunk_overlap}"
        )

    # === Public Methods ===

    def ingest(
        self,
        source_tag: str,
        text: str,
        chunk_size: Optional[int] = None,
        chunk_overlap: Optional[int] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> int:
        """Chunk a source's text and append the chunks to the index.

        Args:
            source_tag: Identifier of the source
            text: Plain text of the source; empty text adds nothing
            chunk_size: Chunk size; None uses the service default
            chunk_overlap: Chunk overlap; None uses the service default
            cancel_event: Optional event; when set before the append, nothing is added

        Returns:
            Number of chunks added

        Raises:
            ChunkingConfigError: If the resolved overlap is not smaller than the chunk size
            IndexCapacityError: If the index cannot hold the new chunks
            OperationCancelledError: If ``cancel_event`` was set
        """
        size = self.chunk_size if chunk_size is None else chunk_size
        overlap = self.chunk_overlap if chunk_overlap is None else chunk_overlap

        texts = self.chunker.split(text, size, overlap)
        if cancel_event is not None and cancel_event.is_set():
            raise OperationCancelledError(
                f"Ingestion of source '{source_tag}' cancelled before indexing"
            )

        if not texts:
            logger.info(f"Source '{source_tag}' produced no chunks")
            return 0

        added = self.index.append(texts, source_tag)
        return len(added)

    def remove(self, source_tag: str) -> int:
        """Remove every chunk of a source. Unknown sources are ignored.

        Args:
            source_tag: Identifier of the source

        Returns:
            Number of chunks removed
        """
        return self.index.delete_by_source(source_tag)

    def search(
        self,
        query: str,
        limit: Optional[int] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[SearchHit]:
        """Rank indexed chunks against a query.

        Args:
            query: Free-text query
            limit: Maximum number of hits; None uses the service default
            cancel_event: Optional event that aborts scoring when set

        Returns:
            Ranked hits, or leading chunks in insertion order when nothing matches

        Raises:
            OperationCancelledError: If ``cancel_event`` is set during scoring
        """
        return self.retriever.search(
            query,
            self.search_limit if limit is None else limit,
            cancel_event=cancel_event,
        )

    def stats(self) -> IndexStats:
        """Get diagnostic counts for the index.

        Returns:
            IndexStats with total chunks, distinct sources and per-source counts
        """
        counts = self.index.source_counts()
        return IndexStats(
            total_chunks=sum(counts.values()),
            total_sources=len(counts),
            chunks_by_source=counts,
        )

    def get_sources(self) -> List[str]:
        """Get the tags of all indexed sources in first-insertion order."""
        return list(self.index.source_counts())

    def restore(self, sources: Iterable[Tuple[str, str]]) -> int:
        """Rebuild the index from stored source texts.

        Used at startup, since the index is not persisted. Sources with empty
        text are skipped; a source that fails to ingest is logged and skipped
        so the others are still restored.

        Args:
            sources: ``(source_tag, text)`` pairs as held by durable storage

        Returns:
            Total number of chunks added
        """
        restored = 0
        for source_tag, text in sources:
            if not text:
                continue
            try:
                restored += self.ingest(source_tag, text)
            except (ValueError, RuntimeError) as e:
                logger.error(f"Failed to restore source '{source_tag}': {str(e)}")

        logger.info(f"Chunk index restored: {self.index.size()} chunks")
        return restored

    def build_context(
        self, query: str, limit: Optional[int] = None
    ) -> Tuple[str, List[SearchHit]]:
        """Retrieve chunks for a query and render them as prompt context.

        Args:
            query: The user's question
            limit: Maximum number of chunks; None uses the service default

        Returns:
            Tuple of (context string, hits used). The context is empty when the
            index is empty.
        """
        hits = self.search(query, limit)
        if not hits:
            return "", hits

        parts = [CONTEXT_HEADER]
        for i, hit in enumerate(hits, start=1):
            parts.append(
                CONTEXT_ENTRY_TEMPLATE.format(
                    index=i, text=hit.text, source_tag=hit.source_tag
                )
            )
        return "".join(parts), hits

    @staticmethod
    def unique_sources(hits: Iterable[SearchHit]) -> List[str]:
        """List the distinct source tags of hits in first-seen order."""
        return list(dict.fromkeys(hit.source_tag for hit in hits))
