"""Service factory module for centralized service instantiation.

This module provides factory methods for creating service instances,
keeping service initialization logic in one place.
"""

import logging
from typing import Iterable, Optional, Tuple

from notex.conf.config import Config
from notex.src.services.extraction import DocumentExtractor
from notex.src.services.retrieval import RetrievalService
from notex.src.services.retrieval.components import (
    ChunkIndex,
    LexicalChunkRetriever,
    WindowChunker,
)

logger = logging.getLogger(__name__)


def create_retrieval_service(
    stored_sources: Optional[Iterable[Tuple[str, str]]] = None,
) -> RetrievalService:
    """Create and configure a RetrievalService instance.

    Builds the chunker, index and retriever from Config. When stored sources
    are given, their texts are replayed into the fresh index.

    Args:
        stored_sources: Optional ``(source_tag, text)`` pairs from durable storage

    Returns:
        Configured RetrievalService instance
    """
    logger.info(
        f"Creating chunk index (max_chunks={Config.INDEX_MAX_CHUNKS or 'unbounded'})"
    )
    index = ChunkIndex(max_chunks=Config.INDEX_MAX_CHUNKS)

    chunker = WindowChunker(cjk_ratio_threshold=Config.CJK_RATIO_THRESHOLD)
    retriever = LexicalChunkRetriever(
        index,
        topic_keywords=Config.TOPIC_KEYWORDS,
        cancel_check_interval=Config.CANCEL_CHECK_INTERVAL,
    )

    retrieval_service = RetrievalService(
        chunker=chunker,
        index=index,
        retriever=retriever,
        chunk_size=Config.CHUNK_SIZE,
        chunk_overlap=Config.CHUNK_OVERLAP,
        search_limit=Config.MAX_SOURCES,
    )

    if stored_sources is not None:
        logger.info("Restoring chunk index from stored sources")
        retrieval_service.restore(stored_sources)

    return retrieval_service


def create_document_extractor() -> DocumentExtractor:
    """Create a DocumentExtractor configured from Config."""
    return DocumentExtractor(
        enable_markitdown=Config.ENABLE_MARKITDOWN,
        markitdown_command=Config.MARKITDOWN_COMMAND,
        markitdown_extensions=Config.MARKITDOWN_EXTENSIONS,
    )
