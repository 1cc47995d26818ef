"""Retrieval components package.

This package provides the components used by the retrieval service:

- BaseTextChunker: Abstract base class for text chunkers
- WindowChunker: Script-aware overlapping window chunker
- ReadWriteLock: Shared/exclusive lock guarding the index
- ChunkIndex: Ordered, concurrency-safe collection of chunks
- BaseChunkRetriever: Abstract base class for chunk retrievers
- LexicalChunkRetriever: Substring/character/word overlap scoring

These components can be composed to build ingestion and retrieval pipelines.
"""

from .chunk_index import ChunkIndex
from .chunk_retriever import BaseChunkRetriever, LexicalChunkRetriever
from .chunker import BaseTextChunker, WindowChunker, cjk_ratio
from .rw_lock import ReadWriteLock

__all__ = [
    "BaseTextChunker",
    "WindowChunker",
    "cjk_ratio",
    "ReadWriteLock",
    "ChunkIndex",
    "BaseChunkRetriever",
    "LexicalChunkRetriever",
]
