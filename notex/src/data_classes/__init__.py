"""Data classes module for chunking and retrieval.

Classes:
    - Chunk: A retrievable slice of a source's text
    - SearchHit: A chunk returned by a search, with its score
    - IndexStats: Diagnostic counts for the chunk index
"""

from notex.src.data_classes.chunk import Chunk
from notex.src.data_classes.index_stats import IndexStats
from notex.src.data_classes.search_hit import SearchHit

__all__ = [
    "Chunk",
    "IndexStats",
    "SearchHit",
]
