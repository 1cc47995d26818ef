"""Retrieval package for source ingestion and chunk search.

The main interface is through the RetrievalService class which coordinates
the chunker, the chunk index and the chunk retriever.
"""

from .exceptions import ChunkingConfigError, IndexCapacityError, OperationCancelledError
from .retrieval_service import RetrievalService

__all__ = [
    "RetrievalService",
    "ChunkingConfigError",
    "IndexCapacityError",
    "OperationCancelledError",
]
