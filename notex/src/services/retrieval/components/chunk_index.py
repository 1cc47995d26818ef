"""In-memory chunk index.

The index holds every chunk of every ingested source in insertion order. The
backing collection is an immutable tuple that mutators replace wholesale, so a
snapshot handed to a reader stays valid while later appends and deletions
proceed.
"""

import logging
from collections import Counter
from typing import Dict, List, Optional, Sequence, Tuple

from notex.src.data_classes import Chunk
from notex.src.services.retrieval.components.rw_lock import ReadWriteLock
from notex.src.services.retrieval.exceptions import IndexCapacityError

logger = logging.getLogger(__name__)


class ChunkIndex:
    """Ordered, concurrency-safe collection of chunks tagged by source.

    Mutators (``append``, ``delete_by_source``) take the lock exclusively;
    ``snapshot`` and the counting methods take it shared.

    Attributes:
        max_chunks: Optional capacity; appends that would exceed it are rejected
    """

    def __init__(self, max_chunks: Optional[int] = None) -> None:
        """Initialize an empty index.

        Args:
            max_chunks: Maximum number of chunks to hold, or None for no limit
        """
        if max_chunks is not None and max_chunks <= 0:
            raise ValueError(f"max_chunks must be positive, got {max_chunks}")
        self.max_chunks: Optional[int] = max_chunks
        self._chunks: Tuple[Chunk, ...] = ()
        self._lock = ReadWriteLock()

    def append(self, texts: Sequence[str], source_tag: str) -> List[Chunk]:
        """Add chunk texts for a source to the end of the index.

        Ordinals continue from the number of chunks the source already holds,
        so they stay contiguous per source. The append is all-or-nothing.

        Args:
            texts: Chunk texts in the order the chunker produced them
            source_tag: Identifier of the originating source

        Returns:
            The chunks that were added

        Raises:
            IndexCapacityError: If the append would exceed ``max_chunks``
        """
        if not texts:
            return []

        with self._lock.write_locked():
            current = len(self._chunks)
            if self.max_chunks is not None and current + len(texts) > self.max_chunks:
                raise IndexCapacityError(self.max_chunks, current, len(texts))

            first_ordinal = sum(1 for c in self._chunks if c.source_tag == source_tag)
            added = [
                Chunk(text=text, source_tag=source_tag, ordinal=first_ordinal + i)
                for i, text in enumerate(texts)
            ]
            self._chunks = self._chunks + tuple(added)
            total = len(self._chunks)

        logger.info(
            f"Ingested {len(added)} chunks from source '{source_tag}' (total chunks: {total})"
        )
        return added

    def delete_by_source(self, source_tag: str) -> int:
        """Remove every chunk belonging to a source.

        Removing a source that is not indexed is a no-op.

        Args:
            source_tag: Identifier of the source to remove

        Returns:
            Number of chunks removed
        """
        with self._lock.write_locked():
            kept = tuple(c for c in self._chunks if c.source_tag != source_tag)
            removed = len(self._chunks) - len(kept)
            if removed:
                self._chunks = kept

        if removed:
            logger.info(f"Removed {removed} chunks of source '{source_tag}'")
        else:
            logger.debug(f"No chunks indexed for source '{source_tag}', nothing removed")
        return removed

    def snapshot(self) -> Tuple[Chunk, ...]:
        """Return the current chunks in insertion order.

        The returned tuple is never mutated by the index.
        """
        with self._lock.read_locked():
            return self._chunks

    def size(self) -> int:
        """Return the number of chunks currently held."""
        with self._lock.read_locked():
            return len(self._chunks)

    def source_counts(self) -> Dict[str, int]:
        """Return the chunk count per source tag, in first-insertion order."""
        return dict(Counter(c.source_tag for c in self.snapshot()))

    def __len__(self) -> int:
        return self.size()
