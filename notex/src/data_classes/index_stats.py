from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class IndexStats:
    """Diagnostic counts for the chunk index.

    Attributes:
        total_chunks: Number of chunks currently held
        total_sources: Number of distinct source tags currently held
        chunks_by_source: Chunk count per source tag
    """

    total_chunks: int
    total_sources: int
    chunks_by_source: Dict[str, int] = field(default_factory=dict)

    def to_json(self) -> Dict[str, Any]:
        return {
            "total_chunks": self.total_chunks,
            "total_sources": self.total_sources,
            "chunks_by_source": dict(self.chunks_by_source),
        }
