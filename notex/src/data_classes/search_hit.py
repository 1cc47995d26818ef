from dataclasses import dataclass
from typing import Any, Dict

from notex.src.data_classes.chunk import Chunk


@dataclass(frozen=True)
class SearchHit:
    """A chunk returned by a search, with the score it was ranked by.

    Attributes:
        chunk: The matched chunk
        score: Lexical relevance score; 0.0 for chunks returned by the
            no-match fallback
    """

    chunk: Chunk
    score: float

    @property
    def text(self) -> str:
        return self.chunk.text

    @property
    def source_tag(self) -> str:
        return self.chunk.source_tag

    def to_json(self) -> Dict[str, Any]:
        """Convert the hit to a JSON-compatible dictionary."""
        result = self.chunk.to_json()
        result["score"] = self.score
        return result
