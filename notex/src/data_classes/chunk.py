"""Data class representing one retrievable slice of a source's text."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Chunk:
    """An immutable unit of retrievable text.

    Attributes:
        text: The chunk's content
        source_tag: Identifier of the source the chunk was cut from; shared by
            all chunks of that source
        ordinal: Zero-based position of the chunk within its source
    """

    text: str
    source_tag: str
    ordinal: int

    def to_json(self) -> Dict[str, Any]:
        """Convert the chunk to a JSON-compatible dictionary.

        Returns:
            Dictionary containing all chunk attributes
        """
        return {
            "text": self.text,
            "source_tag": self.source_tag,
            "ordinal": self.ordinal,
        }

    def __str__(self) -> str:
        return f"Chunk(source={self.source_tag}, ordinal={self.ordinal}, length={len(self.text)} chars)"
