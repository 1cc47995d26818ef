"""Text chunking module.

This module splits raw text into overlapping windows that become the unit of
retrieval. The splitting unit depends on the script of the text:

1. CJK-dominant text - windows are counted in characters, because CJK scripts do
   not separate words with whitespace
2. Everything else - windows are counted in whitespace-delimited words

The module defines a BaseTextChunker abstract class and the WindowChunker
implementation.
"""

import abc
import logging
from typing import List, Optional, Sequence, Tuple

from notex.src.services.retrieval.exceptions import ChunkingConfigError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1000
DEFAULT_CHUNK_OVERLAP = 200
DEFAULT_CJK_RATIO_THRESHOLD = 0.3

# CJK Unified Ideographs block
CJK_START = 0x4E00
CJK_END = 0x9FFF


def cjk_ratio(text: str) -> float:
    """Return the share of characters in ``text`` that are CJK unified ideographs."""
    if not text:
        return 0.0
    cjk_count = sum(1 for ch in text if CJK_START <= ord(ch) <= CJK_END)
    return cjk_count / len(text)


def resolve_chunk_params(chunk_size: int, chunk_overlap: int) -> Tuple[int, int]:
    """Substitute defaults for out-of-range chunk parameters and validate them.

    Args:
        chunk_size: Requested window length; non-positive values mean the default
        chunk_overlap: Requested overlap; negative values mean the default

    Returns:
        The resolved ``(chunk_size, chunk_overlap)`` pair

    Raises:
        ChunkingConfigError: If the resolved overlap is not smaller than the size
    """
    if chunk_size <= 0:
        chunk_size = DEFAULT_CHUNK_SIZE
    if chunk_overlap < 0:
        chunk_overlap = DEFAULT_CHUNK_OVERLAP
    if chunk_overlap >= chunk_size:
        raise ChunkingConfigError(chunk_size, chunk_overlap)
    return chunk_size, chunk_overlap


class BaseTextChunker(abc.ABC):
    """Base abstract class for text chunkers.

    All chunking strategies should implement this interface.
    """

    @abc.abstractmethod
    def split(self, text: str, chunk_size: int, chunk_overlap: int) -> List[str]:
        """Split text into an ordered list of chunk strings.

        Args:
            text: Text to split
            chunk_size: Target chunk length in the chunker's unit
            chunk_overlap: Units shared by consecutive chunks

        Returns:
            Chunk strings in document order
        """


class WindowChunker(BaseTextChunker):
    """Splits text into fixed-size overlapping windows.

    CJK-dominant text is windowed over characters and the window is emitted
    as-is; other text is windowed over whitespace-delimited words that are
    re-joined with single spaces.

    Attributes:
        cjk_ratio_threshold: Share of CJK ideographs above which text is
            windowed by character
    """

    def __init__(self, cjk_ratio_threshold: Optional[float] = None):
        """Initialize the chunker.

        Args:
            cjk_ratio_threshold: Override for the CJK detection threshold
        """
        self.cjk_ratio_threshold: float = (
            DEFAULT_CJK_RATIO_THRESHOLD
            if cjk_ratio_threshold is None
            else cjk_ratio_threshold
        )

    def is_cjk_dominant(self, text: str) -> bool:
        """Check whether text should be split by character count."""
        return cjk_ratio(text) > self.cjk_ratio_threshold

    def split(self, text: str, chunk_size: int, chunk_overlap: int) -> List[str]:
        """Split text into overlapping windows.

        The same windowing runs over characters or words: a window spans
        ``[position, position + chunk_size)`` clamped to the sequence length,
        and the position advances by ``chunk_size - chunk_overlap`` until a
        window reaches the end of the sequence.

        Args:
            text: Text to split; empty text yields no chunks
            chunk_size: Window length; non-positive values mean 1000
            chunk_overlap: Units shared by consecutive windows; negative values
                mean 200

        Returns:
            Chunk strings in document order

        Raises:
            ChunkingConfigError: If the resolved overlap is not smaller than the
                resolved chunk size
        """
        chunk_size, chunk_overlap = resolve_chunk_params(chunk_size, chunk_overlap)
        logger.debug(
            f"Splitting text (len={len(text)}, chunk_size={chunk_size}, overlap={chunk_overlap})"
        )

        if not text:
            return []

        if self.is_cjk_dominant(text):
            logger.debug("Using CJK splitting (by character count)")
            chunks = [
                "".join(window)
                for window in self._windows(list(text), chunk_size, chunk_overlap)
            ]
        else:
            logger.debug("Using word-based splitting")
            chunks = [
                " ".join(window)
                for window in self._windows(text.split(), chunk_size, chunk_overlap)
            ]

        logger.debug(f"Created {len(chunks)} chunks")
        return chunks

    @staticmethod
    def _windows(
        units: Sequence[str], chunk_size: int, chunk_overlap: int
    ) -> List[Sequence[str]]:
        """Cut a unit sequence into overlapping windows.

        Args:
            units: Characters or words to window over
            chunk_size: Window length in units
            chunk_overlap: Units shared by consecutive windows, smaller than
                ``chunk_size``

        Returns:
            Windows in order; empty when ``units`` is empty
        """
        total = len(units)
        if total == 0:
            return []

        step = chunk_size - chunk_overlap
        windows: List[Sequence[str]] = []
        start = 0
        while True:
            end = min(start + chunk_size, total)
            windows.append(units[start:end])
            if end >= total:
                break
            start += step
        return windows
