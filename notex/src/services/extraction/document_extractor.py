"""Document-to-text extraction.

Plain text formats are read directly. Office documents and PDFs are converted
to Markdown by the external ``markitdown`` command line tool, which writes to a
temporary file that is read back and removed.
"""

import logging
import os
import subprocess
import tempfile
from pathlib import Path
from typing import Iterable, Optional, Union

from notex.conf.config import Config

logger = logging.getLogger(__name__)


class ExtractionError(RuntimeError):
    """Raised when a document cannot be turned into text."""


class DocumentExtractor:
    """Turns files into plain text for ingestion.

    Attributes:
        enable_markitdown: Whether binary formats are converted with markitdown
        markitdown_command: Executable used for conversion
        markitdown_extensions: Lower-case file extensions that need conversion
    """

    def __init__(
        self,
        enable_markitdown: Optional[bool] = None,
        markitdown_command: Optional[str] = None,
        markitdown_extensions: Optional[Iterable[str]] = None,
    ) -> None:
        self.enable_markitdown: bool = (
            Config.ENABLE_MARKITDOWN if enable_markitdown is None else enable_markitdown
        )
        self.markitdown_command: str = markitdown_command or Config.MARKITDOWN_COMMAND
        self.markitdown_extensions = {
            ext.lower()
            for ext in (
                Config.MARKITDOWN_EXTENSIONS
                if markitdown_extensions is None
                else markitdown_extensions
            )
        }

    def needs_conversion(self, path: Union[str, Path]) -> bool:
        """Check if a file's extension requires markitdown conversion."""
        return Path(path).suffix.lower() in self.markitdown_extensions

    def extract(self, path: Union[str, Path]) -> str:
        """Read a document as text.

        Args:
            path: Path to the document

        Returns:
            The document's text (Markdown for converted formats)

        Raises:
            ExtractionError: If the file cannot be read or converted
        """
        path = Path(path)
        if self.enable_markitdown and self.needs_conversion(path):
            return self._convert_with_markitdown(path)

        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise ExtractionError(f"Failed to read {path}: {e}") from e

        logger.info(f"File loaded: {path} ({len(content)} characters)")
        return content

    def _convert_with_markitdown(self, path: Path) -> str:
        """Convert a document to Markdown using the markitdown command line tool.

        Args:
            path: Path to the document

        Returns:
            Converted Markdown text

        Raises:
            ExtractionError: If the tool is missing, fails, or produces no output file
        """
        logger.info(f"Converting with markitdown: {path}")
        fd, tmp_name = tempfile.mkstemp(prefix=f"markitdown_{path.stem}_", suffix=".md")
        os.close(fd)

        try:
            try:
                result = subprocess.run(
                    [self.markitdown_command, str(path), "-o", tmp_name],
                    capture_output=True,
                    text=True,
                )
            except FileNotFoundError as e:
                raise ExtractionError(
                    f"markitdown executable '{self.markitdown_command}' not found"
                ) from e

            if result.returncode != 0:
                output = (result.stdout or "") + (result.stderr or "")
                logger.error(f"markitdown error: {output}")
                raise ExtractionError(
                    f"markitdown conversion failed with exit code {result.returncode}: {output}"
                )

            try:
                content = Path(tmp_name).read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                raise ExtractionError(f"Failed to read markitdown output: {e}") from e
        finally:
            if Path(tmp_name).exists():
                Path(tmp_name).unlink()

        logger.info(
            f"markitdown conversion successful, output size: {len(content)} characters"
        )
        return content
