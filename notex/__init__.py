"""
Notex package: the document indexing and retrieval core of a
"chat with your sources" notebook.

This package contains:
- Script-aware text chunking
- A concurrency-safe in-memory chunk index
- Lexical scoring and ranking of chunks against a query
- Document extraction, a Flask API and a command line entry point
- Configuration and utility modules
"""

import logging
import os

__version__ = "1.0.0"

# Configure logging with clickable paths before anything else imports logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(levelname)s: %(pathname)s:%(lineno)d %(message)s",
)


class ClickablePathFilter(logging.Filter):
    """Filter to make file paths clickable in the terminal."""

    def filter(self, record: logging.LogRecord) -> bool:
        if hasattr(record, "pathname"):
            # Convert absolute path to relative path from workspace root
            workspace_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
            try:
                record.pathname = os.path.relpath(record.pathname, workspace_root)
            except ValueError:
                # If path is not under workspace root, keep it as is
                pass
        return True


logging.getLogger().addFilter(ClickablePathFilter())
