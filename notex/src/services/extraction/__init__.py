"""Document extraction package."""

from .document_extractor import DocumentExtractor, ExtractionError

__all__ = ["DocumentExtractor", "ExtractionError"]
