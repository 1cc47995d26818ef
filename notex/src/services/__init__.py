"""Services package for notex functionality.

This package contains all service components for business logic.
"""

from .extraction import DocumentExtractor, ExtractionError
from .factory import create_document_extractor, create_retrieval_service
from .retrieval import RetrievalService

__all__ = [
    "RetrievalService",
    "DocumentExtractor",
    "ExtractionError",
    # Factory Functions
    "create_retrieval_service",
    "create_document_extractor",
]
