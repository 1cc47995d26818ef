"""Source ingestion endpoints module.

This module provides Flask routes that add source text to the chunk index and
remove it again.
"""

import logging
from typing import Optional

from flask import Blueprint, Response, jsonify
from flask_pydantic import validate  # type: ignore
from pydantic import BaseModel, Field, field_validator

from notex.src.services import RetrievalService

logger = logging.getLogger(__name__)


class IngestRequest(BaseModel):
    """Ingest request model for validation."""

    source_tag: str = Field(..., description="Identifier of the source")
    text: str = Field(..., description="Plain text of the source")
    chunk_size: Optional[int] = Field(
        None, description="Chunk size; non-positive values mean the default of 1000"
    )
    chunk_overlap: Optional[int] = Field(
        None, description="Chunk overlap; negative values mean the default of 200"
    )

    @field_validator("source_tag")
    @classmethod
    def validate_source_tag(cls, v: str) -> str:
        """Reject blank source tags.

        Args:
            v: The source tag to validate

        Returns:
            The validated source tag
        """
        if not v.strip():
            raise ValueError("source_tag must not be blank")
        return v


class IngestResponseModel(BaseModel):
    """Ingest response model."""

    source_tag: str = Field(..., description="Identifier of the source")
    chunk_count: int = Field(..., description="Number of chunks created")


def init_source_routes(retrieval_service: RetrievalService) -> Blueprint:
    """Initialize source routes with the provided services.

    Args:
        retrieval_service: Service for ingestion and retrieval operations.

    Returns:
        Blueprint: Flask blueprint with configured source routes.
    """
    sources_bp = Blueprint("sources", __name__, url_prefix="/api")

    @sources_bp.route("/sources", methods=["POST"])
    @validate()
    def add_source(body: IngestRequest) -> tuple[Response, int]:  # type: ignore
        """Chunk a source's text and add it to the index.

        Args:
            body: Validated request body

        Returns:
            Response with the number of chunks created
        """
        logger.info(f"Ingesting source '{body.source_tag}' ({len(body.text)} characters)")

        chunk_count = retrieval_service.ingest(
            body.source_tag,
            body.text,
            chunk_size=body.chunk_size,
            chunk_overlap=body.chunk_overlap,
        )

        response = IngestResponseModel(
            source_tag=body.source_tag, chunk_count=chunk_count
        )
        return jsonify(response.model_dump()), 201

    @sources_bp.route("/sources/<path:source_tag>", methods=["DELETE"])
    def delete_source(source_tag: str) -> tuple[str, int]:
        """Remove every chunk of a source. Unknown sources are not an error."""
        retrieval_service.remove(source_tag)
        return "", 204

    return sources_bp
