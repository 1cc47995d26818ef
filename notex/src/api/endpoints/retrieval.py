"""Retrieval endpoints module.

This module provides Flask routes for search, context assembly and health
reporting without LLM processing.
"""

import logging
import time
from typing import Any, Dict, List, Optional

from flask import Blueprint, Response, jsonify
from flask_pydantic import validate  # type: ignore
from pydantic import BaseModel, Field

from notex.conf.config import Config
from notex.src.services import RetrievalService

logger = logging.getLogger(__name__)


# Schema definitions
class SearchRequest(BaseModel):
    """Search request model for validation."""

    query: str = Field(..., description="User's query for retrieval")
    limit: Optional[int] = Field(
        None, description="Maximum number of chunks; non-positive values mean 5"
    )


class SearchResponseModel(BaseModel):
    """Search response model."""

    hits: List[Dict[str, Any]] = Field(
        default_factory=list, description="Ranked chunks with source and score"
    )


class ContextResponseModel(BaseModel):
    """Context assembly response model."""

    context: str = Field("", description="Grounding context for the chat prompt")
    sources: List[str] = Field(
        default_factory=list, description="Distinct source tags used in the context"
    )


class HealthResponseModel(BaseModel):
    """Health check response model."""

    status: str = Field("ok", description="Service status")
    version: str = Field(..., description="Service version")
    timestamp: int = Field(..., description="Unix timestamp of the check")
    index: Dict[str, Any] = Field(
        default_factory=dict, description="Chunk index statistics"
    )


def init_retrieval_routes(retrieval_service: RetrievalService) -> Blueprint:
    """Initialize retrieval routes with the provided services.

    Args:
        retrieval_service: Service for retrieval operations.

    Returns:
        Blueprint: Flask blueprint with configured retrieval routes.
    """
    retrieval_bp = Blueprint("retrieval", __name__, url_prefix="/api")

    @retrieval_bp.route("/search", methods=["POST"])
    @validate()
    def search(body: SearchRequest) -> tuple[Response, int]:  # type: ignore
        """Endpoint that ranks indexed chunks against a query.

        Args:
            body: Validated request body

        Returns:
            Response with ranked hits
        """
        hits = retrieval_service.search(body.query, body.limit)
        response = SearchResponseModel(hits=[hit.to_json() for hit in hits])
        return jsonify(response.model_dump()), 200

    @retrieval_bp.route("/context", methods=["POST"])
    @validate()
    def context(body: SearchRequest) -> tuple[Response, int]:  # type: ignore
        """Endpoint that renders retrieved chunks as chat prompt context.

        Args:
            body: Validated request body

        Returns:
            Response with the context string and the sources it draws on
        """
        context_text, hits = retrieval_service.build_context(body.query, body.limit)
        response = ContextResponseModel(
            context=context_text,
            sources=RetrievalService.unique_sources(hits),
        )
        return jsonify(response.model_dump()), 200

    @retrieval_bp.route("/health", methods=["GET"])
    def health() -> tuple[Response, int]:
        """Health check endpoint reporting index statistics."""
        response = HealthResponseModel(
            status="ok",
            version=Config.VERSION,
            timestamp=int(time.time()),
            index=retrieval_service.stats().to_json(),
        )
        return jsonify(response.model_dump()), 200

    return retrieval_bp
