"""Core API setup and configuration.

This module configures API middleware, error handling, and other global API components.
"""

import logging

from flask import Flask

from notex.src.api.endpoints import register_endpoints
from notex.src.api.middleware import register_middleware
from notex.src.services import RetrievalService

logger = logging.getLogger(__name__)


def setup_api(app: Flask, retrieval_service: RetrievalService) -> None:
    """Set up API with middleware and endpoints.

    Args:
        app: Flask application
        retrieval_service: Service for ingestion and retrieval operations
    """
    register_middleware(app)
    register_endpoints(app, retrieval_service)
