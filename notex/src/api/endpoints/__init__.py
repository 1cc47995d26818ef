"""API endpoints package.

This package contains endpoint definitions for the API.
"""

from flask import Flask

from notex.src.api.endpoints.retrieval import init_retrieval_routes
from notex.src.api.endpoints.sources import init_source_routes
from notex.src.services import RetrievalService


def register_endpoints(app: Flask, retrieval_service: RetrievalService) -> None:
    """Register all API endpoints with the application.

    Args:
        app: Flask application
        retrieval_service: Service for ingestion and retrieval operations
    """
    app.register_blueprint(init_source_routes(retrieval_service))
    app.register_blueprint(init_retrieval_routes(retrieval_service))
