"""
Core package for the notex service.

This package contains the main application logic:
- Data classes for chunks, search hits and index statistics
- Services for chunking, indexing, retrieval and document extraction
- API routes and middleware
"""
