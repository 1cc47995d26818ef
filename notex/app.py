"""Flask application and command line entry point for the notex retrieval core."""

import argparse
import logging
import os
import sys
from typing import List, Optional

from flask import Flask
from flask_cors import CORS
from tqdm import tqdm

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from notex.conf.config import Config
from notex.src.api import setup_api
from notex.src.services import (
    ExtractionError,
    RetrievalService,
    create_document_extractor,
    create_retrieval_service,
)

# Logging is configured in notex/__init__.py
logger = logging.getLogger(__name__)


def create_app(retrieval_service: Optional[RetrievalService] = None) -> Flask:
    """Create and configure the Flask application around a retrieval service."""
    logger.info("Starting application setup...")

    app = Flask(__name__)
    CORS(app)

    if retrieval_service is None:
        retrieval_service = create_retrieval_service()
    logger.info(
        f"Retrieval service ready with {len(retrieval_service.get_sources())} indexed sources"
    )

    logger.info("Setting up API routes")
    setup_api(app, retrieval_service)
    logger.info("Application setup complete")
    return app


def ingest_files(
    retrieval_service: RetrievalService,
    paths: List[str],
    source_tag: Optional[str] = None,
) -> int:
    """Extract and ingest files, one source per file unless a tag is given.

    Files that cannot be extracted are logged and skipped.

    Returns:
        Total number of chunks added
    """
    extractor = create_document_extractor()
    total = 0
    for path in tqdm(paths, desc="Ingesting files", unit="file"):
        try:
            text = extractor.extract(path)
        except ExtractionError as e:
            logger.error(f"Skipping {path}: {str(e)}")
            continue
        total += retrieval_service.ingest(source_tag or os.path.basename(path), text)
    return total


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run notex with arguments (--server, --ingest, --source, --query, --limit, --version)"
    )
    parser.add_argument(
        "--server",
        action="store_true",
        help="Run the HTTP API server",
    )
    parser.add_argument(
        "--ingest",
        nargs="+",
        metavar="PATH",
        help="Files to extract and index",
    )
    parser.add_argument(
        "--source",
        type=str,
        help="Source tag for ingested files (default: the file name)",
    )
    parser.add_argument(
        "--query",
        type=str,
        help="Query to run against the indexed files",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=Config.MAX_SOURCES,
        help=f"Maximum number of chunks to print (default: {Config.MAX_SOURCES})",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"notex {Config.VERSION}",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    retrieval_service = create_retrieval_service()

    if args.ingest:
        added = ingest_files(retrieval_service, args.ingest, args.source)
        logger.info(f"Indexed {added} chunks from {len(args.ingest)} files")

    if args.query is not None:
        for hit in retrieval_service.search(args.query, args.limit):
            print(
                f"[{hit.score:.2f}] {hit.source_tag}#{hit.chunk.ordinal}: {hit.text}"
            )

    if args.server:
        app = create_app(retrieval_service)
        app.run(host=Config.SERVER_HOST, port=Config.SERVER_PORT)
    elif not args.ingest and args.query is None:
        build_parser().print_help()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
