#!/usr/bin/env python3
"""
Entry point for the Blink Actions server.

Serves Solana Actions metadata and unsigned transactions for stored blinks.

Usage:
    python main.py [--host HOST] [--port PORT] [--reload] [--log-level LEVEL]

Examples:
    python main.py                    # Start on the configured API_HOST:API_PORT
    python main.py --port 8080        # Override the port
    python main.py --reload           # Auto-reload for development
"""

import argparse
import logging
import os
import sys

import uvicorn

from blinks.api.server import create_app
from blinks.config import get_settings


def setup_logging(level: str = "INFO"):
    """Configure logging for the server."""
    log_handlers = [logging.StreamHandler(sys.stdout)]

    # Try to add file handler, but don't fail if we can't write to the file
    try:
        os.makedirs('logs', exist_ok=True)
        log_handlers.append(logging.FileHandler('logs/blinks.log', encoding='utf-8'))
    except (PermissionError, OSError) as e:
        # In containers, we might not have write permissions, so just log to stdout
        print(f"Warning: Could not create log file: {e}")

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=log_handlers
    )


app = create_app()


def main():
    """Main entry point for the application."""
    config = get_settings()

    parser = argparse.ArgumentParser(description="Blink Actions Server")
    parser.add_argument(
        "--host",
        default=config.api_host,
        help=f"Host to bind the server to (default: {config.api_host})"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=config.api_port,
        help=f"Port to bind the server to (default: {config.api_port})"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development"
    )
    parser.add_argument(
        "--log-level",
        default=config.log_level.lower(),
        choices=["debug", "info", "warning", "error", "critical"],
        help="Set the logging level"
    )

    args = parser.parse_args()

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    logger.info(f"Starting Blink Actions server on {args.host}:{args.port}")
    logger.info(f"  - Create blinks: POST http://{args.host}:{args.port}/api/blinks")
    logger.info(f"  - Actions: http://{args.host}:{args.port}/api/actions/{{id}}")
    logger.info(f"  - API documentation: http://{args.host}:{args.port}/docs")

    try:
        uvicorn.run(
            "main:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
            log_level=args.log_level,
            access_log=True
        )
    except KeyboardInterrupt:
        logger.info("🛑 Server stopped by user")
    except Exception as e:
        logger.error(f"❌ Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
