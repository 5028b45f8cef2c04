#!/usr/bin/env python
"""
API Server Entry Point

Starts the Shoplab reports API with Uvicorn.
Usage:
    Development:  python run_server.py --dev
    Otherwise:    python run_server.py --port 8080
"""

import argparse

import uvicorn

from shoplab.config import get_settings


def run_dev_server(host: str, port: int):
    """Run development server with auto-reload."""
    uvicorn.run(
        "shoplab.main:app",
        host=host,
        port=port,
        reload=True,
        reload_dirs=["shoplab"],
        log_level="debug",
        access_log=True,
    )


def run_server(host: str, port: int):
    """Run server with Uvicorn directly."""
    uvicorn.run(
        "shoplab.main:app",
        host=host,
        port=port,
        log_level="info",
        access_log=True,
        server_header=False,
    )


if __name__ == "__main__":
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Shoplab API Server")
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Run in development mode with auto-reload"
    )
    parser.add_argument(
        "--host",
        default=settings.api_host,
        help=f"Host to bind (default: {settings.api_host})"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.api_port,
        help=f"Port to run on (default: {settings.api_port})"
    )

    args = parser.parse_args()

    if args.dev:
        print("Starting development server...")
        run_dev_server(args.host, args.port)
    else:
        print("Starting server...")
        run_server(args.host, args.port)
