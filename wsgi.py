#!/usr/bin/env python3
"""
Long-running backend server.

Usage:
    python wsgi.py                      # database storage on port 3000
    python wsgi.py --port 8000
    python wsgi.py --storage memory
"""

import argparse
import logging
import os

from components.backend import create_app
from components.config import get_site_config

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build_app(storage_backend: str = None):
    config = get_site_config()
    if storage_backend:
        config.update_section('backend', {'storage_backend': storage_backend})
    return create_app(config)


def main():
    parser = argparse.ArgumentParser(description="Run the monastery site backend")
    parser.add_argument("--host", default="0.0.0.0", help="Interface to bind")
    parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", 3000)), help="Port to listen on")
    parser.add_argument("--storage", choices=["memory", "database"],
                        default=os.environ.get("STORAGE_BACKEND", "database"),
                        help="Storage backend")
    args = parser.parse_args()

    app = build_app(args.storage)
    logger.info(f"Server running on port {args.port}")
    app.run(host=args.host, port=args.port)


if __name__ == "__main__":
    main()
