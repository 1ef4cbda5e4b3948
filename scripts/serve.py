#!/usr/bin/env python3
"""
Start the LayerProof HTTP API.
"""

import argparse

import uvicorn

from layerproof.api import create_app
from layerproof.config import load_settings, load_settings_file
from layerproof.utils import setup_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="Serve the grammar-check API.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--config", default=None, help="Optional settings YAML")
    args = parser.parse_args()

    settings = load_settings_file(args.config) if args.config else load_settings()
    setup_logging(settings.log_level)

    app = create_app(settings)
    print(f"Starting LayerProof API on {args.host}:{args.port}")
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
