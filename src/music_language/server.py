#!/usr/bin/env python3
"""
Entry point for the Music Language MCP Server.

Supports stdio and http transports. Compile settings come from a YAML
file given with --config, or music_language.yaml in the working directory.
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

from pydantic import ValidationError

from music_language.constants import SETTINGS_ENV_VAR
from music_language.models import load_settings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Command line options for the server."""
    parser = argparse.ArgumentParser(description="Music Language MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML file with compile settings (default: ./music_language.yaml)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Validate the compile settings and exit",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point with transport detection."""
    args = build_parser().parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.config is not None:
        if not args.config.exists():
            logger.error(f"Settings file not found: {args.config}")
            sys.exit(2)
        os.environ[SETTINGS_ENV_VAR] = str(args.config)

    try:
        settings = load_settings(args.config)
    except ValidationError as e:
        logger.error(f"Invalid settings: {e}")
        sys.exit(2)

    if args.check:
        print(settings.to_yaml(), end="")
        return

    # Import after settings are resolved so the server picks them up
    from music_language.async_server import mcp

    if args.transport == "stdio":
        logger.info("Starting Music Language MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting Music Language MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
