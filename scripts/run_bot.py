#!/usr/bin/env python3
"""
Run the barcode bot HTTP server (Slack slash commands + keep-alive).

Slack must be able to reach <public url><commands_path>; see
scripts/print_slack_manifest.py for the matching app manifest.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn  # noqa: E402
from dotenv import load_dotenv  # noqa: E402

from barcode_bot.api.main import create_app  # noqa: E402
from barcode_bot.utils.config_loader import load_bot_config  # noqa: E402

load_dotenv()


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the barcode bot server")
    parser.add_argument("--config", type=Path, default=None, help="Path to bot_config.yml")
    parser.add_argument("--host", default=None, help="Override server.host")
    parser.add_argument("--port", type=int, default=None, help="Override server.port")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    setup_logging(args.verbose)
    logger = logging.getLogger("run_bot")

    try:
        cfg = load_bot_config(args.config)
    except FileNotFoundError as e:
        logger.error("%s", e)
        return 1

    host = args.host or cfg.server.host
    port = args.port or cfg.server.port
    logger.info("Keep-alive server starting on %s:%s", host, port)
    uvicorn.run(create_app(cfg), host=host, port=port, log_level="debug" if args.verbose else "info")
    return 0


if __name__ == "__main__":
    sys.exit(main())
