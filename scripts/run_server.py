#!/usr/bin/env python3
"""Run the word duel server."""

import argparse
import logging
import sys
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
load_dotenv(project_root / ".env")

from wordduel.engine import Variant
from wordduel.server import ServerConfig, load_config
from wordduel.server.app import create_app


def main():
    parser = argparse.ArgumentParser(
        description="Run the word duel server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Five words each, highest score after 20 turns wins
  python scripts/run_server.py

  # Classic one-word game with a six wrong-guess budget
  python scripts/run_server.py --variant single_word

  # Offline play without the dictionary service
  python scripts/run_server.py --validator static
        """
    )
    parser.add_argument("--host", default=None, help="Bind address (default: HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Port (default: PORT or 3001)")
    parser.add_argument("--variant", choices=[v.value for v in Variant], default=None,
                        help="Rule variant (default: WORDDUEL_VARIANT or multi_word)")
    parser.add_argument("--validator", choices=["dictionary", "static"], default=None,
                        help="Word validator (default: WORDDUEL_VALIDATOR or dictionary)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for active word draws")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    overrides = {
        "host": args.host,
        "port": args.port,
        "variant": Variant(args.variant) if args.variant else None,
        "validator": args.validator,
        "seed": args.seed,
    }
    config = load_config()
    update = {k: v for k, v in overrides.items() if v is not None}
    config = ServerConfig.model_validate({**config.model_dump(), **update})

    logging.getLogger("wordduel").info(
        "Starting %s duel for %s on %s:%s",
        config.variant.value, " and ".join(config.identities), config.host, config.port,
    )
    uvicorn.run(create_app(config), host=config.host, port=config.port)


if __name__ == "__main__":
    main()
