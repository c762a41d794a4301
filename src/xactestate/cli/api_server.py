#!/usr/bin/env python
"""
Run the Xact Estate API with Flask's built-in server.

Command line options override the ``XACT_*`` environment settings for this
process only.

Usage:
    xact-api
    xact-api --port 8080 --debug
    xact-api --db data/xact.db --cors-origin https://xact.lu
"""

import argparse
import os
import sys

from xactestate.config import get_config, reset_config
from xactestate.logging_config import get_logger, setup_logging

# CLI option -> environment variable it overrides
ENV_OVERRIDES = {
    "db": "XACT_DB_PATH",
    "cors_origin": "XACT_CORS_ORIGINS",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xact-api",
        description="Serve the Xact Estate JSON API",
    )
    parser.add_argument("--host", help="Interface to bind (default: XACT_API_HOST or 127.0.0.1)")
    parser.add_argument("--port", type=int, help="Port to bind (default: XACT_API_PORT or 5000)")
    parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    parser.add_argument("--db", help="SQLite database path (default: XACT_DB_PATH)")
    parser.add_argument(
        "--cors-origin",
        action="append",
        help="Allowed CORS origin; repeat for several (default: XACT_CORS_ORIGINS)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: XACT_LOG_LEVEL)",
    )
    return parser


def apply_overrides(args: argparse.Namespace) -> None:
    """Push CLI options into the environment and reload the config."""
    for option, env_name in ENV_OVERRIDES.items():
        value = getattr(args, option)
        if not value:
            continue
        os.environ[env_name] = ",".join(value) if isinstance(value, list) else value
    reset_config()


def main(argv=None):
    """Entry point for ``xact-api``."""
    args = build_parser().parse_args(argv)
    apply_overrides(args)

    setup_logging(level=args.log_level, force=True)
    logger = get_logger(__name__)

    api = get_config().api
    host = args.host or api.host
    port = args.port or api.port
    debug = args.debug or api.debug
    logger.info("Serving on %s:%d (debug=%s, db=%s)", host, port, debug, get_config().database.path)

    from xactestate.api.server import run_server
    try:
        run_server(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except OSError as e:
        logger.error("Could not start server: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
