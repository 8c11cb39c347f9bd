"""
Time Server entry point.

Usage:
    python -m timeserver [--conf_file config.yaml] [--timezones_file timezones.dat]
"""

import argparse
import logging
from typing import List, Optional

from .app import create_app
from .config import DEFAULT_CONFIG_FILE, load_configuration
from .logs import LOG_FORMAT, configure_logging
from .routes import API_TREE, compile_routes
from .timezones import load_timezone_names

# Console logging until the configured handlers are installed
logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="timeserver",
        description="Date/time and timezone conversion HTTP service",
    )
    parser.add_argument(
        "--conf_file",
        default=DEFAULT_CONFIG_FILE,
        help="Configuration file name",
    )
    parser.add_argument(
        "--timezones_file",
        default=None,
        help="File with supported timezone names, one per line",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    import uvicorn

    args = parse_args(argv)
    config = load_configuration(args.conf_file)
    configure_logging(config.logging)

    app = create_app(
        config,
        routes=compile_routes(API_TREE),
        timezones=load_timezone_names(args.timezones_file),
    )

    logger.info(f"Starting Time Server on {config.web.netintf}:{config.web.port}")
    # log_config=None keeps uvicorn's loggers on our handlers; a failed
    # bind makes uvicorn exit with status 1
    uvicorn.run(
        app,
        host=config.web.netintf,
        port=config.web.port,
        log_level="info",
        log_config=None,
    )


if __name__ == "__main__":
    main()
