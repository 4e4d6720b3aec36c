"""Main entry point - logging setup and the API server."""

import logging
import sys

import uvicorn

from .config import settings

# Configure structured JSON logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
    datefmt="%Y-%m-%dT%H:%M:%S%z",
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Serve the trend snapshot API."""
    defaults = settings.snapshot_defaults
    logger.info("=" * 60)
    logger.info("Trend Pulse starting...")
    logger.info(f"Default geo: {defaults.geo}, depth: {defaults.limit} (max {defaults.max_limit})")
    logger.info(f"Upstream timeout: {settings.request_timeout}s")
    logger.info(f"Listening on {settings.host}:{settings.port}")
    logger.info("=" * 60)

    uvicorn.run(
        "trend_pulse.api:app",
        host=settings.host,
        port=settings.port,
        log_level="warning",
    )


def run():
    """Entry point for running the application."""
    try:
        main()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(0)


if __name__ == "__main__":
    run()
