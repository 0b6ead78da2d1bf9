"""Run the gateway under uvicorn with the configured port and worker count."""
from __future__ import annotations

import argparse
import logging

import uvicorn

from image_gateway.config import get_settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve local and proxied images by size token")
    parser.add_argument("--host", default=None, help="Bind address (default: SERVER_HOST)")
    parser.add_argument("--port", type=int, default=None, help="Bind port (default: SERVER_START_PORT)")
    parser.add_argument("--workers", type=int, default=None, help="Worker processes (default: SERVER_WORKER_THREADS)")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    # Configure logging before settings are loaded so their startup summary is kept.
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level)

    host = args.host or settings.server_host
    port = args.port if args.port is not None else settings.server_start_port
    workers = args.workers if args.workers is not None else settings.server_worker_threads

    logger.info("Image gateway listening on %s:%d (workers=%s)", host, port, workers or "default")
    # An import string is required for uvicorn to spawn more than one worker.
    uvicorn.run(
        "image_gateway.main:app",
        host=host,
        port=port,
        workers=workers or None,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
