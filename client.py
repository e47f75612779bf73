"""CLI entry point that ships sample log lines to a GELF collector over UDP."""

import argparse
import logging
import random
import sys
import time

from gelf_udp.config import add_config_arguments, config_from_args
from gelf_udp.handler import build_gelf_handler

logger = logging.getLogger(__name__)

LEVELS = [logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL]
SAMPLE_MESSAGES = [
    "Application started successfully",
    "Processing user request",
    "Database query completed",
    "Cache miss for key: user_session",
    "Failed to connect to external API",
    "Disk usage above 90%",
    "Authentication token expired",
    "Request timeout after 30s",
    "New user registered",
    "Scheduled job completed",
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="GELF UDP Log Client")
    add_config_arguments(parser)
    parser.add_argument("--count", type=int, default=20, help="Number of logs to send")
    parser.add_argument("--interval", type=float, default=0.1, help="Seconds between logs")
    parser.add_argument("--padding", type=int, default=0,
                        help="Random bytes appended to each message, to force chunking")
    return parser


def send_sample_logs(gelf_logger: logging.Logger, count: int, interval: float, padding: int = 0):
    """Emit ``count`` random sample records through ``gelf_logger``."""
    for i in range(count):
        message = random.choice(SAMPLE_MESSAGES)
        if padding > 0:
            message += " " + random.randbytes(padding).hex()[:padding]
        gelf_logger.log(random.choice(LEVELS), message, extra={"sequence": i + 1})
        if interval > 0 and i < count - 1:
            time.sleep(interval)


def main(argv: list[str] | None = None):
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        stream=sys.stderr,
    )

    args = build_parser().parse_args(argv)
    config = config_from_args(args)

    handler = build_gelf_handler(config)
    gelf_logger = logging.getLogger("gelf.sample")
    gelf_logger.setLevel(logging.DEBUG)
    gelf_logger.propagate = False
    gelf_logger.addHandler(handler)

    logger.info(
        "Sending %d logs to %s (compression=%s)",
        args.count, config.address, config.compression,
    )
    try:
        send_sample_logs(gelf_logger, args.count, args.interval, args.padding)
        logger.info("Done. Stats: %s", handler.writer.metrics.snapshot())
    finally:
        gelf_logger.removeHandler(handler)
        handler.close()
    return handler.writer.metrics.snapshot()


if __name__ == "__main__":
    main()
