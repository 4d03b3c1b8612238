"""
Logging configuration for the trading loop.

One line per event on stdout: activation scores per tick, propagate
targets, decisions, every BUY/SELL order, training progress, snapshot
reads and writes, and discarded ticks. Raw feed payloads are not logged.
Logging must not change program behavior.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Per-statement SQL echo and redis connection chatter drown the per-tick lines.
QUIET_LOGGERS = ("sqlalchemy.engine", "redis")


def configure_logging(level: str = "INFO") -> None:
    """Install the stdout handler for the whole process.

    Args:
        level: DEBUG, INFO, WARNING or ERROR. Unknown names fall back to INFO.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
