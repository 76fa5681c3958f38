"""Shared logging helpers for showscout."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Libraries that log every request at INFO.
NOISY_LOGGERS = ("httpx", "httpcore", "hishel", "uvicorn.access")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once with a terse CLI format.

    Per-request chatter from the HTTP stack stays at WARNING unless ``level`` asks
    for DEBUG. Pass ``force=True`` to reconfigure an already configured root
    logger, as ``--verbose`` does.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    library_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)
