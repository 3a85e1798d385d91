"""Process-wide logging configuration for the command line."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Send stockdash logs to stderr; DEBUG when *verbose*, else WARNING."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
    logging.getLogger("stockdash").setLevel(level)
