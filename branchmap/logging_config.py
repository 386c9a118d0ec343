"""Logging configuration for the command-line interface."""

import logging
import os

_CONFIGURED = False


def configure_logging(level: int | None = None) -> None:
    """Configure stderr logging once.

    Args:
        level: Verbosity: 0 silent, 1 INFO, 2 or more DEBUG. Defaults to
            the BRANCHMAP_LOG_LEVEL environment variable.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    if level is None:
        level = _read_level(os.getenv("BRANCHMAP_LOG_LEVEL", "0"))

    if level is None or level <= 0:
        # Silent mode; leave handlers to the caller.
        _CONFIGURED = True
        return

    logging.basicConfig(
        level=_map_level(level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _CONFIGURED = True


def _read_level(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        return None


def _map_level(level: int) -> int:
    if level >= 2:
        return logging.DEBUG
    return logging.INFO
