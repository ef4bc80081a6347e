import logging
import sys

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "none": logging.CRITICAL + 10,
}

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "info", stream=None) -> int:
    """Configure root logging for command-line use and return the numeric level.

    `none` silences every logger, including errors.
    """
    name = (level or "info").strip().lower()
    if name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level {level!r}; expected one of {', '.join(LOG_LEVELS)}")
    numeric = LOG_LEVELS[name]
    logging.basicConfig(level=numeric, stream=stream or sys.stderr, format=LOG_FORMAT, force=True)
    return numeric
