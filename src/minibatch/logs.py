import logging
import sys
from typing import IO, Optional

ROOT_LOGGER = "minibatch"
DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"

# Map string log levels to logging constants
LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def parse_level(level: str) -> int:
    """Turn 'info' / 'INFO' into logging.INFO; unknown names raise ValueError."""
    try:
        return LOG_LEVELS[level.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown log level {level!r}. Expected one of: {', '.join(LOG_LEVELS)}"
        ) from None


def get_logger(name: str) -> logging.Logger:
    """Return a logger with the specified name.

    Args:
        name: The name for the logger, typically __name__

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def configure_logging(
    level: int = DEFAULT_LOG_LEVEL,
    fmt: str = DEFAULT_FORMAT,
    verbose: bool = False,
    quiet: bool = False,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """Configure the package logger based on settings and command line flags.

    Args:
        level: Base level, usually from Settings.log_level
        fmt: logging.Formatter format string
        verbose: Force DEBUG
        quiet: Only warnings and errors (wins over verbose)
        stream: Where to write, stdout when None

    Returns:
        The configured package logger
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    # Clear existing handlers to avoid duplicate logs
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    # Don't propagate to root logger to avoid duplicate logging
    logger.propagate = False

    return logger
