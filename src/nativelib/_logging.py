# (c) 2025 Mario "Neo" Sieg. <mario.sieg.64@gmail.com>

import logging
import sys

LOGGER_NAME: str = 'nativelib'


def null_logger() -> logging.Logger:
    """A logger that discards everything and is not registered with the logging module."""
    logger = logging.Logger(LOGGER_NAME)
    logger.addHandler(logging.NullHandler())
    logger.propagate = False
    return logger


def configure_logging(*, verbose: bool) -> logging.Logger:
    """Configure the ``nativelib`` logger to write to stderr.

    :param verbose: Log at DEBUG instead of WARNING.
    :returns: Configured logger.
    """
    level: int = logging.DEBUG if verbose else logging.WARNING

    logger: logging.Logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    handler: logging.Handler = logging.StreamHandler(stream=sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter('%(name)s: %(levelname)s: %(message)s'))

    logger.handlers.clear()
    logger.addHandler(handler)
    return logger


def verbose_logger() -> logging.Logger:
    """The ``nativelib`` logger, configured for DEBUG output only if nobody attached handlers yet."""
    logger: logging.Logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger
    return configure_logging(verbose=True)
