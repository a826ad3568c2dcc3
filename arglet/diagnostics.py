"""
Arglet diagnostics: logging setup for hosts and tests.

Library modules log through logging.getLogger(__name__) and never install
handlers themselves (the package root only attaches a NullHandler). Hosts that
want to watch registrations and token classification call configure_logging().
"""
import logging
import os

from rich.logging import RichHandler

_DEFAULT_FORMAT = "%(name)s | %(message)s"


def configure_logging(level=None, /):
    """
    Route the "arglet" logger to a rich handler on stderr (idempotent).

    The level comes from `level`, then the ARGLET_LOG_LEVEL environment
    variable, then WARNING. Unknown level names fall back to WARNING.
    """
    name = (level or os.environ.get("ARGLET_LOG_LEVEL") or "WARNING").upper()
    logger = logging.getLogger("arglet")
    if not isinstance(value := getattr(logging, name, None), int):
        value = logging.WARNING
    logger.setLevel(value)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(show_path=False)
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
        logger.addHandler(handler)
    return logger


__all__ = (
    "configure_logging",
)
