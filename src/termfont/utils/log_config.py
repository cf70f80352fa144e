"""
Centralised logging setup.
Every module does:  ``from termfont.utils.log_config import get_logger``
"""

from __future__ import annotations

import logging
from typing import Optional

import typer

_CONFIGURED = False

NOISY_LOGGERS = [
    "urllib3", "urllib3.connectionpool", "requests", "charset_normalizer",
]

_COLOURS = {
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "red",
}


class EchoHandler(logging.Handler):
    """Send records through ``typer.echo`` so they follow the active stderr."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            typer.secho(message, fg=_COLOURS.get(record.levelno), err=True)
        except Exception:
            self.handleError(record)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging once at startup."""
    global _CONFIGURED
    level = logging.DEBUG if verbose else logging.INFO
    logger = get_logger()
    logger.setLevel(level)
    if _CONFIGURED:
        return

    handler = EchoHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s │ %(levelname)-7s │ %(message)s", datefmt="%H:%M:%S")
    )
    logger.addHandler(handler)

    # silence chatty third-party loggers
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _CONFIGURED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a child logger.  Typical usage: ``log = get_logger(__name__)``."""
    return logging.getLogger(name or "termfont")
