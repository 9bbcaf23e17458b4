"""
Logging utilities for command-line runs and for forwarding log messages
to a UI callback.
"""
from __future__ import annotations

import logging
import sys
from typing import Callable, Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


class CallbackLogHandler(logging.Handler):
    """
    A logging handler that passes formatted messages to a callback.

    Used to surface library warnings (skipped assets, batch failures) in
    whatever UI hosts the editor or composer.
    """

    def __init__(self, callback: Callable[[str, str], None], level: int = logging.INFO):
        super().__init__(level)
        self.callback = callback
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            level = record.levelname
            # Map DEBUG to INFO for display
            if level == "DEBUG":
                level = "INFO"
            self.callback(message, level)
        except Exception:
            self.handleError(record)


def attach_callback_handler(
    callback: Callable[[str, str], None],
    logger_name: Optional[str] = "formstamp",
    level: int = logging.INFO,
) -> CallbackLogHandler:
    """
    Attach a CallbackLogHandler to the specified logger.

    Args:
        callback: Receives (message, level name)
        logger_name: Name of logger to attach to. None = root logger.
        level: Minimum level forwarded

    Returns:
        The attached handler (for later removal).
    """
    handler = CallbackLogHandler(callback, level)
    logging.getLogger(logger_name).addHandler(handler)
    return handler


def detach_callback_handler(handler: CallbackLogHandler, logger_name: Optional[str] = "formstamp") -> None:
    """Remove a handler added by attach_callback_handler()."""
    logging.getLogger(logger_name).removeHandler(handler)


def configure_logging(verbose: bool = False) -> None:
    """
    Configure root logging for command-line use.

    Args:
        verbose: Log DEBUG messages (skipped fields, absent values)
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
