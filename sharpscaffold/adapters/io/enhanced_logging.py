"""
Logging setup with Rich integration.

This module installs a single RichHandler on the root logger and maps the
CLI verbosity flags onto log levels. Library code never configures logging;
it only calls ``logging.getLogger(__name__)``.
"""

import logging
import os
import threading

from rich.console import Console
from rich.logging import RichHandler

from .rich_cli import SHARPSCAFFOLD_THEME

_ROOT_NAME = "sharpscaffold"


class LoggerManager:
    """Configures the root logger exactly once per process."""

    _console: Console | None = None
    _handler: RichHandler | None = None
    _setup_complete: bool = False
    _setup_lock: threading.Lock = threading.Lock()

    @classmethod
    def setup_global_logging(
        cls, console: Console | None = None, level: int = logging.INFO
    ) -> None:
        """Set up global logging configuration with thread safety."""
        with cls._setup_lock:
            if cls._setup_complete:
                logging.getLogger().setLevel(level)
                return

            cls._console = console or Console(theme=SHARPSCAFFOLD_THEME, stderr=True)
            root_logger = logging.getLogger()

            # Replace foreign RichHandlers, keep everything else (e.g. pytest's caplog)
            for handler in list(root_logger.handlers):
                if isinstance(handler, RichHandler):
                    root_logger.removeHandler(handler)

            cls._handler = RichHandler(
                console=cls._console,
                show_time=True,
                show_path=False,
                markup=False,
                rich_tracebacks=True,
            )
            cls._handler.setFormatter(logging.Formatter(fmt="%(message)s"))
            root_logger.addHandler(cls._handler)
            root_logger.setLevel(level)
            cls._setup_complete = True

    @classmethod
    def set_log_level(
        cls,
        verbose: bool = False,
        quiet: bool = False,
        suppress_modules: list[str] | None = None,
    ) -> int:
        """Configure the root level: quiet wins over verbose, INFO otherwise."""
        if quiet or os.getenv("SHARPSCAFFOLD_QUIET", "").lower() in {"1", "true", "yes"}:
            level = logging.WARNING
        elif verbose:
            level = logging.DEBUG
        else:
            level = logging.INFO

        logging.getLogger().setLevel(level)

        # Third-party chatter stays at WARNING unless the user asked for everything
        for module in suppress_modules or []:
            logging.getLogger(module).setLevel(
                logging.DEBUG if verbose else logging.WARNING
            )
        return level

    @classmethod
    def reset(cls) -> None:
        """Remove the installed handler; used by tests."""
        with cls._setup_lock:
            if cls._handler is not None:
                logging.getLogger().removeHandler(cls._handler)
            cls._handler = None
            cls._console = None
            cls._setup_complete = False


def setup_enhanced_logging(
    console: Console | None = None, level: int = logging.INFO
) -> logging.Logger:
    """Install the Rich handler and return the package logger."""
    LoggerManager.setup_global_logging(console, level)
    return logging.getLogger(_ROOT_NAME)


def get_operation_logger(operation: str) -> logging.Logger:
    """Return a logger scoped to a CLI operation, e.g. ``sharpscaffold.generate``."""
    return logging.getLogger(f"{_ROOT_NAME}.{operation}")
