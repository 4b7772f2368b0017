"""Logging for Sprout: Rich console output plus an optional log file."""
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "sprout"
FILE_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

console = Console(stderr=True)


def _package_logger() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(console=console, show_path=False, show_time=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        root.setLevel(logging.INFO)
    return root


def get_logger(name: str) -> logging.Logger:
    """Return a module logger (typically ``get_logger(__name__)``).

    Module loggers carry no handlers of their own; records propagate to the
    ``sprout`` logger, which owns the single console handler.
    """
    _package_logger()
    return logging.getLogger(name)


def configure_logging(verbose: bool = False, log_file: Optional[str] = None) -> Optional[Path]:
    """Set the level for Sprout loggers and optionally mirror them to a file.

    Calling again replaces any file handler added by an earlier call.

    Args:
        verbose: Log DEBUG records (commands run, files written)
        log_file: Append records to this file; parent directories are created

    Returns:
        The log file in use, or None
    """
    root = _package_logger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)

    for handler in root.handlers[:]:
        if isinstance(handler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()

    if not log_file:
        return None

    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(path, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(file_handler)

    root.debug(f"Logging to {path}")
    return path
