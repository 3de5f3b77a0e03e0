"""Logging for hostpub: rich console lines plus an optional log file.

Every module logs through get_logger(__name__). Loggers live under the
"hostpub" namespace, so the CLI switches verbosity and attaches the file
handler in one place.
"""
import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

console = Console()

NAMESPACE = "hostpub"
LOG_FILE = Path("/var/log/hostpub/hostpub.log")
FALLBACK_LOG_FILE = Path("/tmp/hostpub.log")

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

_file_handler: Optional[logging.FileHandler] = None


def _level(verbose: bool) -> int:
    return logging.DEBUG if verbose else logging.INFO


def _console_handler() -> RichHandler:
    handler = RichHandler(console=console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def _writable_target(log_file: Optional[Union[str, Path]]) -> Path:
    """Pick the log file, or the /tmp fallback when its directory can't be created."""
    target = Path(log_file) if log_file else LOG_FILE
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except PermissionError:
        return FALLBACK_LOG_FILE
    return target


def setup_file_logging(log_file: Optional[Union[str, Path]] = None, verbose: bool = False) -> Path:
    """Mirror hostpub log records into a file.

    Only the first call attaches a handler; later calls return its path.

    Args:
        log_file: Destination, defaults to /var/log/hostpub/hostpub.log
        verbose: Record debug messages too

    Returns:
        Path of the file being written
    """
    global _file_handler

    if _file_handler is not None:
        return Path(_file_handler.baseFilename)

    target = _writable_target(log_file)
    _file_handler = logging.FileHandler(target)
    _file_handler.setLevel(_level(verbose))
    _file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    package_logger = logging.getLogger(NAMESPACE)
    package_logger.addHandler(_file_handler)
    package_logger.setLevel(_level(verbose))
    package_logger.info(f"Writing hostpub log to {target}")
    return target


def set_verbose(verbose: bool = True) -> None:
    """Move the package logger and every module logger to debug (or info)."""
    level = _level(verbose)
    logging.getLogger(NAMESPACE).setLevel(level)
    for name, candidate in logging.root.manager.loggerDict.items():
        if name.startswith(NAMESPACE + ".") and isinstance(candidate, logging.Logger):
            candidate.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a hostpub module, printing through the shared console."""
    logger = logging.getLogger(name)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(_console_handler())
        logger.setLevel(logging.INFO)
    return logger
