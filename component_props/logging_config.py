"""Logging helpers shared by every module.

Library modules only ask for a logger; handlers are installed by the CLI
through :func:`configure_logging`.
"""

import logging
from typing import Dict

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "component_props"

_LOGGER_CACHE: Dict[str, logging.Logger] = {}


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Return a cached logger for ``name``."""
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]


def configure_logging(level: int | str = logging.WARNING, console: Console | None = None) -> None:
    """Install a rich handler on the package root logger.

    Calling it again replaces the previous handler instead of stacking a
    second one.

    Args:
        level: Logging level name or number.
        console: Console to log to (defaults to stderr).
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = get_logger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(level)
