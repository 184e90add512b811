"""
Logging setup for scroll.

The terminal is owned by curses while the pager runs, so records go to a
log file in the config directory rather than to the console.
"""

import logging

import config_paths

SCROLL = "scroll"

_file_handler = None


def _get_file_handler():
    """Create the shared file handler once; fall back to a NullHandler."""
    global _file_handler
    if _file_handler is None:
        try:
            config_paths.ensure_config_dirs()
            handler = logging.FileHandler(config_paths.LOG_PATH, encoding="utf-8")
        except OSError:
            handler = logging.NullHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        _file_handler = handler
    return _file_handler


def configure(level=config_paths.LOG_LEVEL_DEFAULT):
    """Attach the file handler to the root ``scroll`` logger at ``level``."""
    root = logging.getLogger(SCROLL)
    root.setLevel(getattr(logging, str(level).upper(), logging.WARNING))
    handler = _get_file_handler()
    if handler not in root.handlers:
        root.addHandler(handler)
    root.propagate = False
    return root


def setup_logger(logger_name=None):
    """Return a child of the ``scroll`` logger.

    Args:
        logger_name (str, optional): Component name, e.g. ``"line_feed"``.

    Returns:
        logging.Logger: The logger; it inherits handlers and level from
        the ``scroll`` logger configured by :func:`configure`.
    """
    if not logger_name:
        return logging.getLogger(SCROLL)
    return logging.getLogger(f"{SCROLL}.{logger_name}")
