"""
Logging setup shared by all sidecal modules.
"""

import logging
import sys

_ROOT_LOGGER_NAME = "sidecal"
_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _configure_root() -> logging.Logger:
    from sidecal.core.config import get_settings

    root = logging.getLogger(_ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
        root.setLevel(get_settings().LOG_LEVEL)
    return root


def setup_logger(name: str) -> logging.Logger:
    """Return a module logger under the configured ``sidecal`` hierarchy."""
    _configure_root()
    if name != _ROOT_LOGGER_NAME and not name.startswith(_ROOT_LOGGER_NAME + "."):
        name = f"{_ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
