"""Logging for the KeywordsAI SDK.

Every module logs through a child of the ``keywordsai_sdk`` logger. Applications
that configure that logger themselves keep full control; otherwise a stderr
handler is attached lazily, at the level named by ``KEYWORDSAI_LOG_LEVEL``
(``WARNING`` when unset or unknown). Request traces are emitted at ``DEBUG``.
"""

import logging
import os
import sys
from typing import Mapping, Optional

SDK_LOGGER_NAME = "keywordsai_sdk"
LOG_LEVEL_ENV = "KEYWORDSAI_LOG_LEVEL"
DEFAULT_LOG_LEVEL = logging.WARNING
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_handler_installed = False


def resolve_log_level(environment: Optional[Mapping[str, str]] = None) -> int:
    if environment is None:
        environment = os.environ
    level_name = environment.get(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(level_name) if level_name else DEFAULT_LOG_LEVEL
    if not isinstance(level, int):
        return DEFAULT_LOG_LEVEL
    return level


def get_logger(module_name: str) -> logging.Logger:
    """Return the SDK logger of a module, e.g. ``keywordsai_sdk.http.client``.

    Args:
        module_name: Dotted module path relative to the package.

    Returns:
        logging.Logger: Child of the SDK logger.
    """
    global _handler_installed

    sdk_logger = logging.getLogger(SDK_LOGGER_NAME)
    if not _handler_installed and not sdk_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        sdk_logger.addHandler(handler)
        sdk_logger.setLevel(resolve_log_level())
        sdk_logger.propagate = False
        _handler_installed = True

    return sdk_logger.getChild(module_name)
