"""Logger lookup for notemark modules.

Every module logs through ``get_logger(__name__)`` so that applications can
tune the whole library with the single ``notemark`` logger. The library
never adds handlers.

Example:
    >>> from notemark.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Parsed block")
"""

from __future__ import annotations

import logging

_ROOT = "notemark"


def get_logger(name: str) -> logging.Logger:
    """Return the stdlib logger for ``name`` under the ``notemark`` tree.

    Names already inside the package are used as they are; anything else
    is nested under ``notemark.``.

    Example:
        >>> get_logger("exporter").name
        'notemark.exporter'
    """
    if name != _ROOT and not name.startswith(_ROOT + "."):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
