"""Logger access for EggsML modules.

Every logger lives under the ``eggsml`` namespace, so parser and wrap
tracing can be switched on with a single call::

    logging.getLogger("eggsml").setLevel(logging.DEBUG)

No handlers are installed here; where records go is up to the application.
"""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "eggsml"


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` inside the eggsml namespace.

    Example:
        >>> get_logger("mymodule").name
        'eggsml.mymodule'
        >>> get_logger("eggsml.parser").name
        'eggsml.parser'
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(ROOT_LOGGER_NAME).getChild(name)
