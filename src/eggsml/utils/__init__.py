"""Utility modules for EggsML.

Provides:
- logger: get_logger, namespacing every logger under ``eggsml``
"""

from eggsml.utils.logger import ROOT_LOGGER_NAME, get_logger

__all__ = [
    "ROOT_LOGGER_NAME",
    "get_logger",
]
