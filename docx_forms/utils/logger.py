"""Central logging configuration for the generation engine."""
from __future__ import annotations

import logging
from typing import Optional

_DEFAULT_LEVEL = logging.INFO
_DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_ROOT_NAME = "docx_forms"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the package namespace, configuring the root once."""
    if not logging.getLogger().handlers:
        logging.basicConfig(level=_DEFAULT_LEVEL, format=_DEFAULT_FORMAT)
    if name is None or name == "__main__":
        return logging.getLogger(_ROOT_NAME)
    return logging.getLogger(name)
