"""Root logger setup from ``LOG_LEVEL`` / ``LOG_FILE`` settings."""

import logging
import os
from typing import List, Optional

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_configured = False


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure the root logger once per process.

    Always logs to stderr; also appends to *log_file* when given
    (parent directories are created).
    """
    global _configured
    if _configured:
        return

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )
    _configured = True
