"""
Logging utilities.

Provides structured JSON logging for service level events and the
process wide logging setup.
"""

import json
import logging
import sys
from datetime import datetime
from typing import Any


def configure_logging(level: int = logging.INFO) -> None:
    """Set up the root logger once with a console handler."""
    root = logging.getLogger()
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        root.addHandler(handler)


class StructuredLogger:
    """Logger that emits one JSON object per event."""

    def __init__(self, name: str):
        """
        Initialize structured logger.

        Args:
            name: Logger name; records propagate to the root handlers
        """
        self.logger = logging.getLogger(name)

    def _log_structured(self, level: int, event: str, **fields: Any):
        """
        Log a structured message.

        Args:
            level: Logging level
            event: Event name
            **fields: Additional structured data
        """
        if not self.logger.isEnabledFor(level):
            return
        payload = {
            "timestamp": datetime.utcnow().isoformat(),
            "level": logging.getLevelName(level),
            "event": event,
            "service": self.logger.name,
        }
        payload.update(fields)
        self.logger.log(level, json.dumps(payload, default=str))

    def debug(self, event: str, **fields: Any):
        self._log_structured(logging.DEBUG, event, **fields)

    def info(self, event: str, **fields: Any):
        self._log_structured(logging.INFO, event, **fields)

    def warning(self, event: str, **fields: Any):
        self._log_structured(logging.WARNING, event, **fields)

    def error(self, event: str, **fields: Any):
        self._log_structured(logging.ERROR, event, **fields)


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger.

    Args:
        name: Name of the service or module

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(name)
