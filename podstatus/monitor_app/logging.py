import json
import logging
import sys
from typing import Optional, TextIO


class DetailsFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        details = getattr(record, "details", None)
        if details:
            message = f"{message} {json.dumps(details, default=str, sort_keys=True)}"
        return message


def create_logger(name: str, level: str = "WARNING", stream: Optional[TextIO] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level.upper())
    if logger.handlers:
        return logger
    # stderr keeps log lines out of the status stream on stdout
    handler = logging.StreamHandler(stream or sys.stderr)
    formatter = DetailsFormatter("%(asctime)s %(levelname)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
