"""
Logging setup for the directory service.

Two output formats: a console-friendly one for local work and one JSON
object per line for log aggregators (``LOG_FORMAT=json``).  Modules log
through ``logging.getLogger(__name__)``, which places them under the
``broker_directory`` logger configured here.
"""
import json
import logging
import sys
from datetime import datetime, timezone

LOGGER_NAME = "broker_directory"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    def __init__(self):
        super().__init__(self.FORMAT, datefmt="%H:%M:%S")


def setup_logging(level: str = "INFO", json_format: bool = False) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # create_app may run more than once (tests, per-function hosts)
    logger.handlers.clear()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if json_format else ConsoleFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger
