"""
Structured Logger Backends

LoggerServiceBase composes a stdlib logger; each backend attaches its own
handler. Interceptors only ever see the base class, so backends are
interchangeable.
"""
import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Optional

from starter.core import settings

LOG_FORMAT = "%(asctime)s.%(msecs)03d [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _destination(handler: logging.Handler):
    """Log file path for file handlers, otherwise the stream written to."""
    path = getattr(handler, "baseFilename", None)
    if path is not None:
        return path
    return getattr(handler, "stream", None)


class LoggerServiceBase:
    """
    Base class for structured aspect loggers.
    Subclasses configure the handler; messages are already serialized.
    """

    def __init__(self, logger_name: str, handler: Optional[logging.Handler] = None):
        self._logger = logging.getLogger(logger_name)
        self._logger.setLevel(logging.DEBUG)
        self._logger.propagate = False
        if handler is not None and not self._has_equivalent_handler(handler):
            handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
            self._logger.addHandler(handler)

    def _has_equivalent_handler(self, handler: logging.Handler) -> bool:
        target = _destination(handler)
        for existing in self._logger.handlers:
            if type(existing) is type(handler) and _destination(existing) == target:
                handler.close()
                return True
        return False

    def debug(self, message: str):
        self._logger.debug(message)

    def info(self, message: str):
        self._logger.info(message)

    def warning(self, message: str):
        self._logger.warning(message)

    def error(self, message: str):
        self._logger.error(message)

    def critical(self, message: str):
        self._logger.critical(message)


class FileLogger(LoggerServiceBase):
    """
    Writes to {LOG_FOLDER_PATH}/{yyyy-mm-dd}.txt with a size limit and a
    single retained backup file.
    """

    def __init__(
        self,
        folder_path: Optional[str] = None,
        size_limit_bytes: Optional[int] = None,
        retained_file_count: Optional[int] = None,
    ):
        folder = folder_path or settings.LOG_FOLDER_PATH
        if not folder:
            raise ValueError("FileLogger needs a folder path (LOG_FOLDER_PATH)")
        os.makedirs(folder, exist_ok=True)
        self.log_file_path = os.path.join(folder, f"{datetime.now():%Y-%m-%d}.txt")
        handler = RotatingFileHandler(
            self.log_file_path,
            maxBytes=size_limit_bytes or settings.LOG_FILE_SIZE_LIMIT_BYTES,
            backupCount=settings.LOG_RETAINED_FILE_COUNT if retained_file_count is None else retained_file_count,
            encoding="utf-8",
        )
        super().__init__(f"starter.structured.file.{os.path.abspath(folder)}", handler)


class ConsoleLogger(LoggerServiceBase):
    """Writes one serialized record per line to stdout (for log shippers)."""

    def __init__(self, stream=None):
        super().__init__("starter.structured.console", logging.StreamHandler(stream or sys.stdout))
