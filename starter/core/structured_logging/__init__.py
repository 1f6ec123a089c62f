"""
Structured Logging

Serialized log records and the interchangeable backends that receive them.
"""

from .log_detail import LogParameter, LogRecord
from .logger_service import ConsoleLogger, FileLogger, LoggerServiceBase

__all__ = [
    "LogParameter",
    "LogRecord",
    "LoggerServiceBase",
    "FileLogger",
    "ConsoleLogger",
]
